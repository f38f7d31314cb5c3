"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from entryflow.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyEntryUnitOfWork,
    is_started,
    startup,
)
from entryflow.config.importer import get_importer_config
from entryflow.domain.entry_import import (
    CsvEntryBehavior,
    EntryImporter,
    RelationshipScheduler,
    TypeRegistry,
)
from entryflow.domain.import_run import ImportRunResult, run_import
from entryflow.domain.model import (
    DomainKind,
    DomainType,
    Entry,
    FieldMapping,
    ImporterRun,
)
from entryflow.domain.ports.unit_of_work import EntryUnitOfWork

if TYPE_CHECKING:
    from collections.abc import Iterable

    from entryflow.domain.model import ImporterConfig, RawRecord
    from entryflow.domain.ports import CollectionLookup, ObjectFactory, RelationshipQueue

UnitOfWorkFactory = Callable[[], EntryUnitOfWork]


log = getLogger(__name__)


def default_type_registry() -> TypeRegistry:
    """Registry with the generic ``Work`` and ``Collection`` types."""

    return TypeRegistry(
        (
            DomainType("Work"),
            DomainType("Collection", kind=DomainKind.COLLECTION),
        )
    )


def build_entries(
    records: Iterable[RawRecord],
    *,
    importer_config: ImporterConfig,
    field_mapping: FieldMapping,
    run: ImporterRun,
    user: object | None = None,
) -> list[Entry]:
    """Create one pending entry per raw record, all sharing ``run``."""

    return [
        Entry(
            raw_record=record,
            importer=importer_config,
            mapping=field_mapping,
            last_run=run,
            user=user,
        )
        for record in records
    ]


def import_csv_records(
    records: Iterable[RawRecord],
    *,
    object_factory: ObjectFactory,
    relationship_queue: RelationshipQueue,
    importer_config: ImporterConfig | None = None,
    field_mapping: FieldMapping | None = None,
    collection_lookup: CollectionLookup | None = None,
    types: TypeRegistry | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    user: object | None = None,
) -> ImportRunResult:
    """Import CSV records and store each entry's status using the configured adapters."""

    effective_config = importer_config or get_importer_config()
    effective_uow = unit_of_work_factory
    if effective_uow is None:
        if not is_started():
            startup()
        effective_uow = SqlAlchemyEntryUnitOfWork

    run = ImporterRun()
    entries = build_entries(
        records,
        importer_config=effective_config,
        field_mapping=field_mapping or FieldMapping(),
        run=run,
        user=user,
    )
    importer = EntryImporter(
        behavior=CsvEntryBehavior(collection_lookup=collection_lookup),
        object_factory=object_factory,
        scheduler=RelationshipScheduler(queue=relationship_queue),
        types=types or default_type_registry(),
    )
    log.info(
        "Starting CSV import: run=%s, entries=%s, validate_only=%s",
        run.id,
        len(entries),
        effective_config.validate_only,
    )

    result = run_import(entries, importer=importer, unit_of_work_factory=effective_uow)

    log.info(
        f"Finished CSV import: run={run.id}, complete={result.complete}, "
        f"failed={result.failed}, pending={result.pending}"
    )
    return result
