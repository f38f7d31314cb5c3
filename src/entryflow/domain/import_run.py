"""Application service for running entry imports in batch."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from entryflow.domain.errors import FATAL_ERRORS
from entryflow.domain.model import EntryStatus

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from entryflow.domain.entry_import import EntryImporter
    from entryflow.domain.model import Entry, ImporterRun
    from entryflow.domain.ports.factory import ObjectHandle
    from entryflow.domain.ports.unit_of_work import EntryUnitOfWork

log = logging.getLogger(__name__)


@dataclass(slots=True)
class ImportRunResult:
    """Outcome of an import run."""

    run: ImporterRun | None
    complete: int = 0
    failed: int = 0
    pending: int = 0
    handles: list[ObjectHandle] = field(default_factory=list["ObjectHandle"])

    @property
    def total(self) -> int:
        return self.complete + self.failed + self.pending


def run_import(
    entries: Iterable[Entry],
    *,
    importer: EntryImporter,
    unit_of_work_factory: Callable[[], EntryUnitOfWork] | None = None,
) -> ImportRunResult:
    """Build every entry in order and record its status.

    Entry failures are counted and the run continues. A fatal fault stops the run: the
    statuses recorded so far are committed, the fault propagates, and later entries
    stay ``Pending``.
    """

    batch = list(entries)
    result = ImportRunResult(run=batch[0].last_run if batch else None)
    log.info("Starting import run: entries=%d", len(batch))

    if unit_of_work_factory is None:
        _build_all(batch, importer, result, save=None)
    else:
        with unit_of_work_factory() as uow:
            repository = uow.repositories.entries
            try:
                _build_all(batch, importer, result, save=repository.save)
            except FATAL_ERRORS:
                uow.commit()
                raise
            uow.commit()

    log.info(
        "Finished import run: complete=%d, failed=%d, pending=%d",
        result.complete,
        result.failed,
        result.pending,
    )
    return result


def _build_all(
    batch: list[Entry],
    importer: EntryImporter,
    result: ImportRunResult,
    *,
    save: Callable[[Entry], None] | None,
) -> None:
    try:
        for entry in batch:
            handle = importer.build_for_importer(entry)
            if handle is not None:
                result.handles.append(handle)
            if save is not None:
                save(entry)
    except FATAL_ERRORS:
        _tally(batch, result)
        log.error("Import run halted with %d entries pending", result.pending)
        raise
    _tally(batch, result)


def _tally(batch: list[Entry], result: ImportRunResult) -> None:
    for entry in batch:
        if entry.status is EntryStatus.COMPLETE:
            result.complete += 1
        elif entry.status is EntryStatus.FAILED:
            result.failed += 1
        else:
            result.pending += 1
