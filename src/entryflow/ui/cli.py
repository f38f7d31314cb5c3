from __future__ import annotations

import argparse
import csv
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from entryflow.adapters.celery_jobs import create_relationship_queue
from entryflow.adapters.memory import InMemoryObjectFactory, InMemoryRelationshipQueue
from entryflow.app import import_csv_records
from entryflow.common import configure_logging
from entryflow.config import get_importer_config, load_field_mapping_file

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from entryflow.domain.ports import RelationshipQueue

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Import entries from delimited files")
    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser(
        "check",
        help="Build every row of a CSV file against in-memory objects and record statuses",
    )
    check.add_argument("path", type=Path, help="CSV file with a header row")
    check.add_argument(
        "--mapping",
        type=Path,
        help="JSON field-mapping file (defaults to column names as fields)",
    )
    check.add_argument(
        "--validate-only",
        action="store_true",
        help="Only build and validate metadata; skip the collections check and persistence",
    )
    check.add_argument(
        "--enqueue-relationships",
        action="store_true",
        help="Publish relationship requests to the Celery broker in ENTRYFLOW_BROKER_URL",
    )
    return parser.parse_args(list(argv))


def _read_records(path: Path) -> list[dict[str, str]]:
    with path.open(newline="", encoding="utf-8-sig") as handle:
        return list(csv.DictReader(handle))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)

    try:
        records = _read_records(parsed_args.path)
        field_mapping = (
            load_field_mapping_file(parsed_args.mapping) if parsed_args.mapping else None
        )
        importer_config = (
            get_importer_config(validate_only=True)
            if parsed_args.validate_only
            else get_importer_config()
        )
        queue: RelationshipQueue = (
            create_relationship_queue()
            if parsed_args.enqueue_relationships
            else InMemoryRelationshipQueue()
        )
        result = import_csv_records(
            records,
            object_factory=InMemoryObjectFactory(),
            relationship_queue=queue,
            importer_config=importer_config,
            field_mapping=field_mapping,
        )
    except Exception:
        log.exception("Fatal error during import")
        sys.exit(1)

    log.info(
        "Checked %s: complete=%s, failed=%s, pending=%s",
        parsed_args.path,
        result.complete,
        result.failed,
        result.pending,
    )
    if result.failed:
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


if __name__ == "__main__":
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()
