import argparse
import sys
from pathlib import Path

from receipt_parser.config.settings import Settings
from receipt_parser.logging.logger import Log
from receipt_parser.persistence.factory import RecordStoreFactory
from receipt_parser.persistence.models import Credentials
from receipt_parser.processor.exceptions import ProcessorError
from receipt_parser.processor.file_loader import FileLoader
from receipt_parser.processor.models import PersistenceOutcome, ProcessingState
from receipt_parser.processor.observer import CompositeObserver, LoggingObserver, StateBoard
from receipt_parser.processor.orchestrator import build_orchestrator
from receipt_parser.processor.session import BatchSession


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="receipt-parser",
        description="Extract receipt data with AI and save it to a Notion database.",
    )
    parser.add_argument("images", nargs="+", type=Path, help="Receipt image files")
    parser.add_argument("--api-key", default=None, help="Notion API key (overrides NOTION_API_KEY)")
    parser.add_argument(
        "--database-id",
        default=None,
        help="Notion database id (overrides NOTION_DATABASE_ID)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point: load images -> build dependencies -> run one batch."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    credentials = Credentials(
        api_key=args.api_key if args.api_key is not None else settings.notion_api_key,
        database_id=(
            args.database_id if args.database_id is not None else settings.notion_database_id
        ),
    )
    board = StateBoard()

    try:
        items = FileLoader().load_all(args.images)
        with RecordStoreFactory.create(settings) as record_store:
            session = BatchSession(
                credentials,
                items,
                observer=CompositeObserver([board, LoggingObserver()]),
            )
            session.run(build_orchestrator(settings, record_store=record_store))
    except (ProcessorError, FileNotFoundError, ValueError) as exc:
        Log.error(str(exc))
        return 2

    for state in board.states:
        print(_summary_line(state))
    failed = any(s.persistence_outcome is PersistenceOutcome.FAILED for s in board.states)
    return 1 if failed else 0


def _summary_line(state: ProcessingState) -> str:
    if state.persistence_outcome is PersistenceOutcome.SUCCESS:
        return f"{state.id}\t{state.status_label}\t{state.stored_id}"
    return f"{state.id}\t{state.status_label}\t{state.error_message}"


if __name__ == "__main__":
    sys.exit(main())
