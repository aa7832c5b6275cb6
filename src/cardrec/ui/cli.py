from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv

from cardrec.adapters.store import card_to_payload, merge_result_to_payload
from cardrec.app import disclose_card, reconcile_candidates, validate_candidates
from cardrec.config import ConfigurationError, configure_logging, get_engine_config
from cardrec.domain.reconciliation import MergeMode

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile and disclose identity cards")
    subparsers = parser.add_subparsers(dest="command", required=True)

    merge = subparsers.add_parser("merge", help="Merge same-type candidate cards")
    merge.add_argument(
        "candidates",
        type=Path,
        help="JSON file holding a list of candidate card rows",
    )
    merge.add_argument(
        "--field-path",
        dest="field_paths",
        action="append",
        help="Field path eligible for copy-through (repeatable; defaults by card type)",
    )
    merge.add_argument(
        "--per-field",
        action="store_true",
        help="Report conflicts per field path instead of per candidate",
    )
    merge.add_argument(
        "--normalize",
        action="store_true",
        help="Normalize candidates before merging",
    )

    disclose = subparsers.add_parser("disclose", help="Filter a card for an audience")
    disclose.add_argument("card", type=Path, help="JSON file holding one canonical card row")
    disclose.add_argument(
        "--audience",
        type=Path,
        required=True,
        help="JSON file holding the audience context",
    )

    validate = subparsers.add_parser("validate", help="Validate candidate cards")
    validate.add_argument(
        "candidates",
        type=Path,
        help="JSON file holding a card row or a list of card rows",
    )

    return parser.parse_args(list(argv))


def _load_json(path: Path) -> Any:
    try:
        with path.open(encoding="utf-8") as handle:
            return json.load(handle)
    except OSError as exc:
        raise ValueError(f"Cannot read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc


def _load_rows(path: Path) -> list[dict[str, Any]]:
    payload = _load_json(path)
    if isinstance(payload, dict):
        return [payload]
    if isinstance(payload, list) and all(isinstance(item, dict) for item in payload):
        return payload
    raise ValueError(f"Expected a card object or a list of card objects in {path}")


def _load_object(path: Path) -> dict[str, Any]:
    payload = _load_json(path)
    if not isinstance(payload, dict):
        raise ValueError(f"Expected a JSON object in {path}")
    return payload


def _emit(payload: object) -> None:
    sys.stdout.write(json.dumps(payload, indent=2, sort_keys=True, default=str))
    sys.stdout.write("\n")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        config = get_engine_config()
    except ConfigurationError:
        configure_logging()
        log.exception("Configuration error")
        sys.exit(2)
    configure_logging(level=config.log_level)

    parsed_args: argparse.Namespace
    rows: list[dict[str, Any]] = []
    audience: dict[str, Any] = {}
    try:
        parsed_args = _parse_args(args_list)
        if parsed_args.command == "merge":
            rows = _load_rows(parsed_args.candidates)
        elif parsed_args.command == "disclose":
            rows = [_load_object(parsed_args.card)]
            audience = _load_object(parsed_args.audience)
        elif parsed_args.command == "validate":
            rows = _load_rows(parsed_args.candidates)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "merge":
            result = reconcile_candidates(
                rows,
                field_paths=parsed_args.field_paths,
                mode=MergeMode.PER_FIELD if parsed_args.per_field else MergeMode.WHOLE_RECORD,
                normalize=parsed_args.normalize,
                config=config,
            )
            _emit(merge_result_to_payload(result))
        elif parsed_args.command == "disclose":
            _emit(card_to_payload(disclose_card(rows[0], audience)))
        elif parsed_args.command == "validate":
            reports = validate_candidates(rows)
            _emit({card_id: report.errors for card_id, report in reports.items()})
            if not all(report.valid for report in reports.values()):
                sys.exit(1)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except ValueError:
        log.exception("Invalid card input")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console-script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
