"""Command-line access to saved tracker progress."""
from __future__ import annotations

import argparse
import json
import pathlib
from typing import List, Optional

from .config import configure_logging, load_settings
from .data_model import INCOME_FORM
from .engine.progress import format_currency, format_months, format_percent, summarize
from .engine.state import TrackerSession
from .engine.storage import JsonFileStore, _sanitize_json_compat, write_export


def _print_summary(session: TrackerSession, settings) -> None:
    summary = summarize(session.state, settings.targets, settings.mrr_target)
    print(f"Total accumulated: {format_currency(summary['accumulatedTotal'])} / {format_currency(summary['totalTargetCost'])}")
    print(f"Overall progress: {format_percent(summary['overallProgress'])}")
    print(f"Current MRR: {format_currency(summary['monthlyIncome'])} of {format_currency(summary['mrrTarget'])} ({format_percent(summary['mrrProgress'])})")
    print(f"Months to goal: {format_months(summary['monthsToGoal'])}")
    for row in summary["targets"]:
        print(f"  {row['Target']}: {format_currency(row['Funded'])} / {format_currency(row['Cost'])} ({format_percent(row['Progress (%)'])})")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tracker", description="Track savings progress toward the car targets.")
    parser.add_argument("--data-path", default=None, help="JSON store path (default: TRACKER_DATA_PATH).")
    parser.add_argument("--json", action="store_true", help="Print the summary as JSON.")
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("summary", help="Show progress.")

    set_cmd = sub.add_parser("set", help="Set an income field and save.")
    set_cmd.add_argument("field", choices=INCOME_FORM.field_names())
    set_cmd.add_argument("value")

    add_cmd = sub.add_parser("add-payment", help="Add the one-time payment to the total.")
    add_cmd.add_argument("amount", nargs="?", default=None, help="Set the one-time payment first.")

    sub.add_parser("save", help="Save the current values with a fresh timestamp.")

    export_cmd = sub.add_parser("export", help="Write a timestamped export file.")
    export_cmd.add_argument("--out", default=".", help="Directory for the export file.")

    import_cmd = sub.add_parser("import", help="Replace saved progress with an export file.")
    import_cmd.add_argument("file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = load_settings()
    configure_logging(settings.log_level)

    store = JsonFileStore(args.data_path or settings.data_path)
    session = TrackerSession(store, key=settings.storage_key)
    session.restore()

    command = args.command or "summary"
    if command == "set":
        session.update_income_field(args.field, args.value)
        session.save()
    elif command == "add-payment":
        if args.amount is not None:
            session.update_income_field("one_time_payment", args.amount)
        session.add_one_time_payment()
    elif command == "save":
        session.save()
    elif command == "export":
        filename, content = session.export()
        path = write_export(args.out, filename, content)
        print(f"Wrote export to {path}")
        return 0
    elif command == "import":
        try:
            text = pathlib.Path(args.file).read_text(encoding="utf-8")
        except OSError as exc:
            print(f"Import failed: {exc}")
            return 1
        if not session.import_text(text):
            print(session.status)
            return 1

    if session.status:
        print(session.status)
    if args.json:
        summary = summarize(session.state, settings.targets, settings.mrr_target)
        print(json.dumps(_sanitize_json_compat(summary), indent=2))
    else:
        _print_summary(session, settings)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
