import argparse
import sys
from pathlib import Path

# Ensure repo root is on sys.path when running this script directly.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from shopkeeper.config import get_settings
from shopkeeper.core.constants import DATE_RANGES
from shopkeeper.core.dates import normalize_date, resolve_today
from shopkeeper.core.logging import setup_logging
from shopkeeper.services.export_service import EXPORT_FORMATS, EXPORTABLE_REPORTS, export_report
from shopkeeper.store import load_store


def parse_args():
    parser = argparse.ArgumentParser(
        description="Export a report from the fixture data as CSV or Excel."
    )
    parser.add_argument("--report", required=True, choices=EXPORTABLE_REPORTS)
    parser.add_argument("--format", dest="fmt", default="csv", choices=EXPORT_FORMATS)
    parser.add_argument(
        "--output",
        default=None,
        help="Output file. Default: <report>-<today>.<format> in the current directory.",
    )
    parser.add_argument("--fixtures", default=None, help="Fixture directory override.")
    parser.add_argument("--today", default=None, help="Reference date (YYYY-MM-DD).")
    parser.add_argument("--search", default=None, help="Customer/supplier filter.")
    parser.add_argument("--date", default=None, help="Exact record date filter (YYYY-MM-DD).")
    parser.add_argument("--payment-method", default=None)
    parser.add_argument("--range", dest="date_range", default="month", choices=DATE_RANGES)
    return parser.parse_args()


def main():
    setup_logging()
    args = parse_args()
    if args.today and normalize_date(args.today) is None:
        raise SystemExit(f"Invalid --today value: {args.today}")

    try:
        store = load_store(args.fixtures or get_settings().FIXTURES_DIR)
    except (OSError, ValueError) as exc:
        raise SystemExit(f"Could not load fixtures: {exc}") from exc

    content, _media_type, filename = export_report(
        args.report,
        store,
        resolve_today(args.today),
        args.fmt,
        search=args.search,
        date=args.date,
        payment_method=args.payment_method,
        date_range=args.date_range,
    )

    output = Path(args.output or filename)
    if isinstance(content, bytes):
        output.write_bytes(content)
    else:
        output.write_text(content, encoding="utf-8")
    print(f"Wrote {args.report} report to {output}")


if __name__ == "__main__":
    main()
