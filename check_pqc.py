import argparse
import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from pqc_checker.browser import BrowserConfig, BrowserSession
from pqc_checker.database import ResultStore, database_url_from_env
from pqc_checker.exceptions import InputError
from pqc_checker.loader import UrlLoader
from pqc_checker.manager import CheckManager
from pqc_checker.report import DEFAULT_LOG_FILE, Reporter

USAGE = "Usage: check-pqc <URL> or <file-with-URLs>"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Check websites for Post-Quantum key exchange (ML-KEM)")
    parser.add_argument("targets", nargs="*", help="URL(s) to check, or a file with one URL per line")
    parser.add_argument("--log-file", default=DEFAULT_LOG_FILE, help=f"Results file, appended to (default: {DEFAULT_LOG_FILE})")
    parser.add_argument("--timeout", type=float, default=30, help="Navigation timeout in seconds (default: 30)")
    parser.add_argument("--settle", type=float, default=5, help="Seconds to wait after load for security events (default: 5)")
    parser.add_argument("--headful", action="store_true", help="Show the browser window")
    parser.add_argument("--db", default=None, help="SQLAlchemy database URL to keep result history (default: $DATABASE_URL)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    try:
        urls = UrlLoader().resolve(args.targets)
    except InputError:
        print(USAGE, file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Failed to read {args.targets[0]}: {e}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 1

    config = BrowserConfig(
        headless=not args.headful,
        timeout_ms=int(args.timeout * 1000),
        settle_ms=int(args.settle * 1000),
    )

    database_url = args.db or database_url_from_env()
    store = None
    if database_url:
        try:
            store = ResultStore(database_url)
        except SQLAlchemyError as e:
            print(f"Failed to open result database: {e}", file=sys.stderr)
            return 1

    print(f"\n🔍 Checking {len(urls)} site(s)...\n")
    try:
        with Reporter(args.log_file) as reporter, BrowserSession(config) as session:
            CheckManager(session, reporter, store=store).run(urls)
    finally:
        if store:
            store.close()

    print(f"\n✅ All results saved to {args.log_file}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
