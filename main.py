import argparse
import logging
import sys

from config.settings import settings
from database.db import open_store
from routers.menu import run_menu
from services.exceptions import BootstrapConnectionError

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        stream=sys.stderr,
    )
    # SQL 로그는 DB_ECHO 설정으로만 출력
    if not settings.DB_ECHO:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def print_bootstrap_help(exc: BootstrapConnectionError) -> None:
    print("\n✗ Could not connect to MySQL on any configured address.", file=sys.stderr)
    for label, error in exc.attempts:
        print(f"  - {label}: {error}", file=sys.stderr)
    print("\nPlease check:", file=sys.stderr)
    print("1. MySQL/XAMPP service is running", file=sys.stderr)
    print("2. DB_CANDIDATES lists the right host:port (e.g. 3306, 3307 or 3308 for XAMPP)", file=sys.stderr)
    print("3. DB_USER / DB_PASSWORD are correct", file=sys.stderr)
    print(f"4. Database exists: CREATE DATABASE {settings.DB_NAME};", file=sys.stderr)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Console grade analytics dashboard")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    print(f"=== {settings.APP_TITLE} ===")
    print("Initializing database connection...")

    try:
        with open_store(settings) as store:
            try:
                run_menu(store, title=settings.APP_TITLE, read=input)
            except (KeyboardInterrupt, EOFError):
                print("\nInterrupted. Exiting...")
    except BootstrapConnectionError as exc:
        logger.error(str(exc))
        print_bootstrap_help(exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
