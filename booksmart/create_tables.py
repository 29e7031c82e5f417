"""Create the booking and user tables in the configured database.

Usage:
    python -m booksmart.create_tables
"""
import sys

from sqlalchemy.exc import SQLAlchemyError

from booksmart.core import config
from booksmart.database import create_all_tables


def main() -> None:
    try:
        create_all_tables()
    except SQLAlchemyError as exc:
        print(f"Could not create tables at {config.DATABASE_URL}: {exc}", file=sys.stderr)
        sys.exit(1)
    print(f"Tables ready at {config.DATABASE_URL}")


if __name__ == "__main__":
    main()
