"""Bookstore store management CLI.

Creates and drops the SQL tables behind the catalogue and cart stores,
and loads the starter catalogue. The target database comes from
``STORE_DATABASE_URI``.

Usage:
    python src/manage.py setup-db     # Create all tables
    python src/manage.py drop-db      # Drop all tables
    python src/manage.py seed-books   # Load the starter catalogue
"""

import argparse
import os
import sys


def _engine():
    from ordering.utils.db import make_engine

    database_uri = os.getenv("STORE_DATABASE_URI")
    if not database_uri:
        print("STORE_DATABASE_URI is not set.")
        sys.exit(1)
    return make_engine(database_uri)


def setup_database():
    """Create the books and cart_lines tables."""
    from ordering.utils.db import setup_db

    print("Creating store schema...")
    setup_db(_engine())
    print("Done.")


def drop_database():
    """Drop the books and cart_lines tables."""
    from ordering.utils.db import drop_db

    print("Dropping store schema...")
    drop_db(_engine())
    print("Done.")


def seed_books():
    """Load the starter catalogue into an empty books table."""
    from ordering.catalogue.seed import seed_catalogue
    from ordering.catalogue.sql_adapter import SqlCatalogue
    from ordering.utils.db import setup_db

    engine = _engine()
    setup_db(engine)
    added = seed_catalogue(SqlCatalogue(engine))
    print(f"Added {added} books.")


def main():
    parser = argparse.ArgumentParser(description="Bookstore store management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all store tables")
    subparsers.add_parser("drop-db", help="Drop all store tables")
    subparsers.add_parser("seed-books", help="Load the starter catalogue")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed-books":
        seed_books()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
