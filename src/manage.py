"""Catalogue database management CLI.

Creates or drops the SQL schema for the catalogue domain. Only relevant when
``domain.toml`` points at a SQL provider (the production overlay does).

Usage:
    PROTEAN_ENV=production python src/manage.py setup-db
    PROTEAN_ENV=production python src/manage.py drop-db
"""

import argparse
import sys


def setup_database():
    from catalogue.domain import catalogue
    from catalogue.utils.db import setup_db

    print("Initializing catalogue domain...")
    catalogue.init()
    print("Creating catalogue database schema...")
    setup_db(catalogue)
    print("Done.")


def drop_database():
    from catalogue.domain import catalogue
    from catalogue.utils.db import drop_db

    print("Initializing catalogue domain...")
    catalogue.init()
    print("Dropping catalogue database schema...")
    drop_db(catalogue)
    print("Done.")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Catalogue database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
