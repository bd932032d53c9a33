"""Storefront database management CLI.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py seed       # Load the sample catalogue and demo cart
"""

import argparse
import sys


def setup_database():
    from storefront.domain import storefront
    from storefront.utils.db import setup_db

    print("Initializing storefront domain...")
    storefront.init()
    print("Creating storefront database schema...")
    setup_db(storefront)
    print("Done.")


def drop_database():
    from storefront.domain import storefront
    from storefront.utils.db import drop_db

    print("Initializing storefront domain...")
    storefront.init()
    print("Dropping storefront database schema...")
    drop_db(storefront)
    print("Done.")


def seed_database():
    from storefront.domain import storefront
    from storefront.seed import seed

    storefront.init()
    with storefront.domain_context():
        user_id = seed()
    print(f"Seeded sample data. Demo user id: {user_id}")


def main():
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed", help="Replace the store contents with sample data")

    args = parser.parse_args()

    commands = {
        "setup-db": setup_database,
        "drop-db": drop_database,
        "seed": seed_database,
    }
    commands[args.command]()
    return 0


if __name__ == "__main__":
    sys.exit(main())
