"""Harvestlane database management CLI.

Creates, drops and seeds the listings table used by checkout when the
listing store runs on SQL (LISTING_STORE_ADAPTER=sql).

Usage:
    python src/manage.py setup-db                    # Create the listings table
    python src/manage.py drop-db                     # Drop the listings table
    python src/manage.py seed-listings --sellers 3   # Insert demo listings
"""

import argparse
import os
import sys

DEFAULT_DATABASE_URI = "sqlite:///harvestlane_listings.db"


def _store(database_uri=None):
    from catalogue.listing.sql_store import SQLListingStore

    uri = database_uri or os.environ.get("LISTING_STORE_DATABASE_URI", DEFAULT_DATABASE_URI)
    return SQLListingStore(uri, create_schema=False)


def setup_database(database_uri=None):
    store = _store(database_uri)
    print("Creating listings schema...")
    store.create_schema()
    print("Done.")


def drop_database(database_uri=None):
    store = _store(database_uri)
    print("Dropping listings schema...")
    store.drop_schema()
    print("Done.")


def seed_listings(database_uri=None, sellers=3, per_seller=5, quantity=100):
    """Insert ``per_seller`` listings for each of ``sellers`` demo sellers."""
    from catalogue.listing.port import Listing

    store = _store(database_uri)
    store.create_schema()

    number = 0
    for seller in range(1, sellers + 1):
        seller_id = f"LT-SELLER-{seller:03d}"
        for _ in range(per_seller):
            number += 1
            store.upsert(
                Listing(
                    id=f"LT-LISTING-{number:04d}",
                    seller_id=seller_id,
                    product_name=f"Produce lot {number}",
                    price=round(2.5 + (number % 7) * 1.25, 2),
                    quantity=quantity,
                )
            )
    print(f"Seeded {number} listings for {sellers} sellers.")


def main():
    parser = argparse.ArgumentParser(description="Harvestlane database management")
    parser.add_argument("--database-uri", help="Overrides LISTING_STORE_DATABASE_URI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create the listings table")
    subparsers.add_parser("drop-db", help="Drop the listings table")

    seed_parser = subparsers.add_parser("seed-listings", help="Insert demo listings")
    seed_parser.add_argument("--sellers", type=int, default=3)
    seed_parser.add_argument("--per-seller", type=int, default=5)
    seed_parser.add_argument("--quantity", type=int, default=100)

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database(args.database_uri)
    elif args.command == "drop-db":
        drop_database(args.database_uri)
    elif args.command == "seed-listings":
        seed_listings(args.database_uri, args.sellers, args.per_seller, args.quantity)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
