"""plp_bookstore/queries.py

CRUD, advanced queries, aggregation pipelines and indexing against the
`books` collection. `run_queries` walks through every step in order, prints
each result and always closes the connection, even when a step fails.

Usage (PowerShell):
    $env:MONGO_URI = 'mongodb://localhost:27017'
    python -m plp_bookstore.queries --seed

"""
from __future__ import annotations
import argparse
import sys
from typing import Any, Dict, List, Optional

from pymongo import ASCENDING, DESCENDING

from plp_bookstore.connect_db import COLLECTION_NAME, DB_NAME, MONGO_URI, get_client
from plp_bookstore.insert_books import insert_books


# ---------------------------
# SCRIPT PARAMETERS
# ---------------------------
GENRE = "Thriller"
PUBLISHED_AFTER = 2015
AUTHOR = "James Clear"
UPDATE_TITLE = "Atomic Habits"
NEW_PRICE = 13.99
DELETE_TITLE = "1984"
IN_STOCK_AFTER = 2010
PAGE_SKIP = 5
PAGE_SIZE = 5
EXPLAIN_TITLE = "Dune"


# ---------------------------
# Basic CRUD
# ---------------------------
def find_by_genre(books, genre: str) -> List[Dict[str, Any]]:
    return list(books.find({"genre": genre}))


def find_published_after(books, year: int) -> List[Dict[str, Any]]:
    return list(books.find({"published_year": {"$gt": year}}))


def find_by_author(books, author: str) -> List[Dict[str, Any]]:
    return list(books.find({"author": author}))


def update_price(books, title: str, price: float) -> int:
    """Set the price of the first book with this title; returns 0 or 1."""
    result = books.update_one({"title": title}, {"$set": {"price": price}})
    return result.modified_count


def delete_by_title(books, title: str) -> int:
    result = books.delete_one({"title": title})
    return result.deleted_count


# ---------------------------
# Advanced queries
# ---------------------------
def find_in_stock_after(books, year: int) -> List[Dict[str, Any]]:
    return list(books.find({"in_stock": True, "published_year": {"$gt": year}}))


def find_projected(books) -> List[Dict[str, Any]]:
    return list(books.find({}, {"title": 1, "author": 1, "price": 1, "_id": 0}))


def sort_by_price(books, ascending: bool = True) -> List[Dict[str, Any]]:
    return list(books.find().sort("price", ASCENDING if ascending else DESCENDING))


def find_page(books, skip: int = PAGE_SKIP, limit: int = PAGE_SIZE) -> List[Dict[str, Any]]:
    """One page in natural order. No total count and no bounds checking."""
    return list(books.find().skip(skip).limit(limit))


# ---------------------------
# Aggregation pipelines
# ---------------------------
def average_price_by_genre(books) -> List[Dict[str, Any]]:
    pipeline = [
        {"$group": {"_id": "$genre", "averagePrice": {"$avg": "$price"}}},
    ]
    return list(books.aggregate(pipeline))


def top_author(books) -> List[Dict[str, Any]]:
    """Author with the most books. Ties come back in whatever order the server sorts them."""
    pipeline = [
        {"$group": {"_id": "$author", "count": {"$sum": 1}}},
        {"$sort": {"count": -1}},
        {"$limit": 1},
    ]
    return list(books.aggregate(pipeline))


def count_by_decade(books) -> List[Dict[str, Any]]:
    # "1980s", "2010s", ...; sorted as strings, fine while every year has four digits
    decade = {"$toInt": {"$subtract": ["$published_year", {"$mod": ["$published_year", 10]}]}}
    pipeline = [
        {
            "$group": {
                "_id": {"$concat": [{"$toString": decade}, "s"]},
                "count": {"$sum": 1},
            }
        },
        {"$sort": {"_id": 1}},
    ]
    return list(books.aggregate(pipeline))


# ---------------------------
# Indexing and explain
# ---------------------------
def create_title_index(books) -> str:
    return books.create_index([("title", ASCENDING)])


def create_author_year_index(books) -> str:
    return books.create_index([("author", ASCENDING), ("published_year", DESCENDING)])


def explain_title_lookup(books, title: str) -> Optional[Dict[str, Any]]:
    explained = books.database.command(
        "explain",
        {"find": books.name, "filter": {"title": title}},
        verbosity="executionStats",
    )
    return explained.get("executionStats")


# ---------------------------
# MAIN LOGIC
# ---------------------------
def run_queries(client=None, db_name: Optional[str] = None, collection_name: Optional[str] = None) -> bool:
    """Run every step in order; returns False if one of them raised."""
    if client is None:
        client = get_client()
    try:
        client.admin.command("ping")
        print("✅ Connected to MongoDB")

        books = client[db_name or DB_NAME][collection_name or COLLECTION_NAME]

        # --- Basic CRUD ---
        print(f"📚 {GENRE} Books:", find_by_genre(books, GENRE))
        print(f"📚 Books published after {PUBLISHED_AFTER}:", find_published_after(books, PUBLISHED_AFTER))
        print(f"📚 Books by {AUTHOR}:", find_by_author(books, AUTHOR))
        print("💰 Price update result:", update_price(books, UPDATE_TITLE, NEW_PRICE))
        print("🗑️ Delete result:", delete_by_title(books, DELETE_TITLE))

        # --- Advanced queries ---
        print(f"📚 In-stock books after {IN_STOCK_AFTER}:", find_in_stock_after(books, IN_STOCK_AFTER))
        print("🔍 Projected fields:", find_projected(books))
        print("📈 Books sorted by price (asc):", sort_by_price(books, ascending=True))
        print("📉 Books sorted by price (desc):", sort_by_price(books, ascending=False))
        print(
            f"📄 Page 2 (books {PAGE_SKIP + 1}-{PAGE_SKIP + PAGE_SIZE}):",
            find_page(books, PAGE_SKIP, PAGE_SIZE),
        )

        # --- Aggregation pipelines ---
        print("📊 Average price by genre:", average_price_by_genre(books))
        print("🏆 Author with most books:", top_author(books))
        print("📚 Books grouped by decade:", count_by_decade(books))

        # --- Indexing and explain ---
        print("🔍 Index created on title:", create_title_index(books))
        print("🔍 Compound index on author and published_year:", create_author_year_index(books))
        print(f"📊 Explain output for title search ({EXPLAIN_TITLE}):", explain_title_lookup(books, EXPLAIN_TITLE))
        return True
    except Exception as e:
        print(f"❌ Error running queries: {e}")
        return False
    finally:
        client.close()
        print("🔌 MongoDB connection closed")


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description="Run the bookstore query, aggregation and indexing exercises",
    )
    parser.add_argument("--uri", default=MONGO_URI, help="MongoDB connection string")
    parser.add_argument("--db", default=DB_NAME, help="Database name")
    parser.add_argument("--collection", default=COLLECTION_NAME, help="Collection name")
    parser.add_argument(
        "--seed",
        action="store_true",
        help="Reload the sample books before running the queries",
    )

    args = parser.parse_args(argv)

    if args.seed:
        seed_client = get_client(args.uri)
        try:
            insert_books(seed_client[args.db][args.collection])
        finally:
            seed_client.close()

    ok = run_queries(get_client(args.uri), args.db, args.collection)
    if not ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
