"""plp_bookstore/insert_books.py

Seed the `books` collection with a known set of twelve books so every step
of `queries.py` has something to find, update, delete and aggregate.

Usage (PowerShell):
    $env:MONGO_URI = 'mongodb://localhost:27017'
    python -m plp_bookstore.insert_books --keep-existing

"""
from __future__ import annotations
import argparse

from plp_bookstore.connect_db import COLLECTION_NAME, DB_NAME, MONGO_URI, get_client, get_database
from plp_bookstore.schema import Book


BOOKS = [
    {"title": "Atomic Habits", "author": "James Clear", "genre": "Self-Help",
     "published_year": 2018, "price": 11.98, "in_stock": True},
    {"title": "1984", "author": "George Orwell", "genre": "Dystopian",
     "published_year": 1949, "price": 10.99, "in_stock": True},
    {"title": "Dune", "author": "Frank Herbert", "genre": "Science Fiction",
     "published_year": 1965, "price": 9.99, "in_stock": True},
    {"title": "The Silent Patient", "author": "Alex Michaelides", "genre": "Thriller",
     "published_year": 2019, "price": 15.99, "in_stock": True},
    {"title": "Gone Girl", "author": "Gillian Flynn", "genre": "Thriller",
     "published_year": 2012, "price": 12.50, "in_stock": False},
    {"title": "The Alchemist", "author": "Paulo Coelho", "genre": "Fiction",
     "published_year": 1988, "price": 10.99, "in_stock": True},
    {"title": "Animal Farm", "author": "George Orwell", "genre": "Political Satire",
     "published_year": 1945, "price": 8.50, "in_stock": False},
    {"title": "Homage to Catalonia", "author": "George Orwell", "genre": "Memoir",
     "published_year": 1938, "price": 9.50, "in_stock": True},
    {"title": "The Lord of the Rings", "author": "J.R.R. Tolkien", "genre": "Fantasy",
     "published_year": 1954, "price": 19.99, "in_stock": True},
    {"title": "Where the Crawdads Sing", "author": "Delia Owens", "genre": "Fiction",
     "published_year": 2018, "price": 14.50, "in_stock": True},
    {"title": "The Midnight Library", "author": "Matt Haig", "genre": "Fiction",
     "published_year": 2020, "price": 13.25, "in_stock": False},
    {"title": "The Girl on the Train", "author": "Paula Hawkins", "genre": "Thriller",
     "published_year": 2015, "price": 11.75, "in_stock": True},
]


def book_documents() -> list[dict]:
    """Validate the fixtures and return them as plain documents, in order."""
    return [Book(**book).model_dump() for book in BOOKS]


def insert_books(collection, drop_existing: bool = True) -> list:
    docs = book_documents()
    if drop_existing:
        removed = collection.delete_many({}).deleted_count
        print(f"🧹 Removed {removed} existing books from '{collection.name}'.")

    result = collection.insert_many(docs)
    print(f"✅ Inserted {len(result.inserted_ids)} books into '{collection.name}'.")
    return list(result.inserted_ids)


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        description="Seed the bookstore collection with sample books",
    )
    parser.add_argument("--uri", default=MONGO_URI, help="MongoDB connection string")
    parser.add_argument("--db", default=DB_NAME, help="Database name")
    parser.add_argument("--collection", default=COLLECTION_NAME, help="Collection name")
    parser.add_argument(
        "--keep-existing",
        action="store_true",
        help="Append to the collection instead of clearing it first",
    )

    args = parser.parse_args(argv)

    client = get_client(args.uri)
    try:
        db = get_database(client, args.db)
        insert_books(db[args.collection], drop_existing=not args.keep_existing)
    finally:
        client.close()


if __name__ == "__main__":
    main()
