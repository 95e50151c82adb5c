"""plp_bookstore package initializer

Query, aggregation and indexing exercises against the `books` collection of
the `plp_bookstore` MongoDB database. Run the whole sequence with
`python -m plp_bookstore.queries`, seed the collection first with
`python -m plp_bookstore.insert_books`.
"""

__all__ = [
    "connect_db",
    "insert_books",
    "queries",
    "schema",
]
