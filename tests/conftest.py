import mongomock
import pytest

from plp_bookstore.insert_books import book_documents


@pytest.fixture()
def client():
    return mongomock.MongoClient()


@pytest.fixture()
def books(client):
    coll = client["plp_bookstore"]["books"]
    coll.insert_many(book_documents())
    return coll


@pytest.fixture()
def empty_books(client):
    return client["plp_bookstore"]["books_scratch"]
