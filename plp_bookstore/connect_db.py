# connect_db.py
import os
from dotenv import load_dotenv
from pymongo import MongoClient

load_dotenv()
MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")
DB_NAME = os.getenv("DB_NAME", "plp_bookstore")
COLLECTION_NAME = os.getenv("COLLECTION_NAME", "books")
MONGO_TLS = os.getenv("MONGO_TLS", "").strip().lower() in ("1", "true", "yes")


def get_client(uri=None):
    """Build a client; nothing goes over the wire until the first command."""
    options = {"serverSelectionTimeoutMS": 5000}
    if MONGO_TLS:
        # Atlas style clusters
        options["tls"] = True
    return MongoClient(uri or MONGO_URI, **options)


def get_database(client=None, db_name=None):
    db_name = db_name or DB_NAME
    try:
        if client is None:
            client = get_client()

        # Test the connection
        client.admin.command('ping')

        db = client[db_name]
        print(f"✅ Connected to MongoDB database: {db_name}")
        return db
    except Exception as e:
        print(f"❌ Failed to connect to MongoDB: {e}")
        raise


if __name__ == "__main__":
    get_database()
