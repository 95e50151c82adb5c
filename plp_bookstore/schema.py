# schema.py
from pydantic import BaseModel, Field


class Book(BaseModel):
    """Shape of the seed documents. Stored documents are never re-validated."""

    title: str = Field(min_length=1, max_length=255)
    author: str = Field(min_length=1, max_length=255)
    genre: str = Field(min_length=1, max_length=64)
    published_year: int = Field(ge=0)
    price: float = Field(ge=0)
    in_stock: bool = True
