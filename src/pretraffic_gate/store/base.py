# src/pretraffic_gate/store/base.py
# Base interface for all book store clients.

"""
Every component that touches the books table goes through a BookStore.

Two implementations share this interface:
- DynamoDBBookStore: talks to DynamoDB directly
- TracedBookStore: wraps another store and records a span per call
"""

from abc import ABC, abstractmethod
from typing import Iterator, Optional

from pretraffic_gate.models import Book


class BookStore(ABC):
    """Point operations and a full scan over the books table."""

    @property
    @abstractmethod
    def table_name(self) -> str:
        """Name of the backing table."""
        ...

    @abstractmethod
    def put_book(self, book: Book) -> None:
        """Unconditionally write a book keyed by its isbn."""
        ...

    @abstractmethod
    def get_book(self, isbn: str, consistent: bool = True) -> Optional[Book]:
        """Read a single book, or None when absent."""
        ...

    @abstractmethod
    def delete_book(self, isbn: str) -> None:
        """Delete a single book. Deleting an absent key is not an error."""
        ...

    @abstractmethod
    def scan_books(self) -> Iterator[Book]:
        """Yield every book in the table."""
        ...

    def list_books(self) -> list[Book]:
        return list(self.scan_books())
