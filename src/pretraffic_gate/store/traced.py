# src/pretraffic_gate/store/traced.py
# Tracing decorator for book stores.

"""
TracedBookStore wraps any BookStore and opens an OpenTelemetry span around
each call. Without a configured tracer provider the spans are no-ops.
"""

from contextlib import contextmanager
from typing import Any, Iterator, Optional

from opentelemetry import trace

from pretraffic_gate.models import Book
from pretraffic_gate.store.base import BookStore


class TracedBookStore(BookStore):
    """Decorator that records one span per store operation."""

    def __init__(self, inner: BookStore, tracer: Any = None) -> None:
        self._inner = inner
        self._tracer = tracer or trace.get_tracer(__name__)

    @property
    def table_name(self) -> str:
        return self._inner.table_name

    @property
    def inner(self) -> BookStore:
        return self._inner

    @contextmanager
    def _span(self, operation: str, isbn: Optional[str] = None) -> Iterator[Any]:
        with self._tracer.start_as_current_span(f"dynamodb.{operation}") as span:
            span.set_attribute("db.system", "dynamodb")
            span.set_attribute("db.operation", operation)
            span.set_attribute("aws.dynamodb.table_names", [self.table_name])
            if isbn is not None:
                span.set_attribute("books.isbn", isbn)
            yield span

    def put_book(self, book: Book) -> None:
        with self._span("PutItem", book.isbn):
            self._inner.put_book(book)

    def get_book(self, isbn: str, consistent: bool = True) -> Optional[Book]:
        with self._span("GetItem", isbn) as span:
            span.set_attribute("db.dynamodb.consistent_read", consistent)
            book = self._inner.get_book(isbn, consistent=consistent)
            span.set_attribute("books.found", book is not None)
            return book

    def delete_book(self, isbn: str) -> None:
        with self._span("DeleteItem", isbn):
            self._inner.delete_book(isbn)

    def scan_books(self) -> Iterator[Book]:
        # Materialized so the span covers the whole paginated scan
        with self._span("Scan") as span:
            books = list(self._inner.scan_books())
            span.set_attribute("books.count", len(books))
        return iter(books)
