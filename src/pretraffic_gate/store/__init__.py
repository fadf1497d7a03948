# src/pretraffic_gate/store/__init__.py
# Book store clients for the books table.

"""
The gate and the book handlers access DynamoDB only through a BookStore.
The concrete client is picked by configuration when the process starts.
"""

from pretraffic_gate.store.base import BookStore
from pretraffic_gate.store.dynamodb import DynamoDBBookStore
from pretraffic_gate.store.traced import TracedBookStore
from pretraffic_gate.store.registry import build_store, get_store, reset_store

__all__ = [
    "BookStore",
    "DynamoDBBookStore",
    "TracedBookStore",
    "build_store",
    "get_store",
    "reset_store",
]
