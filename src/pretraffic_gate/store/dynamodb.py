# src/pretraffic_gate/store/dynamodb.py
# DynamoDB-backed book store.

"""Plain DynamoDB client for the books table."""

import logging
from typing import Any, Iterator, Optional

import boto3

from pretraffic_gate.models import Book
from pretraffic_gate.store.base import BookStore

logger = logging.getLogger(__name__)


class DynamoDBBookStore(BookStore):
    def __init__(
        self,
        table_name: str,
        *,
        region: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        client: Any = None,
    ) -> None:
        self._table_name = table_name
        self._client = client or boto3.client(
            "dynamodb",
            region_name=region,
            endpoint_url=endpoint_url,
        )

    @property
    def table_name(self) -> str:
        return self._table_name

    @staticmethod
    def _key(isbn: str) -> dict[str, dict[str, str]]:
        return {"isbn": {"S": isbn}}

    def put_book(self, book: Book) -> None:
        self._client.put_item(TableName=self._table_name, Item=book.to_item())
        logger.debug("DynamoDB put table=%s isbn=%s", self._table_name, book.isbn)

    def get_book(self, isbn: str, consistent: bool = True) -> Optional[Book]:
        response = self._client.get_item(
            TableName=self._table_name,
            Key=self._key(isbn),
            ConsistentRead=consistent,
        )
        item = response.get("Item")
        logger.debug(
            "DynamoDB get table=%s isbn=%s consistent=%s found=%s",
            self._table_name,
            isbn,
            consistent,
            item is not None,
        )
        if not item:
            return None
        return Book.from_item(item)

    def delete_book(self, isbn: str) -> None:
        self._client.delete_item(TableName=self._table_name, Key=self._key(isbn))
        logger.debug("DynamoDB delete table=%s isbn=%s", self._table_name, isbn)

    def scan_books(self) -> Iterator[Book]:
        params: dict[str, Any] = {"TableName": self._table_name}
        while True:
            response = self._client.scan(**params)
            for item in response.get("Items", []):
                yield Book.from_item(item)
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                break
            params["ExclusiveStartKey"] = last_key
