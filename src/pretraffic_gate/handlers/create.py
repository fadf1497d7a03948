# src/pretraffic_gate/handlers/create.py
# Lambda handler: POST /books.

"""
Create book handler.

API Gateway authenticates the caller before invoking this function, so the
handler only parses the body and upserts the book keyed by isbn. There is no
duplicate check: writing an existing isbn overwrites it.
"""

import json
import logging
from typing import Any, Optional

from pretraffic_gate.core.config import load_config
from pretraffic_gate.core.log import configure_lambda_logging
from pretraffic_gate.handlers.responses import error_response, json_response
from pretraffic_gate.models import Book
from pretraffic_gate.store import BookStore, get_store

logger = logging.getLogger(__name__)


def create_book(event: dict[str, Any], store: BookStore) -> dict[str, Any]:
    try:
        book = Book.model_validate(json.loads(event["body"]))
        logger.info("Creating book isbn=%s table=%s", book.isbn, store.table_name)
        store.put_book(book)
    except Exception:
        logger.exception("Create book failed")
        return error_response()

    logger.info("Created book isbn=%s table=%s", book.isbn, store.table_name)
    return json_response(201)


def handler(event: dict[str, Any], context: Optional[Any] = None) -> dict[str, Any]:
    config = load_config()
    configure_lambda_logging(config.log_level)
    return create_book(event, get_store(config))
