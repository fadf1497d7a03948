# src/pretraffic_gate/handlers/get_all.py
# Lambda handler: GET /books.

import logging
from typing import Any, Optional

from pretraffic_gate.core.config import load_config
from pretraffic_gate.core.log import configure_lambda_logging
from pretraffic_gate.handlers.responses import error_response, json_response
from pretraffic_gate.store import BookStore, get_store

logger = logging.getLogger(__name__)


def list_books(store: BookStore) -> dict[str, Any]:
    """Scan the whole table and return every book as a JSON array."""
    try:
        books = [book.model_dump() for book in store.scan_books()]
    except Exception:
        logger.exception("List books failed table=%s", store.table_name)
        return error_response()

    logger.info("Returning %d books from table=%s", len(books), store.table_name)
    return json_response(200, books)


def handler(event: Optional[dict[str, Any]] = None, context: Optional[Any] = None) -> dict[str, Any]:
    config = load_config()
    configure_lambda_logging(config.log_level)
    return list_books(get_store(config))
