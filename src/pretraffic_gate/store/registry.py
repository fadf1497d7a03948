# src/pretraffic_gate/store/registry.py
# Selects the book store implementation for the current environment.

"""
Store selection happens once, at process start:

- SAM local: plain DynamoDB client pointed at the local DynamoDB container
- AWS: DynamoDB client wrapped in TracedBookStore
"""

import logging
from typing import Any, Optional

from pretraffic_gate.core.config import GateConfig
from pretraffic_gate.store.base import BookStore
from pretraffic_gate.store.dynamodb import DynamoDBBookStore
from pretraffic_gate.store.traced import TracedBookStore

logger = logging.getLogger(__name__)


def build_store(
    config: GateConfig,
    client: Any = None,
    tracer: Any = None,
) -> BookStore:
    """Create the book store for this environment."""
    store = DynamoDBBookStore(
        config.table_name,
        region=config.region,
        endpoint_url=config.store_endpoint,
        client=client,
    )
    if config.sam_local:
        logger.info(
            "Using local DynamoDB table=%s endpoint=%s",
            config.table_name,
            config.local_endpoint,
        )
        return store

    logger.debug("Using traced DynamoDB table=%s", config.table_name)
    return TracedBookStore(store, tracer=tracer)


_store: Optional[BookStore] = None
_store_key: Optional[tuple] = None


def _key(config: GateConfig) -> tuple:
    return (config.table_name, config.sam_local, config.region, config.local_endpoint)


def get_store(config: GateConfig) -> BookStore:
    """Return the process-wide store, rebuilding it when the client settings change."""
    global _store, _store_key
    key = _key(config)
    if _store is None or _store_key != key:
        _store = build_store(config)
        _store_key = key
    return _store


def reset_store() -> None:
    global _store, _store_key
    _store = None
    _store_key = None
