# vault_indexer/types/errors.py

from typing import Optional, Dict, Any


class IndexerError(Exception):
    """Base class for errors raised by the vault indexer"""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ' '.join(f"{key}={value}" for key, value in self.context.items())
        return f"{self.message} ({details})"


class MissingEntityError(IndexerError):
    """A record that prior events must have created is absent from the store.

    This points at corrupted or out-of-order event processing and aborts
    the event being handled.
    """

    def __init__(self, entity: str, entity_id: str, **context):
        super().__init__(f"{entity} not found", {'entity_id': entity_id, **context})
        self.entity = entity
        self.entity_id = entity_id


class ConfigurationError(IndexerError):
    pass


class UnknownEventError(IndexerError):
    pass
