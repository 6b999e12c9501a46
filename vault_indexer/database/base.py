# vault_indexer/database/base.py

from typing import Any, Dict

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import declarative_base


EntityBase = declarative_base()


class BlockchainTimestampMixin:
    timestamp = Column(Integer, nullable=False, index=True)


class DBEntity(EntityBase):
    """Entity keyed by a string id; rows are overwritten, never versioned"""
    __abstract__ = True

    id = Column(String, primary_key=True)

    def __init__(self, **kwargs):
        # scalar column defaults are applied at construction so counters can
        # be incremented before the first flush
        for column in self.__table__.columns:
            if column.name in kwargs or column.default is None:
                continue
            if column.default.is_scalar:
                kwargs[column.name] = column.default.arg
        super().__init__(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return {column.name: getattr(self, column.name) for column in self.__table__.columns}

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"
