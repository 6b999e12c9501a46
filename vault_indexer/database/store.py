# vault_indexer/database/store.py

from typing import Type, TypeVar, Optional, List

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..core.logging import IndexerLogger, log_with_context, DEBUG, ERROR
from ..types.errors import MissingEntityError
from .base import DBEntity
from .tables import Balancer


T = TypeVar('T', bound=DBEntity)


class EntityStore:
    """Key/value access to entity tables on top of one session.

    `save` flushes immediately, so a record saved earlier in an event is
    visible to every later `load` in the same event. Commit and rollback
    belong to whoever owns the session.
    """

    def __init__(self, session: Session, vault_id: str = '2'):
        self.session = session
        self.vault_id = vault_id
        self.logger = IndexerLogger.get_logger('database.store')

    def load(self, model_class: Type[T], key: str) -> Optional[T]:
        try:
            return self.session.get(model_class, key)
        except Exception as e:
            log_with_context(self.logger, ERROR, "Error loading entity",
                             entity=model_class.__name__,
                             entity_id=key,
                             error=str(e))
            raise

    def load_required(self, model_class: Type[T], key: str, **context) -> T:
        record = self.load(model_class, key)
        if record is None:
            raise MissingEntityError(model_class.__name__, key, **context)
        return record

    def save(self, record: T) -> T:
        try:
            merged = self.session.merge(record) if record not in self.session else record
            self.session.flush()
            log_with_context(self.logger, DEBUG, "Saved entity",
                             entity=record.__class__.__name__,
                             entity_id=record.id)
            return merged
        except Exception as e:
            log_with_context(self.logger, ERROR, "Error saving entity",
                             entity=record.__class__.__name__,
                             entity_id=getattr(record, 'id', None),
                             error=str(e))
            raise

    def find(self, model_class: Type[T], **filters) -> List[T]:
        stmt = select(model_class).filter_by(**filters).order_by(model_class.id)
        return list(self.session.scalars(stmt))

    def count(self, model_class: Type[T]) -> int:
        return self.session.scalar(select(func.count()).select_from(model_class))

    # === Protocol singleton ===

    def find_or_initialize_vault(self) -> Balancer:
        vault = self.load(Balancer, self.vault_id)
        if vault is not None:
            return vault

        vault = Balancer(id=self.vault_id)
        return self.save(vault)

    def get_vault(self) -> Balancer:
        return self.load_required(Balancer, self.vault_id)
