import copy
import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from maktab.exceptions import StorageError
from maktab.models import Document
from maktab.storage.base import Record, StorageBackend

logger = logging.getLogger(__name__)


class DocumentStore(StorageBackend):
    """Remote document store: one JSON row per (collection, key) in the ``documents`` table."""

    name = "document_store"

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def get(self, collection: str, key: str) -> Optional[Record]:
        try:
            with self.session_factory() as db:
                doc = db.query(Document).filter(
                    Document.collection == collection,
                    Document.key == key,
                ).first()
                return self._with_key(doc.key, doc.data) if doc else None
        except SQLAlchemyError as e:
            logger.error(f"Failed to read {collection}/{key}: {e}")
            raise StorageError(f"Could not read {collection}/{key}") from e

    def set(self, collection: str, key: str, record: Record) -> None:
        # JSON columns only notice reassignment, so always hand over a fresh copy
        data = self._with_key(key, copy.deepcopy(record))
        try:
            with self.session_factory() as db:
                doc = db.query(Document).filter(
                    Document.collection == collection,
                    Document.key == key,
                ).first()
                if doc:
                    doc.data = data
                else:
                    db.add(Document(collection=collection, key=key, data=data))
                db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to write {collection}/{key}: {e}")
            raise StorageError(f"Could not write {collection}/{key}") from e

    def delete(self, collection: str, key: str) -> None:
        try:
            with self.session_factory() as db:
                db.query(Document).filter(
                    Document.collection == collection,
                    Document.key == key,
                ).delete()
                db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete {collection}/{key}: {e}")
            raise StorageError(f"Could not delete {collection}/{key}") from e

    def list_all(self, collection: str) -> List[Record]:
        try:
            with self.session_factory() as db:
                docs = (
                    db.query(Document)
                    .filter(Document.collection == collection)
                    .order_by(Document.id.asc())
                    .all()
                )
                return [self._with_key(doc.key, doc.data) for doc in docs]
        except SQLAlchemyError as e:
            logger.error(f"Failed to list {collection}: {e}")
            raise StorageError(f"Could not list {collection}") from e
