"""JSON-file document store.

Each collection lives in ``<data_dir>/<collection>.json`` as a mapping of
document id to document. Reads go to disk every time so that separate
processes (CLI, API functions) see each other's writes, and every write
replaces the whole file atomically.
"""

import logging
from pathlib import Path
from typing import Any

from .constants import COLLECTIONS
from .utils import load_collection, new_document_id, utc_now_iso, write_json_atomic

logger = logging.getLogger('cricleague.store')


class DocumentNotFoundError(KeyError):
    """Raised when a document id does not exist in a collection."""

    def __init__(self, collection: str, doc_id: str, message: str | None = None):
        self.collection = collection
        self.doc_id = doc_id
        self.message = message or f'No document {doc_id!r} in {collection}'
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class DocumentStore:
    """Collections of JSON documents keyed by id."""

    def __init__(self, data_dir: str | Path):
        self.data_dir = Path(data_dir)

    def _path(self, collection: str) -> Path:
        if collection not in COLLECTIONS:
            raise ValueError(f'Unknown collection: {collection}')
        return self.data_dir / f'{collection}.json'

    def all(self, collection: str) -> dict[str, dict[str, Any]]:
        """
        All documents in a collection as {id: document}.

        Raises:
            ValueError: If the collection file is corrupt
        """
        return load_collection(self._path(collection))

    def _write(self, collection: str, docs: dict[str, dict[str, Any]]) -> None:
        write_json_atomic(self._path(collection), docs)

    def exists(self, collection: str, doc_id: str) -> bool:
        return doc_id in self.all(collection)

    def get(self, collection: str, doc_id: str) -> dict[str, Any]:
        """Fetch one document. Raises DocumentNotFoundError if missing."""
        docs = self.all(collection)
        if doc_id not in docs:
            raise DocumentNotFoundError(collection, doc_id)
        return docs[doc_id]

    def add(self, collection: str, doc: dict[str, Any]) -> str:
        """Insert a document under a new id, stamping createdAt. Returns the id."""
        docs = self.all(collection)
        doc_id = new_document_id()
        while doc_id in docs:
            doc_id = new_document_id()

        docs[doc_id] = {**doc, 'createdAt': utc_now_iso()}
        self._write(collection, docs)
        logger.debug(f'Added {collection}/{doc_id}')
        return doc_id

    def set(self, collection: str, doc_id: str, doc: dict[str, Any]) -> None:
        """Create or replace a document under a known id."""
        docs = self.all(collection)
        docs[doc_id] = doc
        self._write(collection, docs)

    def update(self, collection: str, doc_id: str, patch: dict[str, Any]) -> dict[str, Any]:
        """Merge fields into an existing document. Returns the updated document."""
        docs = self.all(collection)
        if doc_id not in docs:
            raise DocumentNotFoundError(collection, doc_id)

        docs[doc_id] = {**docs[doc_id], **patch}
        self._write(collection, docs)
        logger.debug(f'Updated {collection}/{doc_id}: {sorted(patch)}')
        return docs[doc_id]

    def where(self, collection: str, field: str, value: Any) -> dict[str, dict[str, Any]]:
        """Documents whose field equals value."""
        return {
            doc_id: doc
            for doc_id, doc in self.all(collection).items()
            if doc.get(field) == value
        }

    def count(self, collection: str) -> int:
        return len(self.all(collection))
