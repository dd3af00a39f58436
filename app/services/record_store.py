"""
Meal Planner API - Record Store.

Durable storage for saved meal plans and favorite meals. Records are
opaque JSON payloads keyed by a generated integer id and a creation
timestamp. Payloads are serialized on insert and decoded lazily on read.

Backends:
- MongoRecordStore: Beanie documents in MongoDB (default)
- InMemoryRecordStore: process-local, for development and tests
"""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List

from pymongo import ReturnDocument

from app.models.mongodb import CounterDocument, FavoriteMealDocument, SavedPlanDocument
from app.services.response_parser import strict_loads
from app.utils.errors import RecordStoreError

logger = logging.getLogger(__name__)


class RecordKind(str, Enum):
    """Logical record collections."""
    PLAN = "plan"
    FAVORITE = "favorite"


@dataclass
class StoredRecord:
    """A stored record with its decoded payload."""
    id: int
    payload: Any
    created_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "payload": self.payload,
            "created_at": self.created_at.isoformat(),
        }


def encode_payload(payload: Any) -> str:
    """Serialize a payload for storage."""
    try:
        return json.dumps(payload, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise RecordStoreError(
            message="Payload could not be serialized.",
            detail=str(e)
        )


def decode_payload(kind: RecordKind, record_id: int, raw: str) -> Any:
    """Decode a stored payload, failing loudly on corrupt data."""
    try:
        return strict_loads(raw)
    except (ValueError, TypeError) as e:
        logger.error(f"Corrupt {kind.value} payload for record {record_id}: {raw!r}")
        raise RecordStoreError(detail=f"Corrupt {kind.value} record {record_id}: {e}")


class RecordStore(ABC):
    """
    Insert / select / delete by id over plan and favorite records.

    Each operation is independent and atomic; callers do no locking.
    """

    @abstractmethod
    async def insert(self, kind: RecordKind, payload: Any) -> StoredRecord:
        """Store ``payload`` and return the new record."""

    @abstractmethod
    async def select_all(self, kind: RecordKind) -> List[StoredRecord]:
        """Return every record of ``kind``, newest first."""

    @abstractmethod
    async def delete(self, kind: RecordKind, record_id: int) -> bool:
        """Delete a record. Returns False if no such record exists."""

    async def ping(self) -> bool:
        return True


class InMemoryRecordStore(RecordStore):
    """Process-local record store."""

    def __init__(self):
        self._rows: Dict[RecordKind, List[Dict[str, Any]]] = {kind: [] for kind in RecordKind}
        self._next_id: Dict[RecordKind, int] = {kind: 1 for kind in RecordKind}
        self._lock = asyncio.Lock()

    async def insert(self, kind: RecordKind, payload: Any) -> StoredRecord:
        raw = encode_payload(payload)
        async with self._lock:
            record_id = self._next_id[kind]
            self._next_id[kind] += 1
            row = {"id": record_id, "payload": raw, "created_at": datetime.now(timezone.utc)}
            self._rows[kind].append(row)
        return StoredRecord(id=record_id, payload=decode_payload(kind, record_id, raw), created_at=row["created_at"])

    async def select_all(self, kind: RecordKind) -> List[StoredRecord]:
        rows = sorted(self._rows[kind], key=lambda r: r["id"], reverse=True)
        return [
            StoredRecord(
                id=row["id"],
                payload=decode_payload(kind, row["id"], row["payload"]),
                created_at=row["created_at"]
            )
            for row in rows
        ]

    async def delete(self, kind: RecordKind, record_id: int) -> bool:
        async with self._lock:
            before = len(self._rows[kind])
            self._rows[kind] = [row for row in self._rows[kind] if row["id"] != record_id]
            return len(self._rows[kind]) < before


class MongoRecordStore(RecordStore):
    """MongoDB-backed record store (requires ``Database.connect_db``)."""

    _models = {
        RecordKind.PLAN: SavedPlanDocument,
        RecordKind.FAVORITE: FavoriteMealDocument,
    }

    async def _next_id(self, kind: RecordKind) -> int:
        counter = await CounterDocument.get_motor_collection().find_one_and_update(
            {"name": kind.value},
            {"$inc": {"seq": 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER
        )
        return counter["seq"]

    async def insert(self, kind: RecordKind, payload: Any) -> StoredRecord:
        raw = encode_payload(payload)
        model = self._models[kind]
        try:
            record_id = await self._next_id(kind)
            document = model(record_id=record_id, payload=raw)
            await document.insert()
        except Exception as e:
            logger.error(f"Failed to insert {kind.value} record: {e}")
            raise RecordStoreError(message="Failed to save record.", detail=str(e))
        return StoredRecord(id=record_id, payload=payload, created_at=document.created_at)

    async def select_all(self, kind: RecordKind) -> List[StoredRecord]:
        model = self._models[kind]
        try:
            documents = await model.find_all().sort(-model.record_id).to_list()
        except Exception as e:
            logger.error(f"Failed to list {kind.value} records: {e}")
            raise RecordStoreError(detail=str(e))
        return [
            StoredRecord(
                id=doc.record_id,
                payload=decode_payload(kind, doc.record_id, doc.payload),
                created_at=doc.created_at
            )
            for doc in documents
        ]

    async def delete(self, kind: RecordKind, record_id: int) -> bool:
        model = self._models[kind]
        try:
            document = await model.find_one(model.record_id == record_id)
            if not document:
                return False
            await document.delete()
            return True
        except Exception as e:
            logger.error(f"Failed to delete {kind.value} record {record_id}: {e}")
            raise RecordStoreError(message="Failed to delete record.", detail=str(e))

    async def ping(self) -> bool:
        from database import Database
        return await Database.ping()


def build_record_store(backend: str) -> RecordStore:
    """Create the record store for the configured backend."""
    backend = backend.lower()
    if backend == "memory":
        logger.info("Using in-memory record store")
        return InMemoryRecordStore()
    if backend == "mongodb":
        return MongoRecordStore()
    raise ValueError(f"Unknown record store backend: {backend}")
