import json
import logging
import os
import tempfile
import threading
import time
from typing import Dict, List, Optional

from maktab.exceptions import StorageError
from maktab.storage.base import Record, StorageBackend

logger = logging.getLogger(__name__)


class LocalStore(StorageBackend):
    """
    Local fallback store used when no remote document store is configured.

    Each collection lives under a single key (``<app_id>_<collection>``) whose value
    is the whole collection serialised as a JSON list of records, so every write
    rewrites the collection. Values are files in ``directory``; when the directory
    cannot be written the store keeps the values in memory instead.
    """

    name = "local_store"

    def __init__(self, directory: str, app_id: str = "maktab", latency_ms: int = 0):
        self.directory = directory
        self.app_id = app_id
        self.latency_ms = latency_ms
        self._memory: Optional[Dict[str, str]] = None
        # Guards the load-mutate-save cycle of set and delete
        self._lock = threading.RLock()
        if not self._probe_directory():
            logger.warning(f"Local store directory '{directory}' is not writable. Using in-memory fallback.")
            self._memory = {}

    @property
    def in_memory(self) -> bool:
        return self._memory is not None

    def _probe_directory(self) -> bool:
        test_path = os.path.join(self.directory, "__storage_test__")
        try:
            os.makedirs(self.directory, exist_ok=True)
            with open(test_path, "w") as f:
                f.write("__storage_test__")
            os.remove(test_path)
            return True
        except OSError:
            return False

    def storage_key(self, collection: str) -> str:
        return f"{self.app_id}_{collection}"

    def _path(self, collection: str) -> str:
        return os.path.join(self.directory, f"{self.storage_key(collection)}.json")

    def _delay(self):
        if self.latency_ms > 0:
            time.sleep(self.latency_ms / 1000)

    def _read_raw(self, collection: str) -> Optional[str]:
        if self._memory is not None:
            return self._memory.get(self.storage_key(collection))
        try:
            with open(self._path(collection), "r", encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            return None
        except UnicodeDecodeError:
            logger.warning(f"Local collection '{collection}' is corrupt, treating it as empty")
            return None
        except OSError as e:
            raise StorageError(f"Could not read local collection '{collection}'") from e

    def _write_raw(self, collection: str, raw: str):
        if self._memory is not None:
            self._memory[self.storage_key(collection)] = raw
            return
        path = self._path(collection)
        tmp_path = None
        try:
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=self.directory, suffix=".tmp", delete=False
            ) as f:
                tmp_path = f.name
                f.write(raw)
            os.replace(tmp_path, path)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            logger.error(f"Failed to write local collection '{collection}': {e}")
            raise StorageError(f"Could not write local collection '{collection}'") from e

    def _load(self, collection: str) -> List[Record]:
        self._delay()
        raw = self._read_raw(collection)
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning(f"Local collection '{collection}' is corrupt, treating it as empty")
            return []
        if not isinstance(data, list):
            logger.warning(f"Local collection '{collection}' is not a list, treating it as empty")
            return []
        return [r for r in data if isinstance(r, dict)]

    def _save(self, collection: str, records: List[Record]):
        self._write_raw(collection, json.dumps(records))

    def get(self, collection: str, key: str) -> Optional[Record]:
        for record in self._load(collection):
            if record.get("id") == key:
                return record
        return None

    def set(self, collection: str, key: str, record: Record) -> None:
        data = self._with_key(key, record)
        with self._lock:
            records = self._load(collection)
            for idx, existing in enumerate(records):
                if existing.get("id") == key:
                    records[idx] = data
                    break
            else:
                records.append(data)
            self._save(collection, records)

    def delete(self, collection: str, key: str) -> None:
        with self._lock:
            records = self._load(collection)
            remaining = [r for r in records if r.get("id") != key]
            if len(remaining) != len(records):
                self._save(collection, remaining)

    def list_all(self, collection: str) -> List[Record]:
        return self._load(collection)
