from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from app.core.config import settings

logger = logging.getLogger(__name__)


class KeyValueStorage(ABC):
    """String slots addressed by key, the only persistence the trip store relies on."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        raise NotImplementedError


class InMemoryKeyValueStorage(KeyValueStorage):
    def __init__(self):
        self._slots: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._slots.get(key)

    def set(self, key: str, value: str) -> None:
        self._slots[key] = value


class JsonFileKeyValueStorage(KeyValueStorage):
    """
    Keeps every slot in one JSON object on disk.
    Unreadable or corrupt files behave like an empty storage; failed writes are
    logged and dropped so callers never see filesystem errors.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _load_slots(self) -> Dict[str, str]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            logger.warning("Could not read storage file %s: %s", self.path, exc)
            return {}
        except UnicodeDecodeError:
            logger.warning("Storage file %s is not valid UTF-8; ignoring it", self.path)
            return {}
        try:
            data = json.loads(text)
        except (ValueError, RecursionError):
            logger.warning("Storage file %s is not valid JSON; ignoring it", self.path)
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> Optional[str]:
        return self._load_slots().get(key)

    def set(self, key: str, value: str) -> None:
        slots = self._load_slots()
        slots[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp_path.write_text(json.dumps(slots, ensure_ascii=False), encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as exc:
            logger.warning("Could not write storage file %s: %s", self.path, exc)


def get_local_storage() -> KeyValueStorage:
    """
    File-backed storage when configured, otherwise an in-memory one so the app
    keeps working without a writable disk.
    """
    if settings.use_file_storage and settings.storage_path:
        logger.info("Using file storage at %s", settings.storage_path)
        return JsonFileKeyValueStorage(settings.storage_path)
    logger.info("File storage not configured; trips are kept in memory.")
    return InMemoryKeyValueStorage()
