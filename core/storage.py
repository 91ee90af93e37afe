#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Onward Journey Engine v1.0 - Blob Store
Opaque key/value storage for serialized journey state

Version: 1.0.0
Date: 2026-10-17
"""

import json
import shutil
import threading
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Any
import logging

logger = logging.getLogger(__name__)

# ===== KEYS =====

PROGRAMS_KEY = "programs"
PROGRESS_KEY = "currentSessionProgress"
PROGRAM_START_DATE_KEY = "programStartDate"
CURRENT_PROGRAM_ID_KEY = "currentProgramId"
UNLOCKED_ACHIEVEMENTS_KEY = "unlockedAchievementIds"
SHOWN_ACHIEVEMENTS_KEY = "shownAchievements"
USER_PROFILE_KEY = "userProfile"

# ===== EXCEPTIONS =====

class StorageError(Exception):
    """Base class for blob store errors"""
    pass

class StorageCorruptionError(StorageError):
    """A stored blob could not be decoded"""
    pass

class StorageWriteError(StorageError):
    """A blob could not be written"""
    pass

# ===== CODEC =====

def encode_blob(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)

def decode_blob(raw: str) -> Any:
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as e:
        raise StorageCorruptionError(f"Blob is not valid JSON: {e}")

# ===== STORES =====

class BlobStore(ABC):
    """Key/value store of string blobs"""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        pass

    @abstractmethod
    def keys(self) -> List[str]:
        pass

    def contains(self, key: str) -> bool:
        return self.get(key) is not None

    def get_json(self, key: str) -> Optional[Any]:
        """Decoded value, None when absent; raises StorageCorruptionError"""
        raw = self.get(key)
        if raw is None:
            return None
        return decode_blob(raw)

    def set_json(self, key: str, value: Any) -> None:
        self.set(key, encode_blob(value))

class MemoryBlobStore(BlobStore):
    """Process-local store, used by tests and previews"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._data.keys())

class JsonFileBlobStore(BlobStore):
    """All keys kept in one JSON document on disk, rewritten atomically on every change"""

    def __init__(self, path: Path, json_indent: int = 2):
        self.path = Path(path)
        self.json_indent = json_indent
        self.file_lock = threading.RLock()
        self._data: Dict[str, str] = {}
        self.save_count = 0
        self.last_save: Optional[str] = None
        self._load()

    def _load(self) -> None:
        """Read the document; a corrupted file is set aside and the store starts empty"""
        if not self.path.exists():
            logger.info(f"Store file {self.path} does not exist, starting empty")
            return

        with self.file_lock:
            try:
                with open(self.path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                if not isinstance(data, dict):
                    raise StorageCorruptionError("Store document is not an object")
                self._data = {str(k): v for k, v in data.items() if isinstance(v, str)}
                logger.info(f"Loaded {len(self._data)} keys from {self.path}")
            except (json.JSONDecodeError, UnicodeDecodeError, StorageCorruptionError) as e:
                logger.error(f"Store file is corrupted: {e}")
                self._handle_corruption()

    def _handle_corruption(self) -> None:
        corrupt_copy = self.path.with_suffix('.corrupt')
        try:
            shutil.move(str(self.path), str(corrupt_copy))
            logger.warning(f"Corrupted store moved to {corrupt_copy}")
        except OSError as e:
            logger.warning(f"Could not move corrupted store aside: {e}")
        self._data = {}

    def _save_data_sync(self) -> None:
        """Atomic save through a temporary file"""
        with self.file_lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            temp_file = self.path.with_suffix('.tmp')

            try:
                with open(temp_file, 'w', encoding='utf-8') as f:
                    json.dump(self._data, f, ensure_ascii=False, indent=self.json_indent)

                # Re-read to make sure the document parses
                with open(temp_file, 'r', encoding='utf-8') as f:
                    json.load(f)

                shutil.move(str(temp_file), str(self.path))

                self.save_count += 1
                self.last_save = datetime.now().isoformat()

            except (OSError, ValueError) as e:
                if temp_file.exists():
                    temp_file.unlink()
                raise StorageWriteError(f"Failed to write {self.path}: {e}")

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self._save_data_sync()

    def remove(self, key: str) -> None:
        if key in self._data:
            del self._data[key]
            self._save_data_sync()

    def keys(self) -> List[str]:
        return list(self._data.keys())

    def get_stats(self) -> Dict[str, Any]:
        size_mb = self.path.stat().st_size / (1024 * 1024) if self.path.exists() else 0.0
        return {
            'path': str(self.path),
            'keys': len(self._data),
            'size_mb': round(size_mb, 4),
            'save_count': self.save_count,
            'last_save': self.last_save
        }

__all__ = [
    'PROGRAMS_KEY',
    'PROGRESS_KEY',
    'PROGRAM_START_DATE_KEY',
    'CURRENT_PROGRAM_ID_KEY',
    'UNLOCKED_ACHIEVEMENTS_KEY',
    'SHOWN_ACHIEVEMENTS_KEY',
    'USER_PROFILE_KEY',
    'StorageError',
    'StorageCorruptionError',
    'StorageWriteError',
    'encode_blob',
    'decode_blob',
    'BlobStore',
    'MemoryBlobStore',
    'JsonFileBlobStore'
]
