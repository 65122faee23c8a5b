"""
Storage - Key/value persistence shared by all views.

Every persisted piece of client state (accessibility toggles, learning
progress, saved jobs, fallback chat) lives behind a small string
key/value interface modelled on browser local storage.

Backends:
    MemoryStorage    - In-process dict, used by tests and ephemeral sessions
    JSONFileStorage  - Single JSON file with atomic replace-on-write

Usage:
    storage = JSONFileStorage("~/.inclusive_jobs/storage.json")
    storage.set_item("a11y:text-to-speech", "1")

    # Pick up writes made by another process sharing the file
    unsubscribe = storage.subscribe(lambda event: print(event.key))
    storage.refresh()
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, Optional

logger = logging.getLogger(__name__)


# Stable key names
READ_EASY_KEY = "a11y:readease"
READ_EASY_PARAMS_KEY = "a11y:readease-settings"
SPEECH_KEY = "a11y:text-to-speech"
SPEAK_ON_HOVER_KEY = "a11y:read-on-hover"
SIGN_ON_HOVER_KEY = "a11y:sign-on-hover"
LEARNING_STATE_KEY = "learning:state"
SAVED_JOBS_KEY = "saved_jobs_ids"
SELECTED_SKILLS_KEY = "resources:selected-skills"
CHAT_SELF_KEY = "chat:self"
CHAT_LIST_KEY = "chat:chats"
CHAT_MESSAGES_PREFIX = "chat:messages:"


@dataclass(frozen=True)
class StorageEvent:
    """A change to a stored key made by another writer.

    Attributes:
        key: The changed key (None when the whole store was cleared)
        old_value: Value before the change
        new_value: Value after the change (None when removed)
    """
    key: Optional[str]
    old_value: Optional[str]
    new_value: Optional[str]


StorageListener = Callable[[StorageEvent], None]


class KeyValueStorage(ABC):
    """String key/value store with change notifications."""

    def __init__(self) -> None:
        self._listeners: list[StorageListener] = []

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the stored value, or None when absent."""
        ...

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store a value."""
        ...

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Remove a key; no-op when absent."""
        ...

    @abstractmethod
    def keys(self) -> list[str]:
        """List stored keys."""
        ...

    def clear(self) -> None:
        """Remove every key."""
        for key in self.keys():
            self.remove_item(key)

    def __contains__(self, key: str) -> bool:
        return self.get_item(key) is not None

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self.keys())

    def subscribe(self, listener: StorageListener) -> Callable[[], None]:
        """Listen for changes made by other writers.

        Args:
            listener: Called with a StorageEvent per changed key

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: StorageEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Storage listener failed for key %r", event.key)


class MemoryStorage(KeyValueStorage):
    """Dict-backed storage living for the process lifetime."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        super().__init__()
        self._data: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = str(value)

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data.keys())

    def clear(self) -> None:
        self._data.clear()


class JSONFileStorage(KeyValueStorage):
    """Storage persisted as one JSON object on disk.

    Writes go to a temporary sibling file that is then moved over the
    target with ``os.replace``, so readers only ever see a complete file.
    A missing or corrupt file reads as empty.

    Example:
        storage = JSONFileStorage(tmp_path / "storage.json")
        storage.set_item("saved_jobs_ids", "[1, 2]")
    """

    def __init__(self, path: Path | str) -> None:
        super().__init__()
        self.path = Path(path).expanduser()
        self._lock = threading.Lock()
        self._data: dict[str, str] = self._read_file()

    def _read_file(self) -> dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            logger.warning(f"Could not read storage file {self.path}: {e}")
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Ignoring corrupt storage file {self.path}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring storage file {self.path}: not a JSON object")
            return {}

        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_file(self, data: dict[str, str]) -> None:
        """Persist ``data`` and adopt it as the mirror once the file is in place."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.",
            suffix=".tmp",
            dir=self.path.parent,
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)
            os.replace(tmp_name, self.path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise
        self._data = data

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            data = dict(self._data)
            data[key] = str(value)
            self._write_file(data)

    def remove_item(self, key: str) -> None:
        with self._lock:
            if key not in self._data:
                return
            data = dict(self._data)
            del data[key]
            self._write_file(data)

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._data.keys())

    def clear(self) -> None:
        with self._lock:
            self._write_file({})

    def refresh(self) -> list[StorageEvent]:
        """Re-read the file and notify listeners of external changes.

        Returns:
            The events emitted, one per changed key
        """
        with self._lock:
            old = self._data
            new = self._read_file()
            self._data = new

        events = [
            StorageEvent(key=key, old_value=old.get(key), new_value=new.get(key))
            for key in sorted(set(old) | set(new))
            if old.get(key) != new.get(key)
        ]
        for event in events:
            self._emit(event)
        return events
