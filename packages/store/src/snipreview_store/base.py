"""Abstract store interface.

The whole review history lives under one fixed key as a single JSON array,
newest review first. Backends only need to get and put that one value; the
read → prepend → write cycle and its locking are defined here once.
The CLI depends on BaseStore — not on a concrete backend — so an in-memory
store can stand in for the real one in tests.
"""

from __future__ import annotations

import json
import logging
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator

from snipreview_store.models import record_from_dict, record_to_dict

if TYPE_CHECKING:
    from snipreview_store.models import ReviewRecord

logger = logging.getLogger(__name__)

HISTORY_KEY = "code_reviews"


class CorruptStoreError(Exception):
    """The stored history exists but cannot be decoded."""

    user_message = "Stored review history is corrupt and could not be read. Inspect or remove the store file."


class BaseStore(ABC):
    """Single-key key-value persistence for review history."""

    def __init__(self) -> None:
        self._lock = threading.Lock()

    # ------------------------------------------------------------------ #
    # Backend primitives                                                   #
    # ------------------------------------------------------------------ #

    @abstractmethod
    def _get(self, key: str) -> str | None:
        """Return the raw value at key, or None if absent."""

    @abstractmethod
    def _put(self, key: str, value: str) -> None:
        """Replace the raw value at key."""

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        """Backend-level exclusive section around a read-modify-write.

        Backends shared between processes override this; the default only
        relies on the in-process lock taken by add().
        """
        yield

    # ------------------------------------------------------------------ #
    # Public interface                                                     #
    # ------------------------------------------------------------------ #

    def load(self) -> list[ReviewRecord]:
        """Return the full history, newest first.

        Returns [] when nothing has been stored yet. Raises CorruptStoreError
        when a value is present but cannot be decoded.
        """
        return self._decode(self._get(HISTORY_KEY))

    def save(self, history: list[ReviewRecord]) -> None:
        """Replace the stored history wholesale."""
        self._put(HISTORY_KEY, self._encode(history))

    def add(self, record: ReviewRecord) -> None:
        """Prepend a review to the stored history.

        The read and the write happen under one lock so concurrent writers
        never drop each other's records.
        """
        with self._lock, self._transaction():
            history = self._decode(self._get(HISTORY_KEY))
            history.insert(0, record)
            self._put(HISTORY_KEY, self._encode(history))
        logger.debug("Stored review %s (%d in history)", record.id, len(history))

    def close(self) -> None:
        """Release any resources held by the store (connections, file handles).

        Optional — subclasses that need cleanup should override this.
        Default is a no-op so callers can always call close() safely.
        """

    # ------------------------------------------------------------------ #
    # Serialization                                                        #
    # ------------------------------------------------------------------ #

    @staticmethod
    def _encode(history: list[ReviewRecord]) -> str:
        return json.dumps([record_to_dict(r) for r in history])

    @staticmethod
    def _decode(raw: str | None) -> list[ReviewRecord]:
        if raw is None:
            return []
        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise TypeError(f"expected a JSON array, got {type(data).__name__}")
            return [record_from_dict(d) for d in data]
        except (json.JSONDecodeError, TypeError, KeyError, AttributeError) as e:
            logger.error("Stored history under %r could not be decoded: %s", HISTORY_KEY, e)
            raise CorruptStoreError(str(e)) from e
