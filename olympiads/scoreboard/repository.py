"""
Snapshot repositories.

The scoreboard never keeps global state: the store is handed a repository
and loads a snapshot from it before each operation, saving the new
snapshot afterwards. Writes are last-write-wins.
"""

import json
import logging
import os
from typing import Optional

from olympiads.scoreboard.snapshot import (
    SnapshotError,
    StoreState,
    state_from_dict,
    state_to_dict,
)

logger = logging.getLogger(__name__)


class SnapshotRepository:
    """Interface for loading and saving the scoreboard state."""

    def load(self) -> StoreState:
        raise NotImplementedError

    def save(self, state: StoreState) -> None:
        raise NotImplementedError


class InMemoryRepository(SnapshotRepository):
    """Keeps the state in memory; used by tests and one-off computations."""

    def __init__(self, state: Optional[StoreState] = None):
        self.state = state or StoreState()

    def load(self) -> StoreState:
        return self.state

    def save(self, state: StoreState) -> None:
        self.state = state


class JsonFileRepository(SnapshotRepository):
    """Stores the snapshot as a JSON document in the backend's camelCase shape."""

    def __init__(self, path: str):
        self.path = path

    def load(self) -> StoreState:
        if not os.path.exists(self.path):
            logger.debug("No snapshot at %s, starting empty", self.path)
            return StoreState()

        with open(self.path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise SnapshotError(f"{self.path}: invalid JSON ({e})")

        logger.debug("Loaded snapshot from %s", self.path)
        return state_from_dict(data)

    def save(self, state: StoreState) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)

        # Readers never see a half-written snapshot
        tmp_path = f"{self.path}.tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(state_to_dict(state), f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except Exception:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
        logger.debug("Saved snapshot to %s", self.path)
