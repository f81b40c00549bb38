"""Persistence backends for the progress tracker."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from career_compass.config.settings import get_settings
from career_compass.progress.models import ProgressState
from career_compass.utils.logging import get_logger

logger = get_logger("progress.storage")


class ProgressStorage(Protocol):
    """Where tracker state lives between sessions."""

    def load(self) -> ProgressState | None: ...

    def save(self, state: ProgressState) -> None: ...


class InMemoryProgressStorage:
    """Keeps a detached copy of the state in memory."""

    def __init__(self, state: ProgressState | None = None) -> None:
        self._state = state.model_copy(deep=True) if state is not None else None

    def load(self) -> ProgressState | None:
        if self._state is None:
            return None
        return self._state.model_copy(deep=True)

    def save(self, state: ProgressState) -> None:
        self._state = state.model_copy(deep=True)


class JsonFileProgressStorage:
    """A simple JSON-backed progress store."""

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else get_settings().progress_store_path

    def load(self) -> ProgressState | None:
        """Load state from disk (None if the file does not exist)."""
        if not self.path.exists():
            return None
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            return ProgressState.model_validate(raw)
        except (json.JSONDecodeError, ValidationError) as e:
            raise ValueError(f"Invalid progress file: {self.path}") from e

    def save(self, state: ProgressState) -> None:
        """Persist state to disk atomically."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = state.model_dump(mode="json")

        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        tmp_path.replace(self.path)
        logger.debug("Saved progress state to %s", self.path)
