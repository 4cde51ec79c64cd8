"""Durable key-value persistence for the scoreboard state.

The whole ``AppState`` lives as one JSON document under a single key.
Backends only need ``get(key)`` and ``set(key, value)``.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional

from pydantic import ValidationError

from .errors import StoreCorruption
from .state import SCHEMA_VERSION, AppState, Team, default_state

logger = logging.getLogger(__name__)

DEFAULT_KEY = 'scoreTrackerData'


class MemoryBackend:
    """Dict-backed store, for tests and embedding without a database."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class StateStore:
    def __init__(self, backend, teams: Iterable[Team], key: str = DEFAULT_KEY):
        self.backend = backend
        self.teams = list(teams)
        self.key = key

    def load(self) -> AppState:
        """Return the persisted state, or a fresh one if missing or corrupted.

        A fresh state is written back immediately so later reads agree.
        """
        raw = self.backend.get(self.key)
        if raw is not None:
            try:
                return self._reconcile(self._decode(raw))
            except StoreCorruption as exc:
                logger.warning(f"Failed to parse stored score data under {self.key!r}, reinitialising: {exc}")
        state = default_state(self.teams)
        self.save(state)
        return state

    def save(self, state: AppState) -> None:
        self.backend.set(self.key, state.model_dump_json(by_alias=True))

    def _decode(self, raw: str) -> AppState:
        try:
            state = AppState.model_validate_json(raw)
        except ValidationError as exc:
            raise StoreCorruption(f"{exc.error_count()} validation error(s): {exc.errors()[0]['msg']}") from exc
        if state.version > SCHEMA_VERSION:
            raise StoreCorruption(f"unsupported schema version {state.version} (max {SCHEMA_VERSION})")
        return state

    def _reconcile(self, state: AppState) -> AppState:
        # Teams added to config since the last save start at zero.
        # Entries for teams no longer configured are left as they are.
        missing = [t.name for t in self.teams if t.name not in state.scores]
        if not missing:
            return state
        logger.info(f"Adding zeroed ledger entries for {missing}")
        scores = dict(state.scores)
        for name in missing:
            scores[name] = 0
        return state.model_copy(update={'scores': scores})
