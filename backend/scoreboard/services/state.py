"""Score ledger, history log and the operations that mutate them.

``ScoreModel`` is the only writer of ``AppState``: every mutation returns a
new state object and persists it through the store before returning.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


class Team(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    color: str


class HistoryEntry(BaseModel):
    """One committed score change. Never modified after creation."""

    model_config = ConfigDict(frozen=True)

    time: datetime
    admin: str
    team: str
    delta: int
    note: str = ""

    @field_validator('note', mode='before')
    @classmethod
    def _none_note(cls, value):
        return '' if value is None else value


class AppState(BaseModel):
    """Persisted aggregate: ledger, history and last update time."""

    model_config = ConfigDict(populate_by_name=True)

    version: int = SCHEMA_VERSION
    scores: Dict[str, int]
    history: List[HistoryEntry] = []
    last_update: Optional[datetime] = Field(default=None, alias='lastUpdate')

    @model_validator(mode='after')
    def _last_update_matches_history(self):
        if (self.last_update is None) != (not self.history):
            raise ValueError('lastUpdate must be null exactly when history is empty')
        return self


def load_teams(raw: Iterable) -> List[Team]:
    """Build the fixed team set from config entries (dicts or Team objects)."""
    teams = [t if isinstance(t, Team) else Team(**t) for t in raw]
    names = [t.name for t in teams]
    if len(set(names)) != len(names):
        raise ValueError(f"Duplicate team names in config: {names}")
    return teams


def default_state(teams: Iterable[Team]) -> AppState:
    return AppState(scores={t.name: 0 for t in teams}, history=[], last_update=None)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_delta(delta: int) -> str:
    """Signed rendering used in notices, history and exports: +5, -3, 0."""
    return f"+{delta}" if delta > 0 else str(delta)


class ScoreModel:
    def __init__(self, store, teams: Iterable[Team], clock: Callable[[], datetime] = utcnow):
        self.store = store
        self.teams = list(teams)
        self.clock = clock

    @property
    def team_names(self) -> List[str]:
        return [t.name for t in self.teams]

    def is_known_team(self, team: str) -> bool:
        return team in self.team_names

    def load(self) -> AppState:
        return self.store.load()

    def apply_change(self, state: AppState, team: str, delta: int, admin: str, note: str = "") -> AppState:
        """Add ``delta`` to ``team`` and append the matching history entry.

        An unknown team leaves ``state`` untouched and nothing is persisted.
        A zero delta is applied and logged like any other.
        """
        if not self.is_known_team(team) or team not in state.scores:
            logger.warning(f"Rejected change for unknown team {team!r} (delta={delta})")
            return state

        now = self.clock()
        entry = HistoryEntry(time=now, admin=admin, team=team, delta=delta, note=note or '')
        scores = dict(state.scores)
        scores[team] += delta
        new_state = AppState(
            version=state.version,
            scores=scores,
            history=[*state.history, entry],
            last_update=now,
        )
        self.store.save(new_state)
        logger.info(f"Applied {format_delta(delta)} to {team} by {admin}; score now {scores[team]}")
        return new_state

    def reset_all(self, state: AppState) -> AppState:
        """Zero every ledger entry and clear the history. There is no undo."""
        new_state = AppState(
            version=state.version,
            scores={name: 0 for name in state.scores},
            history=[],
            last_update=None,
        )
        self.store.save(new_state)
        logger.info(f"Reset all scores; cleared {len(state.history)} history entries")
        return new_state
