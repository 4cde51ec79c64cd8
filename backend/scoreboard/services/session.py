"""Session-scoped context: who is at the keyboard and what is staged.

A ``ScoreSession`` is created when a browser session starts and discarded at
logout. Nothing here is persisted.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, Optional, Union

from .auth import VISITOR, AdminUser, Visitor, check_credentials
from .errors import NotAuthorized
from .state import AppState, ScoreModel

logger = logging.getLogger(__name__)

CANCEL_NOTICE = 'Update cancelled.'


@dataclass(frozen=True)
class PendingChange:
    team: str
    delta: int
    note: str = ''

    def to_dict(self):
        return {'team': self.team, 'delta': self.delta, 'note': self.note}


class ScoreSession:
    def __init__(self, sid: Optional[str] = None, created_at: Optional[datetime] = None):
        self.sid = sid or uuid.uuid4().hex
        self.created_at = created_at or datetime.now(timezone.utc)
        self.identity: Union[AdminUser, Visitor, None] = None
        self.pending: Optional[PendingChange] = None

    @property
    def is_admin(self) -> bool:
        return isinstance(self.identity, AdminUser)

    @property
    def is_visitor(self) -> bool:
        return self.identity is VISITOR

    @property
    def can_view(self) -> bool:
        return self.is_admin or self.is_visitor

    @property
    def mode(self) -> str:
        if self.is_admin:
            return 'admin'
        if self.is_visitor:
            return 'visitor'
        return 'none'

    def authenticate(self, username: str, password: str, admins: Iterable[dict]) -> AdminUser:
        """Become ``username`` if the secret matches; raises AuthFailure otherwise."""
        admin = check_credentials(admins, username, password)
        self.sign_in(admin)
        return admin

    def sign_in(self, admin: AdminUser) -> None:
        """Adopt an admin whose credentials were already checked."""
        self.identity = admin
        logger.info(f"Session {self.sid[:8]} authenticated as {admin.username}")

    def enter_visitor_mode(self) -> None:
        # A visitor cannot confirm, so an admin's unconfirmed change goes too
        self.identity = VISITOR
        self.pending = None

    def logout(self) -> None:
        self.identity = None
        self.pending = None

    def stage(self, team: str, delta: int, note: str = '') -> PendingChange:
        """Hold a change for confirmation, replacing any earlier one."""
        self.pending = PendingChange(team=team, delta=delta, note=note or '')
        return self.pending

    def confirm(self, model: ScoreModel) -> AppState:
        if self.pending is None:
            return model.load()
        if not self.is_admin:
            raise NotAuthorized('Only an authenticated admin can confirm a change.')
        change, self.pending = self.pending, None
        state = model.load()
        return model.apply_change(state, change.team, change.delta, self.identity.id, change.note)

    def cancel(self) -> str:
        self.pending = None
        return CANCEL_NOTICE


class SessionRegistry:
    """Owns the live session contexts, keyed by opaque session id.

    Contexts older than ``max_age`` are treated as gone and pruned whenever
    a new one is opened.
    """

    def __init__(self, max_age: Optional[timedelta] = None, clock=None):
        self._sessions: Dict[str, ScoreSession] = {}
        self.max_age = max_age
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def __len__(self):
        return len(self._sessions)

    def __contains__(self, sid):
        return sid in self._sessions

    def _expired(self, ctx: ScoreSession, now: datetime) -> bool:
        return self.max_age is not None and now - ctx.created_at > self.max_age

    def prune(self) -> int:
        now = self.clock()
        stale = [sid for sid, ctx in self._sessions.items() if self._expired(ctx, now)]
        for sid in stale:
            del self._sessions[sid]
        if stale:
            logger.info(f"Expired {len(stale)} session context(s)")
        return len(stale)

    def open(self) -> ScoreSession:
        self.prune()
        ctx = ScoreSession(created_at=self.clock())
        self._sessions[ctx.sid] = ctx
        return ctx

    def get(self, sid: Optional[str]) -> Optional[ScoreSession]:
        if not sid:
            return None
        ctx = self._sessions.get(sid)
        if ctx is not None and self._expired(ctx, self.clock()):
            del self._sessions[sid]
            return None
        return ctx

    def discard(self, sid: Optional[str]) -> None:
        if sid:
            self._sessions.pop(sid, None)
