class ScoreboardError(Exception):
    """Base class for scoreboard domain errors."""


class StoreCorruption(ScoreboardError):
    """Persisted state could not be decoded into a valid AppState."""


class AuthFailure(ScoreboardError):
    """Unknown admin identity or wrong secret."""


class NotAuthorized(ScoreboardError):
    """A mutation was attempted by a session that is not an authenticated admin."""


class EmptyExport(ScoreboardError):
    """Export requested while the history log is empty."""
