"""Scoreboard domain services: state model, persistence, sessions, export.

This package contains the pure(ish) domain logic imported by the HTTP
blueprints and CLI commands, keeping transport concerns separated from
score arithmetic and the audit log.
"""

