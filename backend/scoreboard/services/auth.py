"""Static admin table lookup and the Flask-Login user type."""
from typing import Iterable, List

from flask_login import AnonymousUserMixin, UserMixin

from .errors import AuthFailure


class AdminUser(UserMixin):
    def __init__(self, username):
        self.id = username
        self.username = username

    def __eq__(self, other):
        return isinstance(other, AdminUser) and other.id == self.id

    def __hash__(self):
        return hash(self.id)

    def __repr__(self):
        return f"<AdminUser {self.username}>"

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
        }


class Visitor(AnonymousUserMixin):
    """Read-only viewer that skipped the credential check."""

    def __repr__(self):
        return '<Visitor>'


VISITOR = Visitor()


def admin_names(admins: Iterable[dict]) -> List[str]:
    return [a['user'] for a in admins]


def check_credentials(admins: Iterable[dict], username: str, password: str) -> AdminUser:
    """Exact, case-sensitive match against the static table."""
    admin = next((a for a in admins if a['user'] == username), None)
    if admin is None or admin['pass'] != password:
        raise AuthFailure('Invalid credentials.')
    return AdminUser(admin['user'])
