from flask import current_app
from scoreboard import db


class KeyValue(db.Model):
    __tablename__ = 'key_value'
    key = db.Column(db.String(128), primary_key=True)
    value = db.Column(db.Text, nullable=False)


class SqlKeyValueBackend:
    """Key-value backend on the ``key_value`` table.

    Each ``set`` is a single commit, so readers never see a partial blob.
    """

    def get(self, key):
        row = db.session.get(KeyValue, key)
        return row.value if row else None

    def set(self, key, value):
        try:
            row = db.session.get(KeyValue, key)
            if row is None:
                db.session.add(KeyValue(key=key, value=value))
            else:
                row.value = value
            db.session.commit()
        except Exception:
            db.session.rollback()
            current_app.logger.exception(f"[store] failed to write key={key!r}; rolled back")
            raise
