import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///scoreboard.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Key under which the whole scoreboard state is stored as one JSON blob
    SCOREBOARD_DATA_KEY = os.environ.get('SCOREBOARD_DATA_KEY', 'scoreTrackerData')
    # Fixed team set; order is display order
    TEAMS = [
        {'name': 'BLUE', 'color': '#3498db'},
        {'name': 'GREEN', 'color': '#2ecc71'},
        {'name': 'ORANGE', 'color': '#ff5300'},
        {'name': 'PINK', 'color': '#e91e63'},
        {'name': 'RED', 'color': '#e74c3c'},
        {'name': 'YELLOW', 'color': '#f1c40f'},
    ]
    # Static admin table. Plain-text secrets: a coarse gate, not a security boundary.
    ADMINS = [
        {'user': 'Pailin', 'pass': 'pass123'},
        {'user': 'Paulyne', 'pass': 'pass123'},
        {'user': 'Praw', 'pass': 'pass123'},
    ]
    # Point steps offered to the admin UI (each available as + and -)
    DELTA_CHOICES = (1, 5, 10)
    EXPORT_FILENAME = os.environ.get('EXPORT_FILENAME', 'score_history.csv')
    EXPORT_TIME_FORMAT = os.environ.get('EXPORT_TIME_FORMAT', '%Y-%m-%d %H:%M:%S')
    # Session contexts (login identity, pending change) expire after this many seconds
    SESSION_MAX_AGE_SEC = int(os.environ.get('SESSION_MAX_AGE_SEC', str(12 * 60 * 60)))
