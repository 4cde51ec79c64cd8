from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_cors import CORS
from flask_migrate import Migrate
import click
from datetime import timedelta
from scoreboard.config import Config

db = SQLAlchemy()
login_manager = LoginManager()
migrate = Migrate()
allowed_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:5174",
    "http://127.0.0.1:5174",
]

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    db.init_app(flask_app)
    login_manager.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Scoreboard services live on the app so each app (and each test) gets its own
    from scoreboard.models import SqlKeyValueBackend
    from scoreboard.services.session import SessionRegistry
    from scoreboard.services.state import ScoreModel, load_teams
    from scoreboard.services.store import StateStore

    teams = load_teams(flask_app.config['TEAMS'])
    store = StateStore(SqlKeyValueBackend(), teams, key=flask_app.config['SCOREBOARD_DATA_KEY'])
    flask_app.extensions['scoreboard'] = ScoreModel(store, teams)
    flask_app.extensions['scoreboard_sessions'] = SessionRegistry(
        max_age=timedelta(seconds=flask_app.config['SESSION_MAX_AGE_SEC']))

    # Import and register blueprints here
    from scoreboard.main import main
    flask_app.register_blueprint(main)

    from scoreboard.api.scores import scores, scoreboard
    flask_app.register_blueprint(scoreboard, url_prefix='/api/scoreboard')
    flask_app.register_blueprint(scores, url_prefix='/api/scores')

    # Flask-Login only trusts an admin the current session context authenticated
    from scoreboard.context import current_session

    @login_manager.user_loader
    def load_user(user_id):
        ctx = current_session(create=False)
        if ctx is not None and ctx.is_admin and ctx.identity.get_id() == user_id:
            return ctx.identity
        return None

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'error': 'Admin login required'}), 401

    @click.command('init-db')
    def init_db_command():
        """Creates the database tables."""
        with flask_app.app_context():
            db.create_all()
            print('Database tables created.')

    @click.command('scores-reset')
    def scores_reset_command():
        """Creates tables if needed, then zeroes every score and clears history."""
        from scoreboard.context import get_model
        with flask_app.app_context():
            db.create_all()
            model = get_model()
            state = model.reset_all(model.load())
            print(f'All scores have been reset ({len(state.scores)} teams).')

    flask_app.cli.add_command(init_db_command)
    flask_app.cli.add_command(scores_reset_command)

    return flask_app
