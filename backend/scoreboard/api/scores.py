from flask import Blueprint, Response, jsonify, request, current_app
from flask_login import login_required, current_user
from scoreboard.context import current_session, get_model, json_body, viewer_required
from scoreboard.services.auth import admin_names
from scoreboard.services.errors import EmptyExport
from scoreboard.services.export import project, to_csv
from scoreboard.services.state import format_delta


scoreboard = Blueprint('scoreboard', __name__)
scores = Blueprint('scores', __name__)


def _scoreboard_payload(state):
    model = get_model()
    return {
        'teams': [
            {'name': t.name, 'color': t.color, 'score': state.scores.get(t.name, 0)}
            for t in model.teams
        ],
        'last_update': state.last_update.isoformat() if state.last_update else None,
    }


def _history_payload(state):
    return [
        {
            'time': entry.time.isoformat(),
            'team': entry.team,
            'delta': entry.delta,
            'change': format_delta(entry.delta),
            'admin': entry.admin,
            'note': entry.note,
        }
        for entry in state.history
    ]


def _parse_delta(raw):
    # bool is an int subclass; a JSON true is not a point value
    if isinstance(raw, bool):
        return None
    try:
        delta = int(raw)
    except (TypeError, ValueError, OverflowError):
        return None
    if isinstance(raw, float) and raw != delta:
        return None
    return delta


@scoreboard.route('', methods=['GET'])
@viewer_required
def get_scoreboard():
    return jsonify(_scoreboard_payload(get_model().load()))


@scoreboard.route('/config', methods=['GET'])
def get_config():
    model = get_model()
    return jsonify({
        'teams': [t.model_dump() for t in model.teams],
        'delta_choices': list(current_app.config['DELTA_CHOICES']),
        'admins': admin_names(current_app.config['ADMINS']),
    })


@scores.route('/stage', methods=['POST'])
@login_required
def stage_change():
    data = json_body()
    team = data.get('team')
    delta = _parse_delta(data.get('delta'))
    note = data.get('note') or ''

    if not get_model().is_known_team(team):
        return jsonify({'error': f'Unknown team: {team}'}), 400
    if not delta:
        return jsonify({'error': 'Delta must be a non-zero integer'}), 400
    if not isinstance(note, str):
        return jsonify({'error': 'Note must be text'}), 400

    pending = current_session().stage(team, delta, note.strip())
    return jsonify({
        'pending': pending.to_dict(),
        'message': f'You are about to change {team} by {format_delta(delta)} points.',
    }), 200


@scores.route('/pending', methods=['GET'])
@login_required
def get_pending():
    pending = current_session().pending
    return jsonify({'pending': pending.to_dict() if pending else None})


@scores.route('/confirm', methods=['POST'])
@login_required
def confirm_change():
    ctx = current_session()
    change = ctx.pending
    if change is None:
        state = get_model().load()
        return jsonify({'message': 'Nothing to confirm.', 'scoreboard': _scoreboard_payload(state)}), 200
    state = ctx.confirm(get_model())
    current_app.logger.info(f"[confirm] admin={current_user.get_id()} team={change.team} delta={change.delta}")
    return jsonify({
        'message': f'Updated {change.team} by {format_delta(change.delta)} points.',
        'scoreboard': _scoreboard_payload(state),
    }), 200


@scores.route('/cancel', methods=['POST'])
@login_required
def cancel_change():
    notice = current_session().cancel()
    return jsonify({'message': notice}), 200


@scores.route('/history', methods=['GET'])
@login_required
def get_history():
    state = get_model().load()
    return jsonify({'history': _history_payload(state)})


@scores.route('/reset', methods=['POST'])
@login_required
def reset_scores():
    data = json_body()
    if data.get('confirm') is not True:
        return jsonify({'error': 'Reset must be confirmed with {"confirm": true}'}), 400
    model = get_model()
    state = model.reset_all(model.load())
    current_app.logger.info(f"[reset] admin={current_user.get_id()} reset all scores")
    return jsonify({
        'message': 'All scores have been reset.',
        'scoreboard': _scoreboard_payload(state),
    }), 200


@scores.route('/export', methods=['GET'])
@login_required
def export_history():
    state = get_model().load()
    try:
        rows = project(state.history, current_app.config['EXPORT_TIME_FORMAT'])
    except EmptyExport as exc:
        return jsonify({'error': str(exc)}), 400
    filename = current_app.config['EXPORT_FILENAME']
    return Response(
        to_csv(rows),
        mimetype='text/csv',
        headers={'Content-Disposition': f'attachment; filename={filename}'},
    )
