from flask import Blueprint, current_app, request, jsonify
from flask_login import login_user, logout_user, current_user
from scoreboard.context import current_session, end_session, json_body
from scoreboard.services.auth import check_credentials
from scoreboard.services.errors import AuthFailure

main = Blueprint('main', __name__)

@main.route('/login', methods=['POST', 'OPTIONS'])
def login():
    if request.method == 'OPTIONS':
        return jsonify({'status': 'ok'}), 200
    data = json_body()
    try:
        admin = check_credentials(current_app.config['ADMINS'], data.get('username'), data.get('password'))
    except AuthFailure as exc:
        current_app.logger.info(f"[login] rejected username={data.get('username')!r}")
        return jsonify({"success": False, "message": str(exc)}), 401
    # Only a successful login opens a session context
    current_session().sign_in(admin)
    login_user(admin)
    return jsonify({"success": True, "user": admin.to_dict(), "message": f"Welcome, {admin.username}!"})

@main.route('/visitor', methods=['POST', 'OPTIONS'])
def visitor():
    if request.method == 'OPTIONS':
        return jsonify({'status': 'ok'}), 200
    ctx = current_session()
    if ctx.is_admin:
        logout_user()
    ctx.enter_visitor_mode()
    return jsonify({"success": True, "mode": ctx.mode})

@main.route('/check_login', methods=['GET', 'OPTIONS'])
def check_login():
    if request.method == 'OPTIONS':
        return jsonify({'status': 'ok'}), 200
    ctx = current_session(create=False)
    mode = ctx.mode if ctx else 'none'
    user = current_user.to_dict() if current_user.is_authenticated else None
    return jsonify({"success": mode != 'none', "mode": mode, "user": user})

@main.route('/logout', methods=['POST', 'OPTIONS'])
def logout():
    if request.method == 'OPTIONS':
        return jsonify({'status': 'ok'}), 200
    ctx = current_session(create=False)
    if ctx is not None:
        ctx.logout()
    logout_user()
    end_session()
    return jsonify({"success": True, "message": "Logged out."})
