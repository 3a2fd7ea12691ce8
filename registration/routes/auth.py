from flask import Blueprint, render_template, request, jsonify, redirect, url_for, current_app
from flask_login import LoginManager, UserMixin, login_user, logout_user, login_required, current_user

from shared.errors import AuthError
from registration.session_store import Session

bp = Blueprint('auth', __name__)
login_manager = LoginManager()


class Operator(UserMixin):
    """Flask-Login user backed by a gate session; the id is the session token."""

    def __init__(self, session: Session):
        self.session = session

    def get_id(self):
        return self.session.token

    @property
    def token(self) -> str:
        return self.session.token

    @property
    def display_name(self) -> str:
        return self.session.display_name


@login_manager.user_loader
def load_operator(token):
    gate = current_app.gate
    if not gate.authorize(token):
        return None
    session = gate.get_session(token)
    return Operator(session) if session else None


@login_manager.request_loader
def load_operator_from_request(req):
    """Allow API clients to send the token instead of the session cookie."""
    token = req.headers.get('X-Session-Token')
    if not token:
        auth_header = req.headers.get('Authorization', '')
        if auth_header.startswith('Bearer '):
            token = auth_header[len('Bearer '):].strip()
    if not token:
        return None
    return load_operator(token)


def auth_required_response(error: AuthError = None):
    error = error or AuthError()
    if request.path.startswith('/api/'):
        return jsonify({'error': error.message}), 401
    return redirect(url_for('auth.login'))


@login_manager.unauthorized_handler
def unauthorized():
    return auth_required_response()


# --- Routes ---

@bp.route('/login', methods=['GET'])
def login():
    if current_user.is_authenticated:
        return redirect(url_for('index'))
    return render_template('login.html')


@bp.route('/login', methods=['POST'])
def login_submit():
    try:
        session = current_app.gate.authenticate(
            request.form.get('username'),
            request.form.get('password')
        )
    except AuthError as e:
        return render_template('login.html', error=e.message), 401

    login_user(Operator(session))
    return redirect(url_for('index'))


@bp.route('/logout')
def logout():
    if current_user.is_authenticated:
        current_app.gate.terminate(current_user.token)
    logout_user()
    return redirect(url_for('auth.login'))


@bp.route('/api/v1/auth/login', methods=['POST'])
def api_login():
    data = request.get_json(silent=True) or {}
    try:
        session = current_app.gate.authenticate(data.get('username'), data.get('password'))
    except AuthError as e:
        return jsonify({'error': e.message}), 401

    login_user(Operator(session))
    return jsonify({
        'message': 'Logged in',
        'token': session.token,
        'session': session.to_dict()
    })


@bp.route('/api/v1/auth/logout', methods=['POST'])
@login_required
def api_logout():
    current_app.gate.terminate(current_user.token)
    logout_user()
    return jsonify({'message': 'Logged out'})


@bp.route('/api/v1/auth/session', methods=['GET'])
@login_required
def api_session():
    return jsonify(current_user.session.to_dict())
