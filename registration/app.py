import logging
import os
from flask import Flask, render_template, request, jsonify, redirect, url_for
from flask_login import login_required, current_user

from shared.choices import Role, Rank, Gender
from shared.errors import AuthError, ValidationError, NotFoundError, CapacityExceededError
from .config import config
from .store import RegistrationStore
from .team_registry import TeamRegistry
from .roster_ledger import RosterLedger, ROSTER_CAPACITY
from .projections import RosterProjections
from .session_gate import SessionGate
from .session_store import InMemorySessionStore, RedisSessionStore
from .service import RegistrationService
from .routes import auth

FORM_ERRORS = (ValidationError, NotFoundError, CapacityExceededError)


def create_app(config_name: str = None, clock=None) -> Flask:
    """Application factory for the registration service."""
    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__,
                template_folder='templates')
    app.config.from_object(config.get(config_name, config['default']))

    if not app.config.get('ADMIN_USERNAME') or not app.config.get('ADMIN_PASSWORD'):
        raise RuntimeError("ADMIN_USERNAME and ADMIN_PASSWORD must be configured")

    logging.getLogger('registration').setLevel(app.config['LOG_LEVEL'].upper())

    # Initialize extensions
    auth.login_manager.init_app(app)

    # Initialize services
    store = RegistrationStore()
    teams = TeamRegistry(store)
    ledger = RosterLedger(store, teams)
    projections = RosterProjections(teams, ledger)

    idle_seconds = app.config['SESSION_IDLE_MINUTES'] * 60
    sessions = create_session_store(app.config, idle_seconds)
    gate = SessionGate(
        username=app.config['ADMIN_USERNAME'],
        password=app.config['ADMIN_PASSWORD'],
        store=sessions,
        display_name=app.config['ADMIN_DISPLAY_NAME'],
        idle_timeout=idle_seconds,
        clock=clock
    )

    # Store services on app for access in routes
    app.store = store
    app.sessions = sessions
    app.gate = gate
    app.roster = RegistrationService(gate, teams, ledger, projections)

    # Register routes
    register_routes(app)
    register_api_routes(app)
    app.register_blueprint(auth.bp)
    app.register_error_handler(AuthError, auth.auth_required_response)

    app.logger.info(
        f"Registration service ready ({config_name}, sessions: {app.config['SESSION_BACKEND']})"
    )
    return app


def create_session_store(app_config, idle_seconds: int):
    backend = app_config.get('SESSION_BACKEND', 'memory')
    if backend == 'memory':
        return InMemorySessionStore()
    if backend == 'redis':
        return RedisSessionStore.from_url(app_config['REDIS_URL'], idle_seconds)
    raise RuntimeError(f"Unknown SESSION_BACKEND: {backend}")


def register_routes(app: Flask):
    """Register HTML view routes."""

    def player_form(status: int = 200, error: str = None, form=None):
        return render_template('player_form.html',
                             teams=app.roster.teams_with_player_counts(current_user.token),
                             roles=list(Role),
                             ranks=list(Rank),
                             genders=list(Gender),
                             capacity=ROSTER_CAPACITY,
                             error=error,
                             form=form or {}), status

    @app.route('/')
    @login_required
    def index():
        """Menu page."""
        return render_template('menu.html', operator=current_user)

    @app.route('/teams/new')
    @login_required
    def team_new():
        """Create team form."""
        return render_template('team_form.html', form={})

    @app.route('/teams', methods=['POST'])
    @login_required
    def team_create():
        form = request.form
        try:
            app.roster.create_team(
                current_user.token,
                form.get('name'),
                form.get('captain_name'),
                form.get('contact')
            )
        except ValidationError as e:
            return render_template('team_form.html', error=e.message, form=form), e.status_code
        return redirect(url_for('teams_list'))

    @app.route('/teams')
    @login_required
    def teams_list():
        """List teams with their roster fill."""
        return render_template('teams.html',
                             teams=app.roster.teams_with_player_counts(current_user.token),
                             capacity=ROSTER_CAPACITY)

    @app.route('/players/new')
    @login_required
    def player_new():
        """Create player form; teams are rendered as a select."""
        return player_form()

    @app.route('/players', methods=['POST'])
    @login_required
    def player_create():
        form = request.form
        try:
            app.roster.create_player(
                current_user.token,
                form.get('name'),
                form.get('nickname'),
                form.get('role'),
                form.get('rank'),
                form.get('gender'),
                form.get('team_id')
            )
        except FORM_ERRORS as e:
            return player_form(e.status_code, e.message, form)
        return redirect(url_for('players_list'))

    @app.route('/players')
    @login_required
    def players_list():
        """Players grouped by team."""
        return render_template('players.html',
                             roster=app.roster.roster_by_team(current_user.token))


def register_api_routes(app: Flask):
    """Register API routes."""

    def error_response(error):
        body = {'error': error.message}
        if isinstance(error, ValidationError):
            body['fields'] = error.fields
        if isinstance(error, CapacityExceededError):
            body['limit'] = error.limit
        return jsonify(body), error.status_code

    def team_summary(team, player_count: int) -> dict:
        data = team.to_dict()
        data['player_count'] = player_count
        data['capacity'] = ROSTER_CAPACITY
        return data

    # ==================== Teams ====================

    @app.route('/api/v1/teams', methods=['GET'])
    @login_required
    def api_list_teams():
        """List teams with player counts."""
        rows = app.roster.teams_with_player_counts(current_user.token)
        return jsonify({
            'teams': [team_summary(team, count) for team, count in rows],
            'count': len(rows)
        })

    @app.route('/api/v1/teams', methods=['POST'])
    @login_required
    def api_create_team():
        """Create a new team."""
        data = request.get_json(silent=True) or {}
        try:
            team = app.roster.create_team(
                current_user.token,
                data.get('name'),
                data.get('captain_name'),
                data.get('contact')
            )
        except ValidationError as e:
            return error_response(e)

        return jsonify({
            'message': 'Team created',
            'team': team.to_dict()
        }), 201

    @app.route('/api/v1/teams/<int:team_id>', methods=['GET'])
    @login_required
    def api_get_team(team_id: int):
        """Get team details."""
        try:
            team = app.roster.get_team(current_user.token, team_id)
        except NotFoundError as e:
            return error_response(e)

        count = app.roster.count_players_by_team(current_user.token, team_id)
        return jsonify(team_summary(team, count))

    @app.route('/api/v1/teams/<int:team_id>/players', methods=['GET'])
    @login_required
    def api_list_team_players(team_id: int):
        """List the roster of one team."""
        try:
            app.roster.get_team(current_user.token, team_id)
        except NotFoundError as e:
            return error_response(e)

        players = app.roster.list_players_by_team(current_user.token, team_id)
        return jsonify({
            'team_id': team_id,
            'players': [p.to_dict() for p in players],
            'count': len(players)
        })

    # ==================== Players ====================

    @app.route('/api/v1/players', methods=['POST'])
    @login_required
    def api_create_player():
        """Register a player on a team."""
        data = request.get_json(silent=True) or {}
        try:
            player = app.roster.create_player(
                current_user.token,
                data.get('name'),
                data.get('nickname'),
                data.get('role'),
                data.get('rank'),
                data.get('gender'),
                data.get('team_id')
            )
        except FORM_ERRORS as e:
            return error_response(e)

        return jsonify({
            'message': 'Player registered',
            'player': player.to_dict()
        }), 201

    @app.route('/api/v1/roster', methods=['GET'])
    @login_required
    def api_roster():
        """All teams with their players."""
        roster = app.roster.roster_by_team(current_user.token)
        return jsonify({
            'teams': [
                {
                    'team': team.to_dict(),
                    'players': [p.to_dict() for p in players],
                    'player_count': len(players)
                }
                for team, players in roster
            ],
            'capacity': ROSTER_CAPACITY
        })

    # ==================== Health Check ====================

    @app.route('/health')
    def health_check():
        """Health check endpoint."""
        sessions_ok = app.sessions.ping()
        status = 'healthy' if sessions_ok else 'unhealthy'
        code = 200 if sessions_ok else 503

        return jsonify({
            'status': status,
            'session_backend': app.config['SESSION_BACKEND'],
            'sessions': 'connected' if sessions_ok else 'disconnected'
        }), code
