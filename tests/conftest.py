"""
Pytest configuration and fixtures for registration service tests.
"""
import os
import sys
import pytest

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

# Set testing environment before importing app
os.environ['FLASK_ENV'] = 'testing'

from registration.app import create_app
from registration.store import RegistrationStore
from registration.team_registry import TeamRegistry
from registration.roster_ledger import RosterLedger
from registration.projections import RosterProjections
from registration.session_store import InMemorySessionStore
from registration.session_gate import SessionGate
from registration.service import RegistrationService


class FakeClock:
    """Manually advanced clock for idle-window tests."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def app(clock):
    """Create a fresh application (and store) per test."""
    app = create_app('testing', clock=clock)
    yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def auth_client(client):
    """Test client with a logged-in operator session."""
    response = client.post('/login', data={'username': 'admin', 'password': '12345'})
    assert response.status_code == 302
    return client


@pytest.fixture
def store():
    return RegistrationStore()


@pytest.fixture
def team_registry(store):
    return TeamRegistry(store)


@pytest.fixture
def ledger(store, team_registry):
    return RosterLedger(store, team_registry)


@pytest.fixture
def projections(team_registry, ledger):
    return RosterProjections(team_registry, ledger)


@pytest.fixture
def session_store():
    return InMemorySessionStore()


@pytest.fixture
def gate(session_store, clock):
    return SessionGate('admin', '12345', session_store, display_name='Admin', clock=clock)


@pytest.fixture
def token(gate):
    """Token of an authenticated session."""
    return gate.authenticate('admin', '12345').token


@pytest.fixture
def service(gate, team_registry, ledger, projections):
    return RegistrationService(gate, team_registry, ledger, projections)


@pytest.fixture
def alpha(team_registry):
    """The team from the roster-capacity scenario."""
    return team_registry.create_team("Alpha", "Cap1", "999")


@pytest.fixture
def player_fields():
    """Build valid create_player keyword arguments for the n-th player."""
    def build(n: int = 1, **overrides) -> dict:
        fields = {
            'name': f'Player {n}',
            'nickname': f'nick{n}',
            'role': 'Mid',
            'rank': 'Gold',
            'gender': 'Undisclosed',
        }
        fields.update(overrides)
        return fields
    return build
