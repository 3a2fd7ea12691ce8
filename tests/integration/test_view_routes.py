"""
Integration tests for the HTML views (login, menu, team and player pages).
"""
import pytest
from registration.session_gate import DEFAULT_IDLE_TIMEOUT


def add_team(client, name='Alpha', captain='Cap1', contact='999'):
    return client.post('/teams', data={'name': name, 'captain_name': captain, 'contact': contact})


def add_player(client, team_id='1', nickname='ana_mid', **overrides):
    data = {
        'name': 'Ana',
        'nickname': nickname,
        'role': 'Mid',
        'rank': 'Gold',
        'gender': 'Female',
        'team_id': team_id,
    }
    data.update(overrides)
    return client.post('/players', data=data)


class TestLogin:

    def test_login_page(self, client):
        response = client.get('/login')

        assert response.status_code == 200
        assert b'name="username"' in response.data

    def test_login_success_redirects_to_menu(self, client):
        response = client.post('/login', data={'username': 'admin', 'password': '12345'})

        assert response.status_code == 302
        assert response.headers['Location'].endswith('/')

    def test_login_failure(self, client):
        response = client.post('/login', data={'username': 'admin', 'password': 'wrong'})

        assert response.status_code == 401
        assert b'Invalid username or password' in response.data

    def test_login_page_redirects_when_logged_in(self, auth_client):
        response = auth_client.get('/login')
        assert response.status_code == 302

    def test_logout(self, auth_client):
        response = auth_client.get('/logout')
        assert response.status_code == 302
        assert '/login' in response.headers['Location']

        response = auth_client.get('/')
        assert response.status_code == 302
        assert '/login' in response.headers['Location']


class TestGatedPages:

    @pytest.mark.parametrize("path", ['/', '/teams', '/teams/new', '/players', '/players/new'])
    def test_redirects_to_login(self, client, path):
        response = client.get(path)

        assert response.status_code == 302
        assert '/login' in response.headers['Location']

    def test_post_redirects_to_login(self, client, app):
        response = add_team(client)

        assert response.status_code == 302
        assert '/login' in response.headers['Location']
        assert len(app.store.teams) == 0

    def test_idle_expiry_redirects(self, auth_client, clock):
        clock.advance(DEFAULT_IDLE_TIMEOUT + 1)

        response = auth_client.get('/teams')

        assert response.status_code == 302
        assert '/login' in response.headers['Location']

    def test_menu(self, auth_client):
        response = auth_client.get('/')

        assert response.status_code == 200
        assert b'Admin' in response.data
        assert b'/logout' in response.data


class TestTeamPages:

    def test_form(self, auth_client):
        response = auth_client.get('/teams/new')

        assert response.status_code == 200
        assert b'name="captain_name"' in response.data

    def test_create_redirects_to_list(self, auth_client):
        response = add_team(auth_client)

        assert response.status_code == 302
        assert response.headers['Location'].endswith('/teams')

    def test_create_missing_field(self, auth_client, app):
        response = add_team(auth_client, captain='   ')

        assert response.status_code == 400
        assert b'captain_name' in response.data
        assert len(app.store.teams) == 0

    def test_list_shows_roster_fill(self, auth_client):
        add_team(auth_client)
        add_player(auth_client)

        response = auth_client.get('/teams')

        assert response.status_code == 200
        assert b'Alpha' in response.data
        assert b'1/5' in response.data


class TestPlayerPages:

    def test_form_without_teams(self, auth_client):
        response = auth_client.get('/players/new')

        assert response.status_code == 200
        assert b'Register a team before adding players' in response.data

    def test_form_lists_teams_and_options(self, auth_client):
        add_team(auth_client)

        response = auth_client.get('/players/new')

        assert b'Alpha (0/5)' in response.data
        assert b'Grandmaster' in response.data
        assert b'Undisclosed' in response.data

    def test_create_redirects_to_list(self, auth_client):
        add_team(auth_client)

        response = add_player(auth_client)

        assert response.status_code == 302
        assert response.headers['Location'].endswith('/players')

    def test_unknown_team(self, auth_client):
        add_team(auth_client)

        response = add_player(auth_client, team_id='42')

        assert response.status_code == 404
        assert b'Team 42 not found' in response.data

    def test_invalid_fields(self, auth_client):
        add_team(auth_client)

        response = add_player(auth_client, rank='')

        assert response.status_code == 400

    def test_full_team(self, auth_client, app):
        add_team(auth_client)
        for i in range(5):
            assert add_player(auth_client, nickname=f'p{i}').status_code == 302

        response = add_player(auth_client, nickname='p6')

        assert response.status_code == 409
        assert b'already has 5 players' in response.data
        assert len(app.store.players) == 5

    def test_list_without_teams(self, auth_client):
        response = auth_client.get('/players')

        assert response.status_code == 200
        assert b'No teams registered' in response.data

    def test_list_grouped_by_team(self, auth_client):
        add_team(auth_client)
        add_team(auth_client, name='Bravo', captain='Cap2')
        add_player(auth_client, team_id='2', nickname='bravo_top')

        response = auth_client.get('/players')

        assert b'Captain: Cap1' in response.data
        assert b'No players registered on this team' in response.data
        assert b'bravo_top' in response.data
