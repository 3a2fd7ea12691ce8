from typing import List, Tuple

from shared.entities import Team, Player
from shared.errors import NotFoundError
from .projections import RosterProjections
from .roster_ledger import RosterLedger
from .session_gate import SessionGate
from .team_registry import TeamRegistry


class RegistrationService:
    """
    Gated operation surface for the web layer.

    Every call authorizes the session token first and raises AuthError
    when the session is missing, logged out or idle-expired.
    """

    def __init__(
        self,
        gate: SessionGate,
        teams: TeamRegistry,
        ledger: RosterLedger,
        projections: RosterProjections
    ):
        self.gate = gate
        self.teams = teams
        self.ledger = ledger
        self.projections = projections

    # ==================== Teams ====================

    def create_team(self, token: str, name: str, captain_name: str, contact: str) -> Team:
        self.gate.require(token, 'create_team')
        return self.teams.create_team(name, captain_name, contact)

    def list_teams(self, token: str) -> List[Team]:
        self.gate.require(token, 'list_teams')
        return self.teams.list_teams()

    def get_team(self, token: str, team_id: int) -> Team:
        self.gate.require(token, 'get_team')
        team = self.teams.get_team(team_id)
        if team is None:
            raise NotFoundError('team', team_id)
        return team

    # ==================== Players ====================

    def create_player(
        self,
        token: str,
        name: str,
        nickname: str,
        role,
        rank,
        gender,
        team_id
    ) -> Player:
        self.gate.require(token, 'create_player')
        return self.ledger.create_player(name, nickname, role, rank, gender, team_id)

    def list_players_by_team(self, token: str, team_id: int) -> List[Player]:
        self.gate.require(token, 'list_players_by_team')
        return self.ledger.list_players_by_team(team_id)

    def count_players_by_team(self, token: str, team_id: int) -> int:
        self.gate.require(token, 'count_players_by_team')
        return self.ledger.count_players_by_team(team_id)

    # ==================== Projections ====================

    def teams_with_player_counts(self, token: str) -> List[Tuple[Team, int]]:
        self.gate.require(token, 'teams_with_player_counts')
        return self.projections.teams_with_player_counts()

    def roster_by_team(self, token: str) -> List[Tuple[Team, List[Player]]]:
        self.gate.require(token, 'roster_by_team')
        return self.projections.roster_by_team()
