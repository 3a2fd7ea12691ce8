from typing import List, Tuple

from shared.entities import Team, Player
from .roster_ledger import RosterLedger
from .team_registry import TeamRegistry


class RosterProjections:
    """Read-only views composing the team registry and the roster ledger."""

    def __init__(self, teams: TeamRegistry, ledger: RosterLedger):
        self.teams = teams
        self.ledger = ledger

    def teams_with_player_counts(self) -> List[Tuple[Team, int]]:
        with self.teams.store.lock():
            return [
                (team, self.ledger.count_players_by_team(team.id))
                for team in self.teams.list_teams()
            ]

    def roster_by_team(self) -> List[Tuple[Team, List[Player]]]:
        with self.teams.store.lock():
            return [
                (team, self.ledger.list_players_by_team(team.id))
                for team in self.teams.list_teams()
            ]
