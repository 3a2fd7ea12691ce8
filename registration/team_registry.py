import logging
from typing import List, Optional

from shared.entities import Team
from .store import RegistrationStore
from .validation import clean_text_fields

logger = logging.getLogger(__name__)


class TeamRegistry:
    """
    Owns the Team records of a RegistrationStore:
    - Create teams with trimmed, non-empty fields
    - List teams in creation order
    - Look teams up by id
    """

    def __init__(self, store: RegistrationStore):
        self.store = store

    def create_team(self, name: str, captain_name: str, contact: str) -> Team:
        """Validate and store a new team."""
        fields = clean_text_fields({
            'name': name,
            'captain_name': captain_name,
            'contact': contact,
        })

        with self.store.lock():
            team = Team(id=self.store.allocator.next_id('team'), **fields)
            self.store.teams[team.id] = team

        logger.info(f"Created team {team.id}: {team.name} (captain {team.captain_name})")
        return team

    def list_teams(self) -> List[Team]:
        with self.store.lock():
            return list(self.store.teams.values())

    def get_team(self, team_id: int) -> Optional[Team]:
        """Get team by id, None when it does not exist."""
        return self.store.teams.get(team_id)
