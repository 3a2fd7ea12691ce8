import logging
from typing import List

from shared.choices import Role, Rank, Gender
from shared.entities import Player
from shared.errors import ValidationError, NotFoundError, CapacityExceededError
from .store import RegistrationStore
from .team_registry import TeamRegistry
from .validation import clean_text_fields, parse_team_id

logger = logging.getLogger(__name__)

ROSTER_CAPACITY = 5


class RosterLedger:
    """
    Owns the Player records of a RegistrationStore.

    Every player references an existing team by id and no team ever holds
    more than ROSTER_CAPACITY players. The team lookup, the capacity count
    and the insert happen under the store lock as one critical section.
    """

    def __init__(self, store: RegistrationStore, teams: TeamRegistry):
        self.store = store
        self.teams = teams

    def create_player(
        self,
        name: str,
        nickname: str,
        role,
        rank,
        gender,
        team_id
    ) -> Player:
        """Register a player on a team."""
        team_id = parse_team_id(team_id)

        with self.store.lock():
            team = self.teams.get_team(team_id)
            if team is None:
                logger.info(f"Rejected player for unknown team {team_id}")
                raise NotFoundError('team', team_id)

            fields = self._validate(name, nickname, role, rank, gender)

            if self.remaining_slots(team_id) <= 0:
                logger.warning(f"Team {team_id} ({team.name}) is full, rejected {fields['nickname']}")
                raise CapacityExceededError(team_id, team.name, ROSTER_CAPACITY)

            player = Player(
                id=self.store.allocator.next_id('player'),
                team_id=team_id,
                **fields
            )
            self.store.players[player.id] = player

        logger.info(f"Registered player {player.id} ({player.nickname}) on team {team_id}")
        return player

    def _validate(self, name, nickname, role, rank, gender) -> dict:
        errors = []
        fields = {}

        try:
            fields.update(clean_text_fields({'name': name, 'nickname': nickname}))
        except ValidationError as e:
            errors.extend(e.fields)

        for field, choice, raw in (
            ('role', Role, role),
            ('rank', Rank, rank),
            ('gender', Gender, gender),
        ):
            try:
                fields[field] = choice.parse(raw, field)
            except ValidationError:
                errors.append(field)

        if errors:
            raise ValidationError(
                f"Invalid or missing fields: {', '.join(errors)}",
                fields=errors
            )
        return fields

    def list_players_by_team(self, team_id: int) -> List[Player]:
        with self.store.lock():
            return [p for p in self.store.players.values() if p.team_id == team_id]

    def count_players_by_team(self, team_id: int) -> int:
        with self.store.lock():
            return sum(1 for p in self.store.players.values() if p.team_id == team_id)

    def remaining_slots(self, team_id: int) -> int:
        """Open roster spots on a team (0 when full)."""
        return ROSTER_CAPACITY - self.count_players_by_team(team_id)
