from dataclasses import dataclass

from .choices import Role, Rank, Gender


@dataclass(frozen=True)
class Team:
    id: int
    name: str
    captain_name: str
    contact: str

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'captain_name': self.captain_name,
            'contact': self.contact,
        }


@dataclass(frozen=True)
class Player:
    id: int
    name: str
    nickname: str
    role: Role
    rank: Rank
    gender: Gender
    team_id: int

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'nickname': self.nickname,
            'role': self.role.value,
            'rank': self.rank.value,
            'gender': self.gender.value,
            'team_id': self.team_id,
        }
