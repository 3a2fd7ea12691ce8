from enum import Enum
from typing import List
from dataclasses import dataclass


class SessionState(str, Enum):
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


class TransitionError(Exception):
    def __init__(self, from_state: str, to_state: str, reason: str = None):
        self.from_state = from_state
        self.to_state = to_state
        self.reason = reason or f"Cannot transition from {from_state} to {to_state}"
        super().__init__(self.reason)


@dataclass
class Transition:
    from_state: SessionState
    to_state: SessionState
    action: str


GATED_OPERATIONS = [
    "create_team",
    "list_teams",
    "get_team",
    "create_player",
    "list_players_by_team",
    "count_players_by_team",
    "teams_with_player_counts",
    "roster_by_team",
]


class SessionStateMachine:
    TRANSITIONS = [
        Transition(SessionState.ANONYMOUS, SessionState.AUTHENTICATED, "login"),
        Transition(SessionState.AUTHENTICATED, SessionState.AUTHENTICATED, "touch"),
        Transition(SessionState.AUTHENTICATED, SessionState.ANONYMOUS, "logout"),
        Transition(SessionState.AUTHENTICATED, SessionState.ANONYMOUS, "expire"),
    ]

    ALLOWED_ACTIONS = {
        SessionState.ANONYMOUS: ["login"],
        SessionState.AUTHENTICATED: GATED_OPERATIONS + ["logout"],
    }

    def __init__(self, initial_state: SessionState = SessionState.ANONYMOUS):
        self._state = initial_state

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def allowed_actions(self) -> List[str]:
        return self.ALLOWED_ACTIONS.get(self._state, [])

    def can_transition(self, action: str) -> bool:
        for t in self.TRANSITIONS:
            if t.from_state == self._state and t.action == action:
                return True
        return False

    def can_perform(self, action: str) -> bool:
        return action in self.allowed_actions

    def transition(self, action: str) -> SessionState:
        for t in self.TRANSITIONS:
            if t.from_state == self._state and t.action == action:
                self._state = t.to_state
                return self._state

        raise TransitionError(
            self._state.value,
            "unknown",
            f"No valid transition for action '{action}' from state '{self._state.value}'"
        )

    @classmethod
    def from_state_string(cls, state_str: str) -> "SessionStateMachine":
        try:
            state = SessionState(state_str)
        except ValueError:
            state = SessionState.ANONYMOUS
        return cls(initial_state=state)
