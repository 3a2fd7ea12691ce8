from typing import List, Optional


class RegistrationError(Exception):
    status_code = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(RegistrationError):
    status_code = 400

    def __init__(self, message: str, fields: Optional[List[str]] = None):
        self.fields = list(fields or [])
        super().__init__(message)


class NotFoundError(RegistrationError):
    status_code = 404

    def __init__(self, entity: str, entity_id, message: str = None):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(message or f"{entity.capitalize()} {entity_id} not found")


class CapacityExceededError(RegistrationError):
    status_code = 409

    def __init__(self, team_id: int, team_name: str, limit: int):
        self.team_id = team_id
        self.team_name = team_name
        self.limit = limit
        super().__init__(f'Team "{team_name}" already has {limit} players registered')


class AuthError(RegistrationError):
    status_code = 401

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)
