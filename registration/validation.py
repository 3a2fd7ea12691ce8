from typing import Dict, List

from shared.errors import ValidationError


def clean_text_fields(fields: Dict[str, object]) -> Dict[str, str]:
    """Trim every value; raise ValidationError naming each missing, blank or non-text one."""
    cleaned = {}
    missing: List[str] = []
    not_text: List[str] = []
    for field, raw in fields.items():
        if raw is not None and not isinstance(raw, str):
            not_text.append(field)
            continue
        value = (raw or '').strip()
        if not value:
            missing.append(field)
        cleaned[field] = value

    problems = []
    if missing:
        problems.append(f"Required fields are missing: {', '.join(missing)}")
    if not_text:
        problems.append(f"Fields must be text: {', '.join(not_text)}")
    if problems:
        raise ValidationError(
            '; '.join(problems),
            fields=[field for field in fields if field in missing or field in not_text]
        )
    return cleaned


def parse_team_id(raw) -> int:
    """Accept an int or a string holding one; ids start at 1."""
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise ValidationError("Team is required", fields=['team_id'])

    if isinstance(raw, int) and not isinstance(raw, bool):
        team_id = raw
    elif isinstance(raw, str):
        try:
            team_id = int(raw.strip())
        except ValueError:
            raise ValidationError("Team id must be a whole number", fields=['team_id'])
    else:
        raise ValidationError("Team id must be a whole number", fields=['team_id'])

    if team_id < 1:
        raise ValidationError("Team id must be a positive number", fields=['team_id'])
    return team_id
