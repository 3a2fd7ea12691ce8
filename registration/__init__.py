"""
Registration Service - roster registration for an amateur esports tournament

Responsibilities:
- Team registry (create, list, lookup)
- Player roster ledger (5 players per team, referential integrity)
- Session gate (single operator login, idle expiry)
- Roster projections (player counts, players grouped by team)
- Web views and JSON API over the operations above
"""
