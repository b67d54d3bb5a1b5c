"""
GameClash Service - realtime backend for the tournament site

Responsibilities:
- Tournament, team and chat message collections
- Organizer login (bearer tokens)
- Read-only REST endpoints
- Socket channel that relays client writes to every other connection
"""
