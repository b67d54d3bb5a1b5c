from enum import Enum


class EventType(str, Enum):
    # Collection snapshots (server -> client) and writes (client -> server)
    TOURNAMENT_UPDATE = "tournamentUpdate"
    TEAM_UPDATE = "teamUpdate"
    MESSAGE = "message"
    
    # Sent only to the connection whose write failed
    SYNC_ERROR = "syncError"


def snapshot(records) -> list:
    """Serialize a full collection for a socket push."""
    return [r.to_dict() for r in records]


def sync_error_payload(event: EventType, error: str) -> dict:
    return {
        "event": event.value,
        "error": error
    }
