"""
Socket channel for the three collections.

On connect each client receives a snapshot of every collection. A client
write is persisted, then the refreshed collection is broadcast to every
other connection; the sender keeps its local copy and gets no echo.
"""
import logging
from typing import Set

from flask import current_app, request
from flask_socketio import SocketIO, emit

from .errors import InvalidDocument
from .events import EventType, snapshot, sync_error_payload

logger = logging.getLogger(__name__)

socketio = SocketIO()


class ConnectionTracker:
    """Session ids of the connections currently in the Connected state."""
    
    def __init__(self):
        self._connected: Set[str] = set()
    
    def connect(self, sid: str):
        self._connected.add(sid)
    
    def disconnect(self, sid: str):
        self._connected.discard(sid)
    
    def is_connected(self, sid: str) -> bool:
        return sid in self._connected
    
    def __len__(self):
        return len(self._connected)


connections = ConnectionTracker()


def init_socketio(app):
    """Bind the socket server to the app using its transport settings."""
    socketio.init_app(
        app,
        cors_allowed_origins=[app.config['CORS_ORIGIN']],
        cors_credentials=True,
        transports=app.config['SOCKETIO_TRANSPORTS'],
        ping_interval=app.config['SOCKETIO_PING_INTERVAL'],
        ping_timeout=app.config['SOCKETIO_PING_TIMEOUT'],
        message_queue=app.config['REDIS_URL'],
        async_mode=app.config['SOCKETIO_ASYNC_MODE'],
    )
    app.connections = connections
    return socketio


def _collection_writers(store):
    return {
        EventType.TOURNAMENT_UPDATE: (store.upsert_tournament, store.list_tournaments),
        EventType.TEAM_UPDATE: (store.upsert_team, store.list_teams),
        EventType.MESSAGE: (store.append_message, store.list_messages),
    }


def push_snapshots():
    """Send each collection to the current connection only."""
    store = current_app.store
    emit(EventType.TOURNAMENT_UPDATE.value, snapshot(store.list_tournaments()))
    emit(EventType.TEAM_UPDATE.value, snapshot(store.list_teams()))
    emit(EventType.MESSAGE.value, snapshot(store.list_messages()))


def handle_write(event: EventType, data) -> dict:
    """
    Persist one client document and broadcast the refreshed collection.
    
    A failed write is rolled back and reported to the sender alone via
    syncError; other connections see nothing.
    
    Returns:
        Acknowledgement sent back to the sender's callback
    """
    store = current_app.store
    write, read_all = _collection_writers(store)[event]
    
    try:
        if not isinstance(data, dict):
            raise InvalidDocument(f"{event.value} payload must be an object")
        record = write(data)
        payload = snapshot(read_all())
    except Exception as e:
        # Includes driver errors SQLAlchemy does not wrap, such as OverflowError
        store.session.rollback()
        logger.exception(f"Failed to persist {event.value} from {request.sid}")
        message = e.message if isinstance(e, InvalidDocument) else 'Failed to save document'
        emit(EventType.SYNC_ERROR.value, sync_error_payload(event, message))
        return {'ok': False, 'error': message}
    
    emit(event.value, payload, broadcast=True, include_self=False)
    return {'ok': True, '_id': record.id}


@socketio.on('connect')
def on_connect(auth=None):
    transport = request.args.get('transport', 'unknown')
    connections.connect(request.sid)
    logger.info(f"Client connected via {transport} ID: {request.sid}")
    push_snapshots()


@socketio.on('disconnect')
def on_disconnect(reason=None):
    connections.disconnect(request.sid)
    logger.info(f"Client disconnected: {request.sid}")


@socketio.on(EventType.TOURNAMENT_UPDATE.value)
def on_tournament_update(data):
    return handle_write(EventType.TOURNAMENT_UPDATE, data)


@socketio.on(EventType.TEAM_UPDATE.value)
def on_team_update(data):
    return handle_write(EventType.TEAM_UPDATE, data)


@socketio.on(EventType.MESSAGE.value)
def on_message(data):
    return handle_write(EventType.MESSAGE, data)


@socketio.on_error_default
def on_socket_error(e):
    logger.error(f"Socket error: {e}")
