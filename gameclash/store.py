import logging
import math
from datetime import datetime, timezone
from typing import List, Optional

from flask_sqlalchemy import SQLAlchemy

from .errors import InvalidDocument
from .models import Tournament, Team, Message, new_document_id

logger = logging.getLogger(__name__)


def document_id(doc: dict) -> Optional[str]:
    """Identifier carried by a client document, under '_id' or 'id'."""
    value = doc.get('_id')
    if value is None:
        value = doc.get('id')
    if value is None:
        return None
    return str(value)


def parse_elo(value) -> float:
    """Accept any finite number, or a numeric string, as an elo rating."""
    if isinstance(value, bool):
        raise InvalidDocument(f"Invalid elo: {value}")
    try:
        elo = float(value)
    except (TypeError, ValueError):
        raise InvalidDocument(f"Invalid elo: {value}")
    if not math.isfinite(elo):
        raise InvalidDocument(f"Invalid elo: {value}")
    return elo


def parse_timestamp(value) -> datetime:
    """Parse an ISO-8601 timestamp into a naive UTC datetime."""
    if value is None:
        return datetime.utcnow()
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value)
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise InvalidDocument(f"Invalid timestamp: {value}")
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


class DocumentStore:
    """
    Single process-wide handle over the tournament, team and message
    collections. Every read returns the whole collection; nothing is cached.
    """
    
    def __init__(self, database: SQLAlchemy):
        self.db = database
    
    @property
    def session(self):
        return self.db.session
    
    # ==================== Reads ====================
    
    def list_tournaments(self) -> List[Tournament]:
        return self.session.execute(self.db.select(Tournament)).scalars().all()
    
    def list_teams(self) -> List[Team]:
        return self.session.execute(self.db.select(Team)).scalars().all()
    
    def list_messages(self) -> List[Message]:
        return self.session.execute(
            self.db.select(Message).order_by(Message.timestamp)
        ).scalars().all()
    
    def get_tournament(self, tournament_id: str) -> Optional[Tournament]:
        return self.session.get(Tournament, tournament_id)
    
    def count(self, model) -> int:
        return self.session.execute(
            self.db.select(self.db.func.count()).select_from(model)
        ).scalar_one()
    
    # ==================== Writes ====================
    
    def upsert_tournament(self, doc: dict) -> Tournament:
        return self._upsert(Tournament, doc)
    
    def upsert_team(self, doc: dict) -> Team:
        doc = dict(doc)
        elo = doc.get('elo')
        if elo is not None:
            doc['elo'] = parse_elo(elo)
        members = doc.get('members')
        if members is not None and not isinstance(members, list):
            raise InvalidDocument('members must be a list')
        if members and not all(isinstance(m, str) for m in members):
            raise InvalidDocument('members must be names')
        return self._upsert(Team, doc)
    
    def append_message(self, doc: dict) -> Message:
        """Insert a chat message. Any identifier in the document is ignored."""
        message = Message(
            id=new_document_id(),
            user=doc.get('user'),
            message=doc.get('message'),
            timestamp=parse_timestamp(doc.get('timestamp'))
        )
        self.session.add(message)
        self.session.commit()
        logger.debug(f"Appended message {message.id}")
        return message
    
    def insert_many(self, model, docs: List[dict]) -> list:
        """Bulk insert used by the startup seed."""
        records = []
        for doc in docs:
            record = model(id=new_document_id())
            if model is Message:
                record.user = doc.get('user')
                record.message = doc.get('message')
                record.timestamp = parse_timestamp(doc.get('timestamp'))
            else:
                record.replace(doc)
            self.session.add(record)
            records.append(record)
        self.session.commit()
        return records
    
    def _upsert(self, model, doc: dict):
        """Insert if absent, otherwise replace the stored document whole."""
        doc_id = document_id(doc)
        record = self.session.get(model, doc_id) if doc_id else None
        
        if record is None:
            record = model(id=doc_id or new_document_id())
            self.session.add(record)
            logger.debug(f"Inserting {model.__tablename__} {record.id}")
        else:
            logger.debug(f"Replacing {model.__tablename__} {record.id}")
        
        record.replace(doc)
        self.session.commit()
        return record
