import uuid
from datetime import datetime
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


def new_document_id() -> str:
    return uuid.uuid4().hex


class Tournament(db.Model):
    __tablename__ = 'tournaments'
    
    id = db.Column(db.String(64), primary_key=True, default=new_document_id)
    name = db.Column(db.String(200), nullable=True)
    date = db.Column(db.String(50), nullable=True)  # Free-form, not validated
    status = db.Column(db.String(50), nullable=True)  # e.g. 'Active', 'Upcoming'
    prize_pool = db.Column(db.String(100), nullable=True)
    
    def to_dict(self):
        return {
            '_id': self.id,
            'name': self.name,
            'date': self.date,
            'status': self.status,
            'prizePool': self.prize_pool,
        }
    
    def to_public_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'public': True,
        }
    
    def replace(self, doc: dict):
        """Overwrite every field from a client document."""
        self.name = doc.get('name')
        self.date = doc.get('date')
        self.status = doc.get('status')
        self.prize_pool = doc.get('prizePool')


class Team(db.Model):
    __tablename__ = 'teams'
    
    id = db.Column(db.String(64), primary_key=True, default=new_document_id)
    name = db.Column(db.String(100), nullable=True)
    elo = db.Column(db.Float, nullable=True)  # Unbounded
    members = db.Column(db.JSON, nullable=False, default=list)  # Ordered, duplicates allowed
    
    def to_dict(self):
        return {
            '_id': self.id,
            'name': self.name,
            'elo': self.elo_value,
            'members': list(self.members or []),
        }
    
    @property
    def elo_value(self):
        """Whole ratings go out as integers, others unchanged."""
        if self.elo is not None and float(self.elo).is_integer():
            return int(self.elo)
        return self.elo
    
    def replace(self, doc: dict):
        self.name = doc.get('name')
        self.elo = doc.get('elo')
        self.members = list(doc.get('members') or [])


class Message(db.Model):
    __tablename__ = 'messages'
    
    id = db.Column(db.String(64), primary_key=True, default=new_document_id)
    user = db.Column(db.String(100), nullable=True)
    message = db.Column(db.Text, nullable=True)
    timestamp = db.Column(db.DateTime, default=datetime.utcnow)
    
    def to_dict(self):
        return {
            '_id': self.id,
            'user': self.user,
            'message': self.message,
            'timestamp': self.timestamp.isoformat() + 'Z' if self.timestamp else None,
        }
