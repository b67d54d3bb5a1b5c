"""
Pytest configuration and fixtures for GameClash tests.
"""
import os
import sys
import pytest

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

# Set testing environment before importing app
os.environ['FLASK_ENV'] = 'testing'
os.environ['SQLALCHEMY_DATABASE_URI'] = 'sqlite:///:memory:'

from gameclash.app import create_app
from gameclash.models import db, Tournament, Team, Message
from gameclash.realtime import socketio


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app('testing')
    
    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Create database session for testing."""
    with app.app_context():
        # Clear all tables before each test
        db.session.remove()
        
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()
        
        yield db.session
        
        db.session.rollback()


@pytest.fixture
def store(app):
    return app.store


@pytest.fixture
def auth_headers(client, db_session):
    """Authorization header carrying a valid organizer token."""
    response = client.post('/login', json={'username': 'admin', 'password': 'admin123'})
    token = response.get_json()['token']
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def sample_tournament(app, db_session):
    """Create a sample tournament for testing."""
    with app.app_context():
        tournament = Tournament(
            id='tournament-001',
            name='Test Tournament',
            date='2025-06-01',
            status='Upcoming',
            prize_pool='$1,000'
        )
        db.session.add(tournament)
        db.session.commit()
        
        db.session.refresh(tournament)
        return tournament


@pytest.fixture
def sample_teams(app, db_session):
    """Create sample teams for testing."""
    with app.app_context():
        teams = []
        for i in range(3):
            team = Team(
                id=f'team-{i+1}',
                name=f'Team {i+1}',
                elo=1500 + (i * 50),
                members=[f'Player{i*2+1}', f'Player{i*2+2}']
            )
            db.session.add(team)
            teams.append(team)
        
        db.session.commit()
        
        for team in teams:
            db.session.refresh(team)
        
        return teams


@pytest.fixture
def socket_client(app, db_session):
    """Connected socket client; disconnected after the test."""
    clients = []
    
    def connect():
        sc = socketio.test_client(app)
        clients.append(sc)
        return sc
    
    yield connect
    
    for sc in clients:
        if sc.is_connected():
            sc.disconnect()
