"""
Unit tests for AuthGate.
Tests: issue_token, verify_token, bearer token extraction
"""
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from gameclash.auth import AuthGate, ORGANIZER_ROLE, TOKEN_ALGORITHM
from gameclash.errors import InvalidCredentials, Unauthenticated, Forbidden


SECRET = 'unit-test-secret'


@pytest.fixture
def gate():
    return AuthGate(secret=SECRET, username='admin', password='admin123')


class TestIssueToken:
    """Tests for issue_token method."""
    
    def test_valid_credentials(self, gate):
        """Organizer credentials should produce a token."""
        token = gate.issue_token('admin', 'admin123')
        assert isinstance(token, str)
        assert token
    
    def test_token_claims(self, gate):
        """Token should carry username and organizer role."""
        token = gate.issue_token('admin', 'admin123')
        claims = jwt.decode(token, SECRET, algorithms=[TOKEN_ALGORITHM])
        
        assert claims['username'] == 'admin'
        assert claims['role'] == ORGANIZER_ROLE
    
    def test_token_expires_in_seven_days(self, gate):
        """Default validity window should be seven days."""
        token = gate.issue_token('admin', 'admin123')
        claims = jwt.decode(token, SECRET, algorithms=[TOKEN_ALGORITHM])
        
        lifetime = claims['exp'] - claims['iat']
        assert lifetime == int(timedelta(days=7).total_seconds())
    
    @pytest.mark.parametrize('username,password', [
        ('admin', 'wrong'),
        ('root', 'admin123'),
        ('Admin', 'admin123'),
        ('', ''),
        (None, None),
        ('admin', None),
    ])
    def test_invalid_credentials(self, gate, username, password):
        """Any other pair should fail."""
        with pytest.raises(InvalidCredentials):
            gate.issue_token(username, password)
    
    def test_password_not_kept_in_plaintext(self, gate):
        """Only a password hash should be stored."""
        assert 'admin123' not in vars(gate).values()


class TestVerifyToken:
    """Tests for verify_token method."""
    
    def test_round_trip(self, gate):
        """Issued token should verify with organizer role."""
        claims = gate.verify_token(gate.issue_token('admin', 'admin123'))
        assert claims == {'username': 'admin', 'role': 'organizer'}
    
    def test_missing_token(self, gate):
        """Missing token should be unauthenticated."""
        with pytest.raises(Unauthenticated):
            gate.verify_token(None)
        with pytest.raises(Unauthenticated):
            gate.verify_token('')
    
    def test_malformed_token(self, gate):
        """Garbage token should be forbidden."""
        with pytest.raises(Forbidden):
            gate.verify_token('not-a-token')
    
    def test_wrong_secret(self, gate):
        """Token signed with another secret should be forbidden."""
        other = AuthGate(secret='other-secret', username='admin', password='admin123')
        token = other.issue_token('admin', 'admin123')
        with pytest.raises(Forbidden):
            gate.verify_token(token)
    
    def test_expired_token(self, gate):
        """Expired token should be forbidden."""
        past = datetime.now(timezone.utc) - timedelta(days=8)
        token = jwt.encode(
            {'username': 'admin', 'role': 'organizer', 'iat': past, 'exp': past + timedelta(days=1)},
            SECRET,
            algorithm=TOKEN_ALGORITHM
        )
        with pytest.raises(Forbidden):
            gate.verify_token(token)
    
    def test_custom_ttl(self):
        """Negative TTL tokens should already be expired."""
        gate = AuthGate(secret=SECRET, username='admin', password='admin123', ttl_days=-1)
        token = gate.issue_token('admin', 'admin123')
        with pytest.raises(Forbidden):
            gate.verify_token(token)


class TestErrorStatus:
    """Tests for status codes carried by auth errors."""
    
    def test_status_codes(self):
        assert InvalidCredentials.status_code == 401
        assert Unauthenticated.status_code == 401
        assert Forbidden.status_code == 403
    
    def test_error_payload(self):
        assert Forbidden().to_dict() == {'error': 'Invalid token'}
        assert Unauthenticated().to_dict() == {'error': 'No token provided'}
