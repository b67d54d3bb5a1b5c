import hmac
import logging
from datetime import datetime, timedelta, timezone
from functools import wraps

import jwt
from flask import current_app, g, request
from werkzeug.security import generate_password_hash, check_password_hash

from .errors import InvalidCredentials, Unauthenticated, Forbidden

logger = logging.getLogger(__name__)

ORGANIZER_ROLE = 'organizer'
TOKEN_ALGORITHM = 'HS256'


class AuthGate:
    """
    Issues and verifies bearer tokens for the single organizer account.
    
    Tokens are HS256-signed JWTs carrying {username, role} and an expiry.
    There is no refresh, revocation or user store.
    """
    
    def __init__(self, secret: str, username: str, password: str, ttl_days: int = 7):
        self.secret = secret
        self.username = username
        self._password_hash = generate_password_hash(password)
        self.ttl = timedelta(days=ttl_days)
    
    def issue_token(self, username: str, password: str) -> str:
        """Return a signed token for the organizer credential pair."""
        if not username or not password:
            raise InvalidCredentials()
        
        username_ok = hmac.compare_digest(str(username).encode(), self.username.encode())
        password_ok = check_password_hash(self._password_hash, str(password))
        if not (username_ok and password_ok):
            logger.info(f"Rejected login for {username!r}")
            raise InvalidCredentials()
        
        now = datetime.now(timezone.utc)
        payload = {
            'username': username,
            'role': ORGANIZER_ROLE,
            'iat': now,
            'exp': now + self.ttl,
        }
        return jwt.encode(payload, self.secret, algorithm=TOKEN_ALGORITHM)
    
    def verify_token(self, token: str) -> dict:
        """Check signature and expiry, returning {username, role}."""
        if not token:
            raise Unauthenticated()
        try:
            claims = jwt.decode(token, self.secret, algorithms=[TOKEN_ALGORITHM])
        except jwt.InvalidTokenError as e:
            logger.debug(f"Token rejected: {e}")
            raise Forbidden()
        return {'username': claims.get('username'), 'role': claims.get('role')}


def bearer_token() -> str:
    """Extract the token from 'Authorization: Bearer <token>'."""
    header = request.headers.get('Authorization', '')
    parts = header.split(' ', 1)
    if len(parts) < 2:
        return None
    return parts[1].strip() or None


def require_token(view):
    """Reject the request unless it carries a valid token; claims go on g.user."""
    @wraps(view)
    def wrapped(*args, **kwargs):
        g.user = current_app.auth.verify_token(bearer_token())
        return view(*args, **kwargs)
    return wrapped
