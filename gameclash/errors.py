class ConfigurationError(Exception):
    """Raised at startup when a required setting is absent."""


class ApiError(Exception):
    status_code = 500
    message = 'Internal server error'
    
    def __init__(self, message: str = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)
    
    def to_dict(self) -> dict:
        return {'error': self.message}


class InvalidCredentials(ApiError):
    status_code = 401
    message = 'Invalid credentials'


class Unauthenticated(ApiError):
    status_code = 401
    message = 'No token provided'


class Forbidden(ApiError):
    status_code = 403
    message = 'Invalid token'


class NotFound(ApiError):
    status_code = 404
    message = 'Not found'


class InvalidDocument(ApiError):
    status_code = 400
    message = 'Invalid document'
