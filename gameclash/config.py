import os

from .errors import ConfigurationError


class Config:
    # Database
    DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///gameclash.db')
    SQLALCHEMY_DATABASE_URI = DATABASE_URL
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    
    # Auth
    JWT_SECRET = os.getenv('JWT_SECRET')
    ADMIN_USERNAME = os.getenv('ADMIN_USERNAME')
    ADMIN_PASSWORD = os.getenv('ADMIN_PASSWORD')
    TOKEN_TTL_DAYS = int(os.getenv('TOKEN_TTL_DAYS', '7'))
    
    # Transport
    CORS_ORIGIN = os.getenv('CORS_ORIGIN', 'http://localhost:3000')
    SOCKETIO_PING_INTERVAL = 25
    SOCKETIO_PING_TIMEOUT = 60
    SOCKETIO_TRANSPORTS = ['websocket', 'polling']
    SOCKETIO_ASYNC_MODE = os.getenv('SOCKETIO_ASYNC_MODE') or None
    
    # Redis (optional message queue when running several workers)
    REDIS_URL = os.getenv('REDIS_URL') or None
    
    SEED_ON_STARTUP = os.getenv('SEED_ON_STARTUP', 'true').lower() == 'true'
    
    @classmethod
    def validate(cls):
        pass


class DevelopmentConfig(Config):
    DEBUG = True
    JWT_SECRET = os.getenv('JWT_SECRET', 'dev-secret-key-change-in-prod')
    ADMIN_USERNAME = os.getenv('ADMIN_USERNAME', 'admin')
    ADMIN_PASSWORD = os.getenv('ADMIN_PASSWORD', 'admin123')


class TestingConfig(DevelopmentConfig):
    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv('SQLALCHEMY_DATABASE_URI', 'sqlite:///:memory:')
    REDIS_URL = None
    SEED_ON_STARTUP = False


class ProductionConfig(Config):
    DEBUG = False
    
    @classmethod
    def validate(cls):
        missing = [
            name for name in ('JWT_SECRET', 'ADMIN_USERNAME', 'ADMIN_PASSWORD')
            if not getattr(cls, name)
        ]
        if missing:
            raise ConfigurationError(
                f"Missing required settings: {', '.join(missing)}"
            )


config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}
