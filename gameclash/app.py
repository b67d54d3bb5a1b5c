import os
import logging

import redis
from flask import Flask, jsonify, request, g
from flask_cors import CORS
from sqlalchemy.exc import SQLAlchemyError

from .auth import AuthGate, require_token
from .config import config
from .errors import ApiError, InvalidCredentials, NotFound
from .models import db
from .realtime import init_socketio
from .seed import seed_collections
from .store import DocumentStore

logger = logging.getLogger(__name__)


def create_app(config_name: str = None) -> Flask:
    """Application factory for the realtime backend."""
    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')
    
    config_class = config[config_name]
    config_class.validate()
    
    app = Flask(__name__)
    app.config.from_object(config_class)
    
    # Initialize extensions
    db.init_app(app)
    CORS(app, origins=[app.config['CORS_ORIGIN']], supports_credentials=True)
    init_socketio(app)
    
    # Initialize services
    app.store = DocumentStore(db)
    app.auth = AuthGate(
        secret=app.config['JWT_SECRET'],
        username=app.config['ADMIN_USERNAME'],
        password=app.config['ADMIN_PASSWORD'],
        ttl_days=app.config['TOKEN_TTL_DAYS']
    )
    
    # Create tables and seed empty collections
    with app.app_context():
        db.create_all()
        if app.config['SEED_ON_STARTUP']:
            seed_collections(app.store)
    
    register_error_handlers(app)
    register_api_routes(app)
    
    return app


def register_error_handlers(app: Flask):
    
    @app.errorhandler(ApiError)
    def handle_api_error(error: ApiError):
        return jsonify(error.to_dict()), error.status_code
    
    @app.errorhandler(404)
    def handle_not_found(error):
        return jsonify({'error': 'Not found'}), 404


def register_api_routes(app: Flask):
    """Register API routes."""
    
    # ==================== Auth ====================
    
    @app.route('/login', methods=['POST'])
    def login():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise InvalidCredentials()
        token = app.auth.issue_token(data.get('username'), data.get('password'))
        return jsonify({'token': token})
    
    @app.route('/user/role', methods=['GET'])
    @require_token
    def user_role():
        return jsonify({'role': g.user['role']})
    
    # ==================== Collections ====================
    
    @app.route('/tournaments', methods=['GET'])
    @require_token
    def list_tournaments():
        return jsonify({
            'tournaments': [t.to_dict() for t in app.store.list_tournaments()]
        })
    
    @app.route('/teams', methods=['GET'])
    @require_token
    def list_teams():
        return jsonify({
            'teams': [t.to_dict() for t in app.store.list_teams()]
        })
    
    @app.route('/messages', methods=['GET'])
    @require_token
    def list_messages():
        return jsonify({
            'messages': [m.to_dict() for m in app.store.list_messages()]
        })
    
    # ==================== Public ====================
    
    @app.route('/public/tournaments/<tournament_id>', methods=['GET'])
    def public_tournament(tournament_id: str):
        """Reduced view of one tournament, no token needed."""
        tournament = app.store.get_tournament(tournament_id)
        if not tournament:
            raise NotFound('Tournament not found')
        return jsonify(tournament.to_public_dict())
    
    # ==================== Health Check ====================
    
    @app.route('/health')
    def health_check():
        """Health check endpoint."""
        try:
            db.session.execute(db.text('SELECT 1'))
            db_ok = True
        except SQLAlchemyError as e:
            logger.warning(f"Database health check failed: {e}")
            db_ok = False
        
        redis_status = 'disabled'
        redis_ok = True
        if app.config['REDIS_URL']:
            try:
                redis.from_url(app.config['REDIS_URL'], socket_connect_timeout=5).ping()
                redis_status = 'connected'
            except redis.RedisError as e:
                logger.warning(f"Redis health check failed: {e}")
                redis_status = 'disconnected'
                redis_ok = False
        
        status = 'healthy' if (db_ok and redis_ok) else 'unhealthy'
        code = 200 if status == 'healthy' else 503
        
        return jsonify({
            'status': status,
            'database': 'connected' if db_ok else 'disconnected',
            'redis': redis_status,
            'connections': len(app.connections)
        }), code
