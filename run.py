#!/usr/bin/env python3
"""
Entry point for the GameClash realtime backend.

Usage:
    python run.py

Environment Variables:
    FLASK_ENV: development, testing or production (default: development)
    PORT: Port to run on (default: 3001)
    LOG_LEVEL: Logging level (default: INFO)
    JWT_SECRET, ADMIN_USERNAME, ADMIN_PASSWORD: required in production
"""
import os
import logging


def main():
    logging.basicConfig(
        level=os.getenv('LOG_LEVEL', 'INFO').upper(),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )
    
    from gameclash.app import create_app
    from gameclash.realtime import socketio
    
    app = create_app()
    port = int(os.getenv('PORT', 3001))
    
    logging.getLogger(__name__).info(f"Server running on http://localhost:{port}")
    socketio.run(app, host='0.0.0.0', port=port, debug=app.config.get('DEBUG', False),
                 allow_unsafe_werkzeug=True)


if __name__ == '__main__':
    main()
