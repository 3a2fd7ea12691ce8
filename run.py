#!/usr/bin/env python3
"""
Entry point for the Roster Registration Service.

Usage:
    python run.py

Environment Variables:
    FLASK_ENV: development, production or testing (default: development)
    PORT: Port to run on (default: 3000)
    ADMIN_USERNAME / ADMIN_PASSWORD: the operator credential pair
    SESSION_BACKEND: memory or redis (default: memory, redis in production)
    LOG_LEVEL: level for the registration loggers (default: INFO)
"""
import logging
import os
import sys


def run_registration():
    """Run the registration web service."""
    from registration.app import create_app

    try:
        app = create_app()
    except RuntimeError as e:
        print(f"Configuration error: {e}")
        sys.exit(1)

    port = int(os.getenv('PORT', 3000))
    debug = os.getenv('FLASK_ENV', 'development') == 'development'

    print(f"Starting Registration Service on port {port}...")
    app.run(host='0.0.0.0', port=port, debug=debug)


if __name__ == '__main__':
    logging.basicConfig(
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )
    run_registration()
