"""Flask application exposing the deskfs backend to the desktop UI."""

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException
from .blueprints.api import api_bp, handle_api_error
from ..core.config import AppConfig
from ..core.exceptions import DeskFSError


def create_app(app_config=None, overrides=None):
    """
    Create and configure the Flask application.

    Args:
        app_config: AppConfig used by the backend services. Defaults are
                    resolved from the environment if None.
        overrides: Dictionary of Flask configuration values

    Returns:
        Configured Flask application
    """
    app = Flask(__name__)
    app_config = app_config or AppConfig()

    app.config.update({
        'DEBUG': app_config.web.debug,
        'DESKFS_CONFIG': app_config,
    })

    if overrides:
        app.config.update(overrides)

    app.json.sort_keys = False
    app.register_blueprint(api_bp, url_prefix='/api')

    app.logger.info('deskfs web backend startup')

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'error': 'Not found', 'message': 'API endpoint not found'}), 404

    @app.errorhandler(DeskFSError)
    def deskfs_error(error):
        response_data, status_code = handle_api_error(error)
        return jsonify(response_data), status_code

    @app.errorhandler(Exception)
    def unexpected_error(error):
        if isinstance(error, HTTPException):
            return jsonify({'error': error.name, 'message': error.description}), error.code

        app.logger.error(f'Unexpected Error: {error}', exc_info=True)
        return jsonify({
            'error': 'Unexpected error',
            'message': 'An unexpected error occurred'
        }), 500

    return app
