"""API blueprint for REST endpoints."""

import platform
from datetime import datetime
from flask import Blueprint, request, jsonify, current_app
from ...core.config import AppConfig
from ...core.scanner import DirectoryScanner
from ...core.files import FileService, HASH_ALGORITHM
from ...core.discovery import VaultDiscovery, user_directories
from ...core.exceptions import (
    DeskFSError, ValidationError, PathNotFoundError, NotDirectoryError,
    AccessDeniedError, FileTooLargeError, FileReadError
)

api_bp = Blueprint('api', __name__)


def get_app_config() -> AppConfig:
    """Get the backend configuration attached to the current app."""
    return current_app.config['DESKFS_CONFIG']


def require_path_argument() -> str:
    """
    Get the 'path' query parameter.

    Raises:
        ValidationError: If the parameter is missing or blank
    """
    path = request.args.get('path', '').strip()
    if not path:
        raise ValidationError("Query parameter 'path' is required")
    return path


def handle_api_error(error, operation="request"):
    """
    Map a deskfs error to a JSON response body and status code.

    Args:
        error: The exception that occurred
        operation: Description of the operation that failed

    Returns:
        Tuple of (response_dict, status_code)
    """
    if isinstance(error, ValidationError):
        body, status = {'error': 'Validation error', 'message': str(error)}, 400
    elif isinstance(error, PathNotFoundError):
        body, status = {'error': 'Path not found', 'message': str(error)}, 404
    elif isinstance(error, NotDirectoryError):
        body, status = {'error': 'Not a directory', 'message': str(error)}, 400
    elif isinstance(error, AccessDeniedError):
        body, status = {'error': 'Permission denied', 'message': str(error)}, 403
    elif isinstance(error, FileTooLargeError):
        body, status = {'error': 'File too large', 'message': str(error)}, 413
    elif isinstance(error, FileReadError):
        body, status = {'error': 'Read error', 'message': str(error)}, 500
    elif isinstance(error, DeskFSError):
        body, status = {'error': 'Application error', 'message': str(error)}, 400
    else:
        current_app.logger.error(f"API error in {operation}: {error}", exc_info=True)
        return {'error': 'Internal server error', 'message': 'An unexpected error occurred'}, 500

    current_app.logger.warning(f"API error in {operation}: {error}")
    if getattr(error, 'path', None):
        body['path'] = error.path
    return body, status


@api_bp.route('/health', methods=['GET'])
def health_check():
    """Report backend status."""
    app_config = get_app_config()
    return jsonify({
        'status': 'healthy',
        'version': app_config.version,
        'platform': platform.system().lower(),
        'timestamp': datetime.now().isoformat()
    })


@api_bp.route('/files', methods=['GET'])
def list_directory():
    """
    List a directory.

    Query parameters:
    - path: Directory to list
    """
    path = require_path_argument()
    entries = DirectoryScanner(get_app_config()).list_directory(path)

    return jsonify({
        'path': path,
        'entries': [entry.to_dict() for entry in entries],
        'count': len(entries)
    })


@api_bp.route('/files/text', methods=['GET'])
def read_text_file():
    """
    Read a text file for preview.

    Query parameters:
    - path: File to read
    """
    path = require_path_argument()
    content = FileService(get_app_config()).read_text_file(path)

    return jsonify({'path': path, 'content': content})


@api_bp.route('/files/hash', methods=['GET'])
def hash_file():
    """
    Hash a file's content.

    Query parameters:
    - path: File to hash
    """
    path = require_path_argument()
    digest = FileService(get_app_config()).hash_file(path)

    return jsonify({'path': path, 'algorithm': HASH_ALGORITHM, 'hash': digest})


@api_bp.route('/vaults', methods=['GET'])
def discover_vaults():
    """Discover note vaults under the user's folders."""
    result = VaultDiscovery(get_app_config()).discover_with_report()
    return jsonify(result.to_dict())


@api_bp.route('/user-directories', methods=['GET'])
def get_user_directories():
    """Get the well-known user folders."""
    return jsonify(user_directories(get_app_config().home_dir))
