import os

from flask import g, jsonify, request

from ...core.config import get_config_value
from ...core.errors import ValidationError
from ...core.logging_service import LoggingService
from ...core.storage import upload_file
from ..auth.utils import require_auth
from . import upload_bp

ALLOWED_MIME_TYPES = {
    'image/jpeg',
    'image/png',
    'image/jpg',
    'image/gif',
    'image/webp',
    'image/svg+xml',
}


def _file_size(file):
    stream = file.stream
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)
    return size


@upload_bp.route('', methods=['POST'], strict_slashes=False)
@require_auth
def upload_image():
    """Upload one image (multipart field 'file') and return its hosted URL"""
    file = request.files.get('file')
    if file is None or not file.filename:
        raise ValidationError('No file provided', 'NO_FILE')

    mimetype = (file.mimetype or '').lower()
    if mimetype not in ALLOWED_MIME_TYPES:
        raise ValidationError(
            'Invalid file type. Only JPEG, PNG, JPG, GIF, WEBP, and SVG are allowed.',
            'INVALID_FILE_TYPE',
            details={'type': mimetype},
        )

    max_bytes = int(get_config_value('UPLOAD_MAX_BYTES', 2 * 1024 * 1024))
    size = _file_size(file)
    if size > max_bytes:
        raise ValidationError(
            f'File size too large. Maximum size is {max_bytes // (1024 * 1024)}MB.',
            'FILE_TOO_LARGE',
            details={'size': size, 'max_bytes': max_bytes},
        )

    image_url = upload_file(file.read(), file.filename)

    LoggingService.log_user_action('upload', f'Uploaded image {file.filename}', user_id=g.current_user['user_id'],
                                   details={'size': size, 'type': mimetype, 'url': image_url})

    return jsonify({
        'success': True,
        'image_url': image_url,
        'filename': file.filename
    })
