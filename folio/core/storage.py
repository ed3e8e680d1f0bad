"""
Storage Utility
===============

Image upload to the media host (Cloudinary) through the cloudinary SDK.
"""

import io
import logging

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import AuthorizationRequired, Error as CloudinaryError

from .config import get_config_value
from .errors import ApiError, ServiceUnavailableError
from .logging_service import LoggingService

logger = logging.getLogger(__name__)

UPLOAD_TIMEOUT = 30


def get_media_config():
    """Cloudinary credentials, or ServiceUnavailableError when any is missing"""
    config = {
        'cloud_name': get_config_value('CLOUDINARY_CLOUD_NAME'),
        'api_key': get_config_value('CLOUDINARY_API_KEY'),
        'api_secret': get_config_value('CLOUDINARY_API_SECRET'),
    }
    missing = [k for k, v in config.items() if not v]
    if missing:
        raise ServiceUnavailableError(
            'Media host is not configured',
            'MEDIA_HOST_NOT_CONFIGURED',
            details={'missing': missing},
        )
    return config


def upload_file(file_bytes, filename, subfolder=None):
    """Upload file to the media host.

    Args:
        file_bytes: Raw bytes of the image.
        filename: Original filename, kept as the upload's display name.
        subfolder: Folder on the media host (defaults to UPLOAD_FOLDER).

    Returns:
        The hosted https URL.
    """
    config = get_media_config()
    folder = subfolder or get_config_value('UPLOAD_FOLDER', 'blog-images')

    cloudinary.config(secure=True, **config)

    try:
        result = cloudinary.uploader.upload(
            io.BytesIO(file_bytes),
            folder=folder,
            resource_type='auto',
            filename=filename,
            timeout=UPLOAD_TIMEOUT,
        )
    except AuthorizationRequired as e:
        logger.error("Media host rejected credentials: %s", e)
        LoggingService.log_api_call('upload', 'cloudinary upload', 'POST', 401, {'folder': folder})
        raise ApiError('Media host configuration error', 'MEDIA_HOST_CONFIG_ERROR', 500)
    except CloudinaryError as e:
        logger.error("Media host upload failed: %s", e)
        LoggingService.log_api_call('upload', 'cloudinary upload', 'POST', 502, {'folder': folder, 'error': str(e)})
        raise ApiError('Failed to upload image', 'UPLOAD_FAILED', 502)

    hosted_url = result.get('secure_url') or result.get('url')
    if not hosted_url:
        raise ApiError('Failed to upload image', 'UPLOAD_FAILED', 502)

    LoggingService.log_api_call('upload', 'cloudinary upload', 'POST', 200,
                                {'folder': folder, 'filename': filename, 'public_id': result.get('public_id')})
    return hosted_url
