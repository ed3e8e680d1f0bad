"""
Centralized logging service for the Folio backend.
Provides structured logging with database storage and easy integration.
"""

import json
import logging
import traceback
from datetime import datetime, timedelta

from flask import current_app, has_app_context, has_request_context, request

from .database import db

logger = logging.getLogger('folio')


class AppLog(db.Model):
    __tablename__ = 'app_logs'

    id = db.Column(db.Integer, primary_key=True)
    timestamp = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)
    level = db.Column(db.String(10), nullable=False, index=True)
    source = db.Column(db.String(50), nullable=False, index=True)
    message = db.Column(db.Text, nullable=False)
    details = db.Column(db.Text)
    ip_address = db.Column(db.String(64))
    user_agent = db.Column(db.String(255))
    request_path = db.Column(db.String(255))
    user_id = db.Column(db.String(64))

    def to_dict(self):
        return {
            'id': self.id,
            'timestamp': self.timestamp.isoformat() if self.timestamp else None,
            'level': self.level,
            'source': self.source,
            'message': self.message,
            'details': self.details,
            'ip_address': self.ip_address,
            'user_agent': self.user_agent,
            'request_path': self.request_path,
            'user_id': self.user_id,
        }


class LoggingService:
    """Centralized logging service for application-wide logging"""

    @staticmethod
    def _get_request_context():
        """Extract request context information"""
        if not has_request_context():
            return None, None, None

        try:
            ip_address = request.headers.get('X-Forwarded-For', request.remote_addr)
            if ip_address and ',' in ip_address:
                ip_address = ip_address.split(',')[0].strip()

            user_agent = request.headers.get('User-Agent', '')[:255]
            request_path = request.path[:255]

            return ip_address, user_agent, request_path
        except Exception:
            return None, None, None

    @staticmethod
    def _persist_enabled():
        if not has_app_context():
            return False
        return bool(current_app.config.get('LOG_TO_DATABASE', True))

    @staticmethod
    def log(level, source, message, details=None, user_id=None):
        """
        Log a message to the python logger and the app_logs table

        Args:
            level (str): Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            source (str): Source component (blogs, projects, auth, etc.)
            message (str): Main log message
            details (str/dict): Additional details (will be JSON-encoded if dict)
            user_id (str): Optional user identifier
        """
        level = level.upper()
        if isinstance(details, (dict, list)):
            details = json.dumps(details, indent=2, default=str)

        logger.log(getattr(logging, level, logging.INFO), "[%s] %s", source, message)
        if details:
            logger.debug("Details: %s", details)

        if not LoggingService._persist_enabled():
            return

        try:
            ip_address, user_agent, request_path = LoggingService._get_request_context()

            # Independent connection so a failed request transaction never drops the entry
            with db.engine.begin() as conn:
                conn.execute(AppLog.__table__.insert().values(
                    timestamp=datetime.utcnow(),
                    level=level,
                    source=source,
                    message=message,
                    details=details,
                    ip_address=ip_address,
                    user_agent=user_agent,
                    request_path=request_path,
                    user_id=str(user_id) if user_id is not None else None,
                ))
        except Exception as e:
            # Fallback to the python logger if the database is unavailable
            logger.warning("Logging service error (%s): [%s] [%s] %s", e, level, source, message)

    @staticmethod
    def info(source, message, details=None, user_id=None):
        """Log info message"""
        LoggingService.log('INFO', source, message, details, user_id)

    @staticmethod
    def warning(source, message, details=None, user_id=None):
        """Log warning message"""
        LoggingService.log('WARNING', source, message, details, user_id)

    @staticmethod
    def error(source, message, details=None, user_id=None):
        """Log error message"""
        LoggingService.log('ERROR', source, message, details, user_id)

    @staticmethod
    def critical(source, message, details=None, user_id=None):
        """Log critical message"""
        LoggingService.log('CRITICAL', source, message, details, user_id)

    @staticmethod
    def log_user_action(source, action, user_id=None, details=None):
        """Log user actions (login, create, delete, etc.)"""
        LoggingService.info(source, f"User action: {action}", details, user_id)

    @staticmethod
    def log_api_call(source, endpoint, method='GET', status_code=200, details=None):
        """Log API calls"""
        message = f"API {method} {endpoint} - Status: {status_code}"
        level = 'INFO' if 200 <= status_code < 400 else 'WARNING' if status_code < 500 else 'ERROR'
        LoggingService.log(level, source, message, details)

    @staticmethod
    def log_error_with_traceback(source, error, details=None):
        """Log error with full traceback"""
        error_details = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            'traceback': traceback.format_exc()
        }
        if details:
            error_details['additional_details'] = details

        LoggingService.error(source, f"Exception occurred: {type(error).__name__}", error_details)

    @staticmethod
    def log_security_event(message, details=None, ip_address=None):
        """Log security-related events"""
        if ip_address:
            details = dict(details or {})
            details['provided_ip'] = ip_address

        LoggingService.warning('security', message, details)

    @staticmethod
    def cleanup_old_logs(days_to_keep=30):
        """Clean up old log entries"""
        try:
            cutoff = datetime.utcnow() - timedelta(days=days_to_keep)

            with db.engine.begin() as conn:
                result = conn.execute(
                    AppLog.__table__.delete().where(AppLog.__table__.c.timestamp < cutoff)
                )
                deleted_count = result.rowcount

            LoggingService.info('system', f"Cleaned up {deleted_count} old log entries")
            return deleted_count

        except Exception as e:
            LoggingService.error('system', f"Failed to cleanup old logs: {e}")
            return 0
