from .config import Config, get_config_value
from .database import db, Database
from .logging_service import LoggingService

__all__ = ['Config', 'get_config_value', 'db', 'Database', 'LoggingService']
