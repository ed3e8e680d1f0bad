"""
Ops Routes
==========

Public health endpoint.
"""

import shutil
import time
from datetime import datetime

from flask import jsonify

from ...core.database import Database
from ...core.logging_service import LoggingService
from . import ops_health_bp

_STARTED_AT = time.time()


# ---------------------------------------------------------------------------
# Helper functions
# ---------------------------------------------------------------------------

def _get_disk_usage():
    """Get disk usage for root partition."""
    try:
        usage = shutil.disk_usage('/')
        return {
            'total_gb': round(usage.total / (1024 ** 3), 1),
            'used_gb': round(usage.used / (1024 ** 3), 1),
            'free_gb': round(usage.free / (1024 ** 3), 1),
            'percent': round((usage.used / usage.total) * 100, 1),
        }
    except Exception as e:
        return {'total_gb': 0, 'used_gb': 0, 'free_gb': 0, 'percent': 0, 'error': str(e)}


def _get_uptime():
    """Process uptime since the app module was loaded."""
    uptime_seconds = time.time() - _STARTED_AT
    days = int(uptime_seconds // 86400)
    hours = int((uptime_seconds % 86400) // 3600)
    minutes = int((uptime_seconds % 3600) // 60)
    return {
        'seconds': round(uptime_seconds),
        'formatted': f'{days}d {hours}h {minutes}m',
        'days': days,
    }


def _compute_status(database, disk):
    """Compute overall status and issues list from database/disk checks."""
    issues = []
    status = 'ok'

    if not database.get('ok'):
        issues.append({'type': 'database_down', 'message': 'Database is not responding'})
        status = 'critical'

    disk_pct = disk.get('percent', 0)
    if disk_pct >= 90:
        issues.append({'type': 'disk_critical', 'message': f'Disk usage critical: {disk_pct}%'})
        status = 'critical'
    elif disk_pct >= 80:
        issues.append({'type': 'disk_warning', 'message': f'Disk usage high: {disk_pct}%'})
        if status != 'critical':
            status = 'warning'

    return status, issues


# ---------------------------------------------------------------------------
# Public health endpoint
# ---------------------------------------------------------------------------

@ops_health_bp.route('', methods=['GET'], strict_slashes=False)
def health():
    """Health check for uptime monitors. 503 only when the database is down."""
    ok, error = Database.ping()
    database = {'ok': ok}
    if error:
        database['error'] = 'unavailable'

    disk = _get_disk_usage()
    status, issues = _compute_status(database, disk)
    if not ok:
        LoggingService.critical('health', 'Database health check failed', {'error': error})

    body = {
        'status': status,
        'timestamp': datetime.utcnow().isoformat(),
        'checks': {
            'database': database,
            'disk': disk,
            'uptime': _get_uptime(),
        },
        'issues': issues,
    }
    return jsonify(body), 200 if ok else 503
