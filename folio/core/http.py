"""
HTTP helpers
============

Request parsing and response decoration shared by the JSON blueprints.
"""

from flask import jsonify, request

from .errors import ValidationError

PUBLIC_CACHE = 'public, s-maxage=300, stale-while-revalidate=60'
NO_CACHE = 'no-cache, no-store, must-revalidate'

DEFAULT_LIMIT = 10
MAX_LIMIT = 100
MAX_ID = 2 ** 63 - 1

TRUE_VALUES = ('true', '1', 'yes', 'on')


def cached_json(payload, cache_control=PUBLIC_CACHE, status=200):
    response = jsonify(payload)
    response.status_code = status
    response.headers['Cache-Control'] = cache_control
    return response


def with_cache_tags(response, *tags):
    """Attach X-Cache-Tags so downstream caches know what to revalidate"""
    tags = [t for t in tags if t]
    if tags:
        response.headers['X-Cache-Tags'] = ','.join(dict.fromkeys(tags))
    return response


def get_json_body():
    """Parsed JSON object body or ValidationError(INVALID_JSON)"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object', 'INVALID_JSON')
    return data


def normalize_keys(data, aliases):
    """Copy camelCase keys (coverImage, projectUrl, ...) onto their snake_case names"""
    data = dict(data)
    for camel, snake in aliases.items():
        if camel in data and snake not in data:
            data[snake] = data.pop(camel)
    return data


def parse_id(raw, label='ID'):
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        raise ValidationError(f'Invalid {label}', 'INVALID_ID', details={'id': raw})
    if value <= 0 or value > MAX_ID:
        raise ValidationError(f'Invalid {label}', 'INVALID_ID', details={'id': raw})
    return value


def _parse_int(raw, default):
    try:
        return int(raw)
    except (TypeError, ValueError):
        return default


def parse_pagination(args):
    """(limit, offset) from query args; garbage falls back to defaults"""
    limit = _parse_int(args.get('limit'), DEFAULT_LIMIT)
    if limit < 1:
        limit = DEFAULT_LIMIT
    limit = min(limit, MAX_LIMIT)

    offset = _parse_int(args.get('offset'), 0)
    if offset < 0:
        offset = 0
    return limit, offset


def order_by_clause(model, args):
    """ORDER BY columns for ?sort=title|updatedAt|createdAt&order=asc|desc"""
    columns = {
        'title': model.title,
        'updatedAt': model.updated_at,
        'updated_at': model.updated_at,
        'createdAt': model.created_at,
        'created_at': model.created_at,
    }
    column = columns.get(args.get('sort'), model.created_at)
    if (args.get('order') or '').lower() == 'asc':
        return [column.asc(), model.id.asc()]
    return [column.desc(), model.id.desc()]


def parse_flag(value):
    if isinstance(value, str):
        return value.strip().lower() in TRUE_VALUES
    return bool(value)
