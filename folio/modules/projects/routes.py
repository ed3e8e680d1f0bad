"""
Projects Routes
===============

Portfolio project API. Projects have no draft state: every row is public,
the admin flag only switches off response caching.
"""

import json

from flask import g, jsonify, request
from sqlalchemy import String, cast, or_
from sqlalchemy.exc import IntegrityError

from ...core.config import get_config_value
from ...core.database import db
from ...core.errors import ConflictError, NotFoundError, ValidationError
from ...core.http import (
    NO_CACHE, PUBLIC_CACHE, cached_json, get_json_body, normalize_keys,
    order_by_clause, parse_flag, parse_id, parse_pagination, with_cache_tags,
)
from ...core.logging_service import LoggingService
from ...core.slugs import resolve_create_slug, resolve_update_slug, suggest_slug
from ...core.validation import (
    check_length, clean_text, require_non_blank, require_text, validate_url_field,
)
from ..auth.utils import is_admin_request, require_auth
from . import projects_bp
from .models import Project
from .utils import parse_tags


TITLE_MAX = 200
DESCRIPTION_MAX = 500

UPDATE_FIELDS = (
    'title', 'slug', 'description', 'content', 'thumbnail',
    'project_url', 'github_url', 'tags', 'featured',
)
KEY_ALIASES = {'projectUrl': 'project_url', 'githubUrl': 'github_url'}


def _get_project_or_404(project_id):
    project = db.session.get(Project, project_id)
    if project is None:
        raise NotFoundError(
            'Project not found',
            'PROJECT_NOT_FOUND',
            details=f'No project found with ID: {project_id}',
        )
    return project


def _cache_tags(project, *old_slugs):
    tags = ['projects', f'project-{project.id}', f'project-{project.slug}']
    tags.extend(f'project-{s}' for s in old_slugs if s)
    tags.append('featured-projects')
    return tags


def _validate_links(data, changes):
    """Validate whichever URL fields are present in `data` into `changes`"""
    if 'thumbnail' in data:
        changes['thumbnail'] = validate_url_field(
            data['thumbnail'], 'INVALID_THUMBNAIL_URL', 'Thumbnail', trusted_media=True
        )
    if 'project_url' in data:
        changes['project_url'] = validate_url_field(data['project_url'], 'INVALID_PROJECT_URL', 'Project URL')
    if 'github_url' in data:
        changes['github_url'] = validate_url_field(data['github_url'], 'INVALID_GITHUB_URL', 'GitHub URL')
    return changes


# ===== Public reads =====

@projects_bp.route('/', methods=['GET'], strict_slashes=False)
def list_projects():
    """List projects with optional featured, tags and search filters"""
    args = request.args
    limit, offset = parse_pagination(args)

    query = Project.query

    featured = args.get('featured')
    if featured is not None and featured != '':
        query = query.filter(Project.featured.is_(featured.strip().lower() == 'true'))

    tag_list = [t.strip() for t in (args.get('tags') or '').split(',') if t.strip()]
    if tag_list:
        # tags is stored as a JSON array; match any of the quoted tag strings
        tags_text = cast(Project.tags, String)
        query = query.filter(or_(*[tags_text.contains(json.dumps(t), autoescape=True) for t in tag_list]))

    search = (args.get('search') or '').strip()
    if search:
        pattern = f'%{search}%'
        query = query.filter(or_(Project.title.ilike(pattern), Project.description.ilike(pattern)))

    total = query.count()
    projects = query.order_by(*order_by_clause(Project, args)).limit(limit).offset(offset).all()

    response = cached_json([p.to_dict(include_content=False) for p in projects], PUBLIC_CACHE)
    response.headers['X-Total-Count'] = str(total)
    return response


@projects_bp.route('/<project_id>', methods=['GET'])
def get_project(project_id):
    """Single project"""
    project_id = parse_id(project_id, 'project ID')
    admin = is_admin_request()
    project = _get_project_or_404(project_id)

    return cached_json(project.to_dict(), NO_CACHE if admin else PUBLIC_CACHE)


# ===== Authenticated writes =====

@projects_bp.route('/create', methods=['POST'])
@require_auth
def create_project():
    """Create new project"""
    data = normalize_keys(get_json_body(), KEY_ALIASES)

    title = require_text(data, 'title', 'MISSING_TITLE')
    check_length(title, TITLE_MAX, 'TITLE_TOO_LONG', 'Title')
    description = require_text(data, 'description', 'MISSING_DESCRIPTION')
    check_length(description, DESCRIPTION_MAX, 'DESCRIPTION_TOO_LONG', 'Description')

    links = _validate_links(data, {})
    tags = parse_tags(data.get('tags'))
    slug = resolve_create_slug(Project, title, data.get('slug'))

    project = Project(
        title=title,
        slug=slug,
        description=description,
        content=clean_text(data.get('content')) or None,
        thumbnail=links.get('thumbnail') or get_config_value('DEFAULT_THUMBNAIL'),
        project_url=links.get('project_url'),
        github_url=links.get('github_url'),
        tags=tags,
        featured=parse_flag(data.get('featured', False)),
    )
    db.session.add(project)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError(
            f'A project with slug "{slug}" already exists',
            'DUPLICATE_SLUG',
            suggestion=suggest_slug(slug),
        )

    LoggingService.log_user_action('projects', f'Created project {project.id} ({project.slug})',
                                   user_id=g.current_user['user_id'])

    response = jsonify({
        'success': True,
        'message': 'Project created successfully',
        'project': project.to_dict()
    })
    response.status_code = 201
    return with_cache_tags(response, *_cache_tags(project))


@projects_bp.route('/update', methods=['PUT'])
@require_auth
def update_project():
    """Partial update of a project: ?id=<project id>"""
    project_id = parse_id(request.args.get('id'), 'project ID')
    data = normalize_keys(get_json_body(), KEY_ALIASES)

    if not any(field in data for field in UPDATE_FIELDS):
        raise ValidationError('No fields provided to update', 'NO_UPDATES')

    project = _get_project_or_404(project_id)
    old_slug = project.slug
    changes = {}

    if data.get('title') is not None:
        title = require_non_blank(clean_text(data['title']), 'EMPTY_TITLE', 'Title')
        changes['title'] = check_length(title, TITLE_MAX, 'TITLE_TOO_LONG', 'Title')

    if data.get('description') is not None:
        description = require_non_blank(clean_text(data['description']), 'EMPTY_DESCRIPTION', 'Description')
        changes['description'] = check_length(description, DESCRIPTION_MAX, 'DESCRIPTION_TOO_LONG', 'Description')

    if 'content' in data:
        changes['content'] = clean_text(data['content']) or None

    _validate_links(data, changes)

    if 'tags' in data:
        changes['tags'] = parse_tags(data['tags'])

    if data.get('featured') is not None:
        changes['featured'] = parse_flag(data['featured'])

    changes['slug'] = resolve_update_slug(project, data, new_title=changes.get('title'))

    for field, value in changes.items():
        setattr(project, field, value)

    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        slug = changes['slug']
        raise ConflictError(
            f'A project with slug "{slug}" already exists',
            'SLUG_CONFLICT',
            suggestion=suggest_slug(slug),
        )

    LoggingService.log_user_action('projects', f'Updated project {project.id}', user_id=g.current_user['user_id'],
                                   details={'fields': sorted(changes)})

    response = jsonify({
        'success': True,
        'message': 'Project updated successfully',
        'project': project.to_dict()
    })
    return with_cache_tags(response, *_cache_tags(project, old_slug))


def _delete_project(project_id):
    project = _get_project_or_404(project_id)
    snapshot = project.to_dict()
    tags = _cache_tags(project)

    db.session.delete(project)
    db.session.commit()

    LoggingService.log_user_action('projects', f'Deleted project {project_id}', user_id=g.current_user['user_id'])
    return snapshot, tags


@projects_bp.route('/delete', methods=['DELETE'])
@require_auth
def delete_project():
    """Delete a project: ?id=<project id>"""
    project_id = parse_id(request.args.get('id'), 'project ID')
    snapshot, tags = _delete_project(project_id)

    response = jsonify({
        'success': True,
        'message': 'Project deleted successfully',
        'project': snapshot
    })
    return with_cache_tags(response, *tags)


@projects_bp.route('/<project_id>', methods=['DELETE'])
@require_auth
def delete_project_by_path(project_id):
    """Delete a project addressed by path"""
    project_id = parse_id(project_id, 'project ID')
    snapshot, tags = _delete_project(project_id)

    response = jsonify({
        'success': True,
        'message': 'Project deleted successfully',
        'deleted_id': snapshot['id']
    })
    return with_cache_tags(response, *tags)
