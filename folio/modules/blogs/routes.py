"""
Blogs Routes
============

Public reads are open; writes sit behind require_auth. Drafts are only
visible to verified admins (see is_admin_request).
"""

from flask import g, jsonify, request
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError

from ...core.database import db
from ...core.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
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
from . import blogs_bp
from .models import Blog
from .utils import generate_excerpt


TITLE_MAX = 200
EXCERPT_MAX = 300

UPDATE_FIELDS = ('title', 'content', 'excerpt', 'cover_image', 'published', 'slug')
KEY_ALIASES = {'coverImage': 'cover_image'}


def _get_blog_or_404(blog_id):
    blog = db.session.get(Blog, blog_id)
    if blog is None:
        raise NotFoundError(
            'Blog post not found',
            'BLOG_NOT_FOUND',
            details=f'No blog found with ID: {blog_id}',
        )
    return blog


def _cache_tags(blog, *old_slugs):
    tags = ['blogs', f'blog-{blog.id}', f'blog-{blog.slug}']
    tags.extend(f'blog-{s}' for s in old_slugs if s)
    tags.append('published-blogs')
    return tags


def _cover_image(value):
    return validate_url_field(value, 'INVALID_COVER_IMAGE_URL', 'Cover image', trusted_media=True)


# ===== Public reads =====

@blogs_bp.route('/', methods=['GET'], strict_slashes=False)
def list_blogs():
    """List blogs; ?published=true restricts to published posts"""
    args = request.args
    limit, offset = parse_pagination(args)

    query = Blog.query
    # Only the literal 'true' filters; anything else returns every post
    if args.get('published') == 'true':
        query = query.filter(Blog.published.is_(True))

    search = (args.get('search') or '').strip()
    if search:
        pattern = f'%{search}%'
        query = query.filter(or_(Blog.title.ilike(pattern), Blog.excerpt.ilike(pattern)))

    total = query.count()
    blogs = query.order_by(*order_by_clause(Blog, args)).limit(limit).offset(offset).all()

    response = cached_json([b.to_dict() for b in blogs], PUBLIC_CACHE)
    response.headers['X-Total-Count'] = str(total)
    return response


@blogs_bp.route('/<blog_id>', methods=['GET'])
def get_blog(blog_id):
    """Single blog. Drafts need a verified admin; public reads count a view."""
    blog_id = parse_id(blog_id, 'blog ID')
    admin = is_admin_request()
    blog = _get_blog_or_404(blog_id)

    if not blog.published and not admin:
        raise ForbiddenError(
            'Blog post is not published',
            'BLOG_NOT_PUBLISHED',
            details='This blog post is currently in draft status',
        )

    payload = blog.to_dict()

    if not admin:
        try:
            # updated_at tracks edits, not views
            db.session.query(Blog).filter(Blog.id == blog_id).update(
                {Blog.views: Blog.views + 1, Blog.updated_at: Blog.updated_at},
                synchronize_session=False,
            )
            db.session.commit()
        except Exception as e:
            db.session.rollback()
            LoggingService.warning('blogs', f'Failed to increment view count for blog {blog_id}', {'error': str(e)})

    if admin or not payload['published']:
        return cached_json(payload, NO_CACHE)
    return cached_json(payload, PUBLIC_CACHE)


# ===== Authenticated writes =====

@blogs_bp.route('/create', methods=['POST'])
@require_auth
def create_blog():
    """Create new blog post"""
    data = normalize_keys(get_json_body(), KEY_ALIASES)

    title = require_text(data, 'title', 'MISSING_TITLE')
    check_length(title, TITLE_MAX, 'TITLE_TOO_LONG', 'Title')
    content = require_text(data, 'content', 'MISSING_CONTENT')

    excerpt = clean_text(data.get('excerpt')) or generate_excerpt(content)
    check_length(excerpt, EXCERPT_MAX, 'EXCERPT_TOO_LONG', 'Excerpt')

    cover_image = _cover_image(data.get('cover_image'))
    published = parse_flag(data.get('published', False))
    slug = resolve_create_slug(Blog, title, data.get('slug'))

    blog = Blog(
        title=title,
        slug=slug,
        content=content,
        excerpt=excerpt,
        cover_image=cover_image,
        published=published,
    )
    db.session.add(blog)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError(
            f'A blog with slug "{slug}" already exists',
            'DUPLICATE_SLUG',
            suggestion=suggest_slug(slug),
        )

    LoggingService.log_user_action('blogs', f'Created blog {blog.id} ({blog.slug})', user_id=g.current_user['user_id'])

    response = jsonify({
        'success': True,
        'message': 'Blog created successfully',
        'blog': blog.to_dict()
    })
    response.status_code = 201
    return with_cache_tags(response, *_cache_tags(blog))


@blogs_bp.route('/update', methods=['PUT'])
@require_auth
def update_blog():
    """Partial update of a blog post: ?id=<blog id>"""
    blog_id = parse_id(request.args.get('id'), 'blog ID')
    data = normalize_keys(get_json_body(), KEY_ALIASES)

    if not any(field in data for field in UPDATE_FIELDS):
        raise ValidationError('No fields provided to update', 'NO_UPDATES')

    blog = _get_blog_or_404(blog_id)
    old_slug = blog.slug
    changes = {}

    if data.get('title') is not None:
        title = require_non_blank(clean_text(data['title']), 'EMPTY_TITLE', 'Title')
        changes['title'] = check_length(title, TITLE_MAX, 'TITLE_TOO_LONG', 'Title')

    if data.get('content') is not None:
        changes['content'] = require_non_blank(clean_text(data['content']), 'EMPTY_CONTENT', 'Content')

    if 'excerpt' in data:
        excerpt = clean_text(data['excerpt']) or generate_excerpt(changes.get('content', blog.content))
        changes['excerpt'] = check_length(excerpt, EXCERPT_MAX, 'EXCERPT_TOO_LONG', 'Excerpt')

    if 'cover_image' in data:
        changes['cover_image'] = _cover_image(data['cover_image'])

    if data.get('published') is not None:
        changes['published'] = parse_flag(data['published'])

    changes['slug'] = resolve_update_slug(blog, data, new_title=changes.get('title'))

    for field, value in changes.items():
        setattr(blog, field, value)

    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        slug = changes['slug']
        raise ConflictError(
            f'A blog with slug "{slug}" already exists',
            'SLUG_CONFLICT',
            suggestion=suggest_slug(slug),
        )

    LoggingService.log_user_action('blogs', f'Updated blog {blog.id}', user_id=g.current_user['user_id'],
                                   details={'fields': sorted(changes)})

    response = jsonify({
        'success': True,
        'message': 'Blog updated successfully',
        'blog': blog.to_dict()
    })
    return with_cache_tags(response, *_cache_tags(blog, old_slug))


def _delete_blog(blog_id):
    blog = _get_blog_or_404(blog_id)
    snapshot = blog.to_dict()
    tags = _cache_tags(blog)

    db.session.delete(blog)
    db.session.commit()

    LoggingService.log_user_action('blogs', f'Deleted blog {blog_id}', user_id=g.current_user['user_id'])
    return snapshot, tags


@blogs_bp.route('/delete', methods=['DELETE'])
@require_auth
def delete_blog():
    """Delete a blog post: ?id=<blog id>"""
    blog_id = parse_id(request.args.get('id'), 'blog ID')
    snapshot, tags = _delete_blog(blog_id)

    response = jsonify({
        'success': True,
        'message': 'Blog deleted successfully',
        'blog': snapshot
    })
    return with_cache_tags(response, *tags)


@blogs_bp.route('/<blog_id>', methods=['DELETE'])
@require_auth
def delete_blog_by_path(blog_id):
    """Delete a blog post addressed by path"""
    blog_id = parse_id(blog_id, 'blog ID')
    snapshot, tags = _delete_blog(blog_id)

    response = jsonify({
        'success': True,
        'message': 'Blog post deleted successfully',
        'deleted_id': snapshot['id']
    })
    return with_cache_tags(response, *tags)
