"""
Slug helpers
============

URL-friendly identifiers shared by blogs and projects. A slug is one or more
runs of lowercase ASCII letters/digits joined by single hyphens.
"""

import re
import time

from .errors import ConflictError, ValidationError

SLUG_PATTERN = re.compile(r'[a-z0-9]+(?:-[a-z0-9]+)*')


def slugify(title):
    """Create URL-friendly slug from a title ('' when it has no ASCII alphanumerics)"""
    slug = re.sub(r'[^a-z0-9]+', '-', (title or '').lower())
    return slug.strip('-')


def is_valid_slug(slug):
    return bool(slug) and SLUG_PATTERN.fullmatch(slug) is not None


def suggest_slug(slug):
    """Alternative slug: the candidate plus the last 4 digits of the current ms timestamp"""
    return f"{slug}-{str(int(time.time() * 1000))[-4:]}"


def slug_taken(model, slug, exclude_id=None):
    query = model.query.filter(model.slug == slug)
    if exclude_id is not None:
        query = query.filter(model.id != exclude_id)
    return query.first() is not None


def resolve_create_slug(model, title, explicit_slug=None):
    """
    Pick the slug for a new row.

    An explicit slug is used verbatim (after trimming), otherwise one is
    derived from the title. Raises ValidationError for a malformed slug and
    ConflictError (with a suggestion) when another row already owns it.
    """
    if explicit_slug is not None and str(explicit_slug).strip():
        slug = str(explicit_slug).strip()
    else:
        slug = slugify(title)

    if not is_valid_slug(slug):
        raise ValidationError(
            'Slug must contain only lowercase letters, numbers and single hyphens',
            'INVALID_SLUG_FORMAT',
            details={'slug': slug},
        )

    if slug_taken(model, slug):
        raise ConflictError(
            f'A {model.__name__.lower()} with slug "{slug}" already exists',
            'DUPLICATE_SLUG',
            suggestion=suggest_slug(slug),
        )
    return slug


def resolve_update_slug(instance, data, new_title=None):
    """
    Work out the slug an update should leave on `instance`.

    - An explicit slug must be non-empty, well formed and free (other than
      on this row).
    - Without one, a changed title derives a new slug that is adopted only if
      it is valid and free; otherwise the current slug is kept.
    """
    model = type(instance)

    if 'slug' in data and data['slug'] is not None:
        slug = str(data['slug']).strip()
        if not slug:
            raise ValidationError('Slug cannot be empty', 'EMPTY_SLUG')
        if not is_valid_slug(slug):
            raise ValidationError(
                'Slug must contain only lowercase letters, numbers and single hyphens',
                'INVALID_SLUG_FORMAT',
                details={'slug': slug},
            )
        if slug != instance.slug and slug_taken(model, slug, exclude_id=instance.id):
            raise ConflictError(
                f'A {model.__name__.lower()} with slug "{slug}" already exists',
                'SLUG_CONFLICT',
                suggestion=suggest_slug(slug),
            )
        return slug

    if new_title is not None and new_title != instance.title:
        derived = slugify(new_title)
        if derived == instance.slug:
            return instance.slug
        if is_valid_slug(derived) and not slug_taken(model, derived, exclude_id=instance.id):
            return derived

    return instance.slug
