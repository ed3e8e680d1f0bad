import json

from ...core.errors import ValidationError

MAX_TAGS = 10
MAX_TAG_LENGTH = 20


def parse_tags(tags):
    """
    Normalise tags given as a list, a JSON-encoded list or a comma-separated
    string. Entries are trimmed, blanks dropped and the list capped at
    MAX_TAGS; a tag longer than MAX_TAG_LENGTH rejects the whole request.

        parse_tags("a, b, c") == parse_tags(["a", "b", "c"]) == ["a", "b", "c"]
    """
    if tags is None:
        return []

    if isinstance(tags, str):
        raw = tags.strip()
        items = None
        if raw.startswith('['):
            try:
                decoded = json.loads(raw)
            except ValueError:
                decoded = None
            if isinstance(decoded, list):
                items = decoded
        if items is None:
            items = raw.split(',')
    elif isinstance(tags, (list, tuple)):
        items = tags
    else:
        raise ValidationError('Tags must be a list or a comma-separated string', 'INVALID_TAGS')

    cleaned = []
    for item in items:
        if item is None:
            continue
        tag = str(item).strip()
        if tag:
            cleaned.append(tag)
    cleaned = cleaned[:MAX_TAGS]

    too_long = [t for t in cleaned if len(t) > MAX_TAG_LENGTH]
    if too_long:
        raise ValidationError(
            f'Each tag must be {MAX_TAG_LENGTH} characters or fewer',
            'TAG_TOO_LONG',
            details={'tags': too_long},
        )
    return cleaned
