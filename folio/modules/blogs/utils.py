import html
import re

EXCERPT_LENGTH = 150


def strip_html(content):
    """Plain text from rich HTML content, whitespace collapsed"""
    text = re.sub(r'<[^>]+>', ' ', content or '')
    text = html.unescape(text)
    return re.sub(r'\s+', ' ', text).strip()


def generate_excerpt(content, length=EXCERPT_LENGTH):
    """First `length` characters of the plain text, with '...' when truncated"""
    text = strip_html(content)
    if len(text) <= length:
        return text
    return text[:length].rstrip() + '...'
