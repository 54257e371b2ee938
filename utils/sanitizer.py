"""
Input Sanitization Module

Cleans user-entered text before it is stored.
"""

import html
import re

CONTROL_CHARS_RE = re.compile(r'[\x00-\x1f\x7f-\x9f]')


def sanitize_text(text, max_length=10000):
    """
    Sanitize free text by HTML-escaping special characters.

    This prevents XSS by ensuring that any HTML/JS in the text
    is displayed as literal text rather than being executed.

    Args:
        text: The text to sanitize (can be None)
        max_length: Maximum allowed length (default 10000)

    Returns:
        Sanitized string, truncated if necessary
    """
    if text is None:
        return ''

    if not isinstance(text, str):
        text = str(text)

    # Strip leading/trailing whitespace
    text = text.strip()

    # HTML escape special characters
    text = html.escape(text)

    # Truncate if too long
    if len(text) > max_length:
        text = text[:max_length] + '...'

    return text


def sanitize_name(name, max_length=200):
    """
    Clean a name used as a lookup key (ingredient, packaging, vendor).

    Names are not HTML-escaped because they are matched against other
    names; control characters are removed and whitespace collapsed.

    Args:
        name: The name to clean
        max_length: Maximum allowed length (default 200)

    Returns:
        Cleaned name, '' when nothing is left
    """
    if not name:
        return ''

    if not isinstance(name, str):
        name = str(name)

    # Remove control characters and null bytes
    name = CONTROL_CHARS_RE.sub('', name)

    # Collapse multiple spaces
    name = re.sub(r'\s+', ' ', name).strip()

    # Truncate if too long
    if len(name) > max_length:
        name = name[:max_length]

    return name
