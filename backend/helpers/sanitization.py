"""
Input sanitization for resident- and admin-supplied text.

Reports, announcements and contact messages are rendered as plain text, so
every HTML tag is stripped before storage.
"""

from typing import Optional

import bleach


def sanitize_plain_text(content: Optional[str]) -> str:
    """
    Strip all HTML tags and surrounding whitespace.

    Args:
        content: Raw content from user input

    Returns:
        Plain text with all HTML removed; "" for None

    Examples:
        >>> sanitize_plain_text('<b>Open</b> drain ')
        'Open drain'
    """
    if content is None:
        return ""

    return bleach.clean(content, tags=[], strip=True).strip()


def sanitize_image_path(path: Optional[str]) -> str:
    """
    Validate an uploaded image reference.

    Only relative upload paths and http(s) URLs are kept; anything with a
    scheme such as javascript: or data:, or a parent-directory segment, is
    dropped.

    Examples:
        >>> sanitize_image_path('uploads/reports/abc.jpg')
        'uploads/reports/abc.jpg'
        >>> sanitize_image_path('javascript:alert(1)')
        ''
    """
    if path is None:
        return ""

    path = path.strip()
    if not path:
        return ""

    if path.lower().startswith(("http://", "https://")):
        return path

    if ":" in path.split("/")[0] or ".." in path.split("/"):
        return ""

    return path
