"""Title to URL slug conversion."""

import re

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(title: str) -> str:
    """Convert a dashboard title to a URL-friendly slug.

    Args:
        title: Dashboard title

    Returns:
        Lowercase slug with non-alphanumeric runs collapsed to single hyphens

    Example:
        >>> slugify("Name of Dashboard")
        'name-of-dashboard'
        >>> slugify("  CPU / Memory (p95)  ")
        'cpu-memory-p95'
    """
    return _NON_ALNUM.sub("-", title.lower()).strip("-")
