"""
=============================================================================
CONTENT HANDLERS
=============================================================================

    static.py   resolve() a request to an outcome, render_content() it
    tags.py     <cs371date> / <cs371server> substitution

=============================================================================
"""

from .static import resolve, render_content, HOME_PAGE, NOT_FOUND_PAGE
from .tags import substitute_tags, DATE_TAG, SERVER_TAG

__all__ = [
    "resolve",
    "render_content",
    "HOME_PAGE",
    "NOT_FOUND_PAGE",
    "substitute_tags",
    "DATE_TAG",
    "SERVER_TAG",
]
