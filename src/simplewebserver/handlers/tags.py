"""
Tag substitution for served files.

Two placeholder tokens are replaced in every line of a served file:

    <cs371date>     →  current date, MM/DD/YYYY   (e.g. 10/19/2026)
    <cs371server>   →  the server name

Matching is literal and case-sensitive: <cs371Date> or <cs371date />
are left alone. Every occurrence in a line is replaced.
"""

from datetime import date
from typing import Optional


DATE_TAG = "<cs371date>"
SERVER_TAG = "<cs371server>"
DATE_FORMAT = "%m/%d/%Y"


def substitute_tags(line: str, server_name: str, today: Optional[date] = None) -> str:
    """
    Replace the date and server tags in one line.

    Args:
        line: A line of file content.
        server_name: Replacement for <cs371server>.
        today: Replacement date for <cs371date> (default: today's local date).

    Returns:
        The line with all tags replaced.
    """
    if DATE_TAG in line:
        if today is None:
            today = date.today()
        line = line.replace(DATE_TAG, today.strftime(DATE_FORMAT))

    return line.replace(SERVER_TAG, server_name)
