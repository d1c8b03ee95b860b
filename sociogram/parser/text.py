"""
Text Data Entry for Sociogram

Parses pasted relationship data of the form

    Hannah: Hayden, Kaley, Kaylee
    Nate: Cooper B, Tamia, Charlotte

into a RelationshipMap. Input is rejected as a whole, with a message naming
the offending line, before any of it reaches the graph builder.

Rules:
    - Blank lines are ignored; other lines are matched as written
    - Each line must be "<name>: <friends>" with a non-empty friends part
    - Friends are split on commas, trimmed, and empty entries dropped
    - A line whose friend list ends up empty is an error
    - A repeated name replaces its earlier line
"""

import re

from sociogram.models import RelationshipMap


EXPECTED_FORMAT = "Name: Friend1, Friend2, Friend3"

_LINE_RE = re.compile(r"^([^:]+):\s*(.+)$")


class DataFormatError(ValueError):
    """Raised when pasted relationship data does not follow the expected format."""


def parse_line(line: str) -> tuple[str, list[str]]:
    """
    Parse a single non-blank line.

    Args:
        line: One line of input

    Returns:
        The name and its friends

    Raises:
        DataFormatError: If the line has the wrong shape or lists no friends
    """
    match = _LINE_RE.match(line)
    if match is None:
        raise DataFormatError(
            f'Invalid format in line: "{line}". Expected format: "{EXPECTED_FORMAT}"'
        )

    name, friends_text = match.groups()
    friends = [friend.strip() for friend in friends_text.split(",") if friend.strip()]
    if not friends:
        raise DataFormatError(f"No friends found for {name.strip()}")

    return name.strip(), friends


def parse_relationships(text: str) -> dict[str, list[str]]:
    """
    Parse pasted text into a relationship mapping.

    Args:
        text: Multi-line input, one person per line

    Returns:
        Mapping of name to the friends they listed, in line order

    Raises:
        DataFormatError: If any line is malformed or nothing usable was found

    Example:
        >>> parse_relationships("Ana: Ben, Cy\\nBen: Ana")
        {'Ana': ['Ben', 'Cy'], 'Ben': ['Ana']}
    """
    relationships: dict[str, list[str]] = {}

    for line in text.strip().splitlines():
        if not line.strip():
            continue
        name, friends = parse_line(line)
        relationships[name] = friends

    if not relationships:
        raise DataFormatError(
            f'No valid data found. Please paste data in the format: "{EXPECTED_FORMAT}"'
        )

    return relationships


def format_relationships(relationships: RelationshipMap) -> str:
    """Render a mapping back into the text form parse_relationships accepts."""
    return "\n".join(
        f"{name}: {', '.join(friends)}"
        for name, friends in relationships.items()
        if friends
    )
