"""Display formatting, input normalization and key sanitization."""

import re


def extract_year(date_value: str | int | None) -> int | None:
    """Extract the year as an integer from a form input.

    Handles:
        - Integer year: 1685 -> 1685
        - String year: "1685" -> 1685
        - ISO date: "1685-03-31" -> 1685

    Returns:
        The year as an integer, or None if extraction fails.
    """
    if date_value is None:
        return None

    if isinstance(date_value, bool):
        return None

    if isinstance(date_value, int):
        return date_value

    if isinstance(date_value, str):
        date_str = date_value.strip()
        if not date_str:
            return None

        match = re.match(r"^(\d{3,4})(?:$|-)", date_str)
        if match:
            return int(match.group(1))

    return None


def clean_text(value: str | None) -> str | None:
    """Trim a form string; blank becomes None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def format_life(birth_year: int | None, death_year: int | None) -> str:
    """Format a life span for the composer/artist tables.

    Examples:
        (1685, 1750) -> "1685 - 1750 (65)"
        (1962, None) -> "1962 - ?"
        (None, None) -> "-"
    """
    if not birth_year and not death_year:
        return "-"
    if birth_year and not death_year:
        return f"{birth_year} - ?"
    if not birth_year and death_year:
        return f"? - {death_year}"
    return f"{birth_year} - {death_year} ({death_year - birth_year})"


def initials(name: str) -> str:
    """Initials shown in place of a missing portrait.

    Example: "Johann Sebastian Bach" -> "JB", "Bach" -> "BA"
    """
    parts = name.split()
    if not parts:
        return ""
    if len(parts) == 1:
        return parts[0][:2].upper()
    return (parts[0][0] + parts[-1][0]).upper()


def sanitize_key(name: str, fallback: str = "Unknown") -> str:
    """Sanitize a string for use as an object storage key component.

    Returns:
        A string containing only A-Z, a-z, 0-9, dots and dashes.
    """
    if not name:
        return fallback

    # Replace spaces and underscores with dashes
    sanitized = re.sub(r"[\s_]+", "-", name)

    # Remove everything except alphanumerics, dots and dashes
    sanitized = re.sub(r"[^A-Za-z0-9.-]", "", sanitized)

    # Collapse multiple dashes into single dash
    sanitized = re.sub(r"-+", "-", sanitized)

    sanitized = sanitized.strip("-.")

    if not sanitized:
        return fallback

    return sanitized
