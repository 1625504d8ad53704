"""Parser for key=value secret definition files."""
import logging
from typing import Iterable, Iterator, Optional

from .models import SecretEntry

logger = logging.getLogger(__name__)

_QUOTES = ("'", '"')


def _unquote(value: str) -> str:
    """Strip one pair of matching surrounding quotes."""
    if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
        return value[1:-1]
    return value


def parse_line(line: str, line_number: int = 0) -> Optional[SecretEntry]:
    """
    Parse a single definition line.

    Args:
        line: Raw line from the definitions file
        line_number: 1-based position in the file (debug logging only)

    Returns:
        SecretEntry, or None if the line is blank, a comment, or malformed

    Behavior:
        - Splits on the first '=' only, so values may contain '='
        - Trims whitespace around key and value
        - A value wrapped in matching quotes is unquoted; whitespace inside
          the quotes is kept
        - Lines without '=' or with an empty key/value are skipped silently
    """
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None

    key, _, value = stripped.partition("=")
    key = key.strip()
    value = _unquote(value.strip())

    if not key or not value.strip():
        logger.debug(f"Skipping line {line_number}: missing key or value")
        return None

    return SecretEntry(key=key, value=value, line_number=line_number)


def parse_definitions(lines: Iterable[str]) -> Iterator[SecretEntry]:
    """Yield entries from definition lines in file order."""
    for line_number, line in enumerate(lines, start=1):
        entry = parse_line(line, line_number)
        if entry is not None:
            yield entry
