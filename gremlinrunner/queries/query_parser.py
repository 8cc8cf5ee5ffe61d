"""
Reader for Gremlin query files.

A query file is plain text holding one Gremlin query per line. Lines are
returned exactly as written, in file order: no trimming and no filtering of
blank lines, so malformed queries surface as execution-time failures.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)


class QueryFileNotFoundError(FileNotFoundError):
    """Raised when query file doesn't exist."""

    pass


class QueryFileReadError(Exception):
    """Raised when query file exists but cannot be read or decoded."""

    pass


def read_queries(path: str | Path) -> List[str]:
    """
    Read every query from a newline-delimited query file.

    Args:
        path: Path to the query file

    Returns:
        Ordered list of raw query strings, one per line

    Raises:
        QueryFileNotFoundError: If the file doesn't exist
        QueryFileReadError: If the file can't be read or isn't valid UTF-8

    Example:
        >>> queries = read_queries("queries.txt")
        >>> queries[0]
        "g.V().count()"
    """
    query_path = Path(path).expanduser()
    if not query_path.is_file():
        raise QueryFileNotFoundError(f"Query file not found: {query_path}")

    try:
        # utf-8-sig drops a leading BOM if the editor wrote one
        text = query_path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        raise QueryFileReadError(f"Query file is not valid UTF-8: {query_path} ({e})") from e
    except OSError as e:
        raise QueryFileReadError(f"Could not read query file: {query_path} ({e})") from e

    queries = _split_lines(text)
    logger.info(f"Loaded {len(queries)} queries from {query_path}")
    return queries


def _split_lines(text: str) -> List[str]:
    # Only \n, \r\n and \r are line boundaries; str.splitlines() would also
    # split on form feeds and unicode separators that may appear inside a query.
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines
