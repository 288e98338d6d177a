"""
JSON codec for dashboard documents.

Parses raw JSON into DashboardDocument and produces the canonical text form
used both for storage and for change detection. Content is considered
unchanged exactly when canonical forms are equal; no semantic diffing is done.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from dashsync.core.dashboards.exceptions import FileAccessError, ParseError
from dashsync.core.dashboards.models import DashboardDocument


def _loads(raw: str | bytes, source: str) -> Any:
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ParseError(source, f"malformed JSON: {e}") from e


def canonicalize(content: str | bytes | dict[str, Any], source: str = "<json>") -> str:
    """
    Produce the canonical text of a JSON document.

    Keys are sorted, indentation is two spaces, non-ASCII characters are kept
    as-is and there is no trailing newline.

    Args:
        content: Raw JSON text/bytes or an already-parsed object
        source: Name used in error messages

    Returns:
        Canonical JSON text

    Raises:
        ParseError: If raw input is not well-formed JSON

    Example:
        >>> canonicalize('{"b": 1, "a": [1, 2]}')
        '{\\n  "a": [\\n    1,\\n    2\\n  ],\\n  "b": 1\\n}'
    """
    obj = _loads(content, source) if isinstance(content, (str, bytes)) else content
    return json.dumps(obj, indent=2, sort_keys=True, ensure_ascii=False)


def parse_document(
    raw: str | bytes | dict[str, Any],
    source: str = "<json>",
    *,
    model: type[DashboardDocument] = DashboardDocument,
) -> DashboardDocument:
    """
    Parse a dashboard JSON document.

    Args:
        raw: Raw JSON text/bytes or an already-parsed object
        source: Name used in error messages (file path, record label)
        model: Document model to validate against; StoredDocument accepts a
            missing uid

    Returns:
        DashboardDocument with title, uid, tags and all extra fields

    Raises:
        ParseError: If JSON is malformed, not an object, or title/uid are
            missing or empty
    """
    obj = _loads(raw, source) if isinstance(raw, (str, bytes)) else raw
    if not isinstance(obj, dict):
        raise ParseError(source, f"expected a JSON object, got {type(obj).__name__}")

    try:
        return model.model_validate(obj)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'document'}: {err['msg']}"
            for err in e.errors()
        )
        raise ParseError(source, problems) from e


def read_document(path: Path | str) -> tuple[DashboardDocument, str]:
    """
    Read and parse a dashboard JSON file.

    Args:
        path: JSON file path

    Returns:
        Tuple of (parsed document, canonical text)

    Raises:
        FileAccessError: If the file cannot be read
        ParseError: If the content is not a valid dashboard document
    """
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise FileAccessError(str(path), f"cannot read: {e.strerror or e}") from e

    obj = _loads(raw, str(path))
    return parse_document(obj, str(path)), canonicalize(obj)


def write_text(path: Path | str, text: str) -> Path:
    """
    Write text to a file, wrapping I/O failures.

    Raises:
        FileAccessError: If the file cannot be written
    """
    path = Path(path)
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise FileAccessError(str(path), f"cannot write: {e.strerror or e}") from e
    return path
