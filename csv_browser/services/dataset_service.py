from __future__ import annotations

import base64
import binascii
import logging
from pathlib import Path
from typing import Tuple

from csv_browser.core.exceptions import LoadError
from csv_browser.validation.errors import ValidationError, ValidationIssue

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 50 * 1024 * 1024
CSV_CONTENT_TYPES = {"text/csv", "application/csv"}


def read_default_dataset(path: Path | str) -> bytes:
    """
    Read the bundled dataset shown at start-up.

    :raises LoadError: if the file is missing or unreadable.
    """
    path = Path(path)
    logger.info("Loading default dataset", extra={"path": str(path)})

    if not path.is_file():
        raise LoadError(f"Failed to load CSV file: {path.name} not found")
    try:
        return path.read_bytes()
    except OSError as e:
        logger.error("Default dataset unreadable", extra={"path": str(path), "error": str(e)})
        raise LoadError(f"Failed to load CSV file: {e.strerror or e}") from e


def split_data_url(contents: str) -> Tuple[str, str]:
    """
    Split a ``dcc.Upload`` payload ("data:<type>;base64,<data>") into content type and base64 body.
    """
    try:
        head, body = contents.split(",", 1)
    except ValueError as e:
        raise LoadError("The uploaded file appears to be corrupted.") from e
    content_type = head[len("data:"):] if head.startswith("data:") else head
    content_type = content_type.split(";", 1)[0].strip().lower()
    return content_type, body


def decode_upload(contents: str, filename: str, max_bytes: int = MAX_UPLOAD_BYTES) -> bytes:
    """
    Validate and decode an uploaded file before it reaches the parser.

    :raises ValidationError: not a CSV file, or larger than ``max_bytes``.
    :raises LoadError: payload is not valid base64.
    """
    if not contents or not filename:
        raise ValidationError.single("UPLOAD_MISSING", "Please select a CSV file first.")

    content_type, body = split_data_url(contents)
    if content_type not in CSV_CONTENT_TYPES and not filename.lower().endswith(".csv"):
        raise ValidationError(
            [ValidationIssue("UPLOAD_TYPE", f"'{filename}' is not a CSV file. Please select a valid CSV file.")]
        )

    # Reject on the encoded size first so oversized payloads are never decoded
    if len(body) * 3 // 4 > max_bytes + 3:
        raise _too_large(filename, max_bytes)

    try:
        decoded = base64.b64decode(body, validate=True)
    except (ValueError, binascii.Error) as e:
        logger.error("Corrupted upload data", extra={"upload_filename": filename, "error": str(e)})
        raise LoadError(f"The uploaded file '{filename}' appears to be corrupted.") from e

    if len(decoded) > max_bytes:
        raise _too_large(filename, max_bytes)

    logger.info("Upload accepted", extra={"upload_filename": filename, "n_bytes": len(decoded)})
    return decoded


def _too_large(filename: str, max_bytes: int) -> ValidationError:
    limit_mib = max_bytes / (1024 * 1024)
    return ValidationError(
        [ValidationIssue("UPLOAD_SIZE", f"File '{filename}' exceeds the {limit_mib:g} MiB limit.")]
    )
