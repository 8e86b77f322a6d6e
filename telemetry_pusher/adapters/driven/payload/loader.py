"""Payload file loading."""

import json
import logging
from typing import Any

from telemetry_pusher.core.errors import InvalidJsonError, PayloadFileNotFoundError
from telemetry_pusher.ports.payload import PayloadDocument

__all__ = ["load_payload", "DEFAULT_PAYLOAD_FILE"]

logger = logging.getLogger(__name__)

DEFAULT_PAYLOAD_FILE = "data.json"


def _reject_constant(name: str) -> Any:
    # json accepts NaN/Infinity by default, which is not valid JSON.
    raise ValueError(f"non-standard JSON constant {name!r}")


def load_payload(path: str = DEFAULT_PAYLOAD_FILE) -> PayloadDocument:
    """Read and parse the payload file.

    The whole file must parse; the parsed value is serialized once and the
    same bytes are published on every round.

    Args:
        path: Path of the JSON file.

    Returns:
        The loaded document.

    Raises:
        PayloadFileNotFoundError: If the file cannot be opened or read.
        InvalidJsonError: If the content is not well-formed JSON.
    """
    try:
        with open(path, encoding="utf-8-sig") as f:
            content = f.read()
    except UnicodeDecodeError as e:
        raise InvalidJsonError(path, f"not valid UTF-8: {e}") from e
    except OSError as e:
        raise PayloadFileNotFoundError(path, e.strerror or str(e)) from e

    try:
        value = json.loads(content, parse_constant=_reject_constant)
    except ValueError as e:
        raise InvalidJsonError(path, str(e)) from e
    except RecursionError as e:
        raise InvalidJsonError(path, "document nested too deeply") from e

    try:
        body = json.dumps(value, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    except UnicodeEncodeError:
        # Lone surrogate escapes (e.g. "\ud800") only survive as \u escapes.
        body = json.dumps(value, separators=(",", ":")).encode("ascii")
    logger.debug(f"Loaded payload from {path} ({type(value).__name__}, {len(body)} bytes)")

    return PayloadDocument(source=path, value=value, body=body)
