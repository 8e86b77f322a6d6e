"""Payload port definition (DTO)."""

from dataclasses import dataclass, field
from typing import Any

__all__ = ["PayloadDocument"]


@dataclass(slots=True, frozen=True)
class PayloadDocument:
    """JSON document published on every round.

    Attributes:
        source: Path the document was read from.
        value: Parsed JSON value (object, array or scalar).
        body: Serialized request body, computed once and reused as-is.
    """

    source: str
    value: Any = field(compare=False)
    body: bytes
