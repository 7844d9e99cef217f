from __future__ import annotations

import json
import math
from typing import Any

from json_echo.core.common.exceptions import InvalidJSONError
from json_echo.core.constants import DEFAULT_JSON_INDENT, DEFAULT_JSON_MAX_DEPTH


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


class _NumberOutOfRange(ValueError):
    pass


def _parse_finite_float(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        raise _NumberOutOfRange(f"Number out of range: {text}")
    return value


def _parse_int(text: str) -> int:
    try:
        return int(text)
    except ValueError as e:
        # Longer than the interpreter's int string conversion limit; as a
        # double it would overflow anyway
        raise _NumberOutOfRange(
            f"Integer out of range: {len(text.lstrip('-'))} digits"
        ) from e


def json_depth(value: Any) -> int:
    """Return the deepest array/object nesting level of a decoded value.

    Scalars have depth 0, ``[]`` and ``{}`` have depth 1.
    """
    depth = 0
    stack: list[tuple[Any, int]] = [(value, 1)]
    while stack:
        node, level = stack.pop()
        if isinstance(node, dict):
            children: Any = node.values()
        elif isinstance(node, list):
            children = node
        else:
            continue
        depth = max(depth, level)
        stack.extend((child, level + 1) for child in children)
    return depth


class JsonCodecService:
    """
    Strict JSON decoding and pretty-printed encoding for echoed payloads.

    Only standard JSON is accepted: the body must be UTF-8 without a byte
    order mark, ``NaN``/``Infinity`` are rejected, floats must fit a double,
    integers keep full precision up to the interpreter's 4300 digit
    conversion limit and nesting is bounded by ``max_depth``. Output is
    indented, keeps ``/`` unescaped and escapes non-ASCII characters as ``\\uXXXX``.
    """

    def __init__(
        self,
        max_depth: int = DEFAULT_JSON_MAX_DEPTH,
        indent: int = DEFAULT_JSON_INDENT,
    ) -> None:
        self.max_depth = max_depth
        self.indent = indent

    def decode(self, body: bytes) -> Any:
        """
        Decode a raw request body.

        Args:
            body: The raw request body.

        Returns:
            The decoded JSON value.

        Raises:
            InvalidJSONError: If the body is not a valid JSON document.
        """
        try:
            text = body.decode("utf-8")
            value = json.loads(
                text,
                parse_constant=_reject_constant,
                parse_float=_parse_finite_float,
                parse_int=_parse_int,
            )
        except UnicodeDecodeError as e:
            raise InvalidJSONError(
                details={"reason": "Malformed UTF-8 characters", "error": str(e)}
            ) from e
        except RecursionError as e:
            raise InvalidJSONError(
                details={"reason": "Maximum stack depth exceeded"}
            ) from e
        except _NumberOutOfRange as e:
            raise InvalidJSONError(
                details={"reason": "Number out of range", "error": str(e)}
            ) from e
        except ValueError as e:
            # json.JSONDecodeError is a ValueError subclass
            raise InvalidJSONError(
                details={"reason": "Syntax error", "error": str(e)}
            ) from e

        depth = json_depth(value)
        if depth > self.max_depth:
            raise InvalidJSONError(
                details={
                    "reason": "Maximum stack depth exceeded",
                    "depth": depth,
                    "max_depth": self.max_depth,
                }
            )
        return value

    def encode(self, value: Any) -> bytes:
        """Serialize a value as pretty-printed JSON."""
        return json.dumps(
            value,
            indent=self.indent,
            ensure_ascii=True,
            allow_nan=False,
        ).encode("ascii")
