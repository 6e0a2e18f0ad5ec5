from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any, Callable, Optional

from ..errors import ContentDecodeError, ContentTypeError


def _compact_dumps(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


class ContentCodec:
    """Turns file content into the string kept in storage, and back.

    Raw mode passes strings through untouched. Otherwise content goes through
    a structured serializer (compact JSON unless another pair is supplied).
    """

    def __init__(
        self,
        dumps: Callable[[Any], str] = _compact_dumps,
        loads: Callable[[str], Any] = json.loads,
    ) -> None:
        self._dumps = dumps
        self._loads = loads

    def encode(self, value: Any, raw: bool = False) -> str:
        if raw:
            if not isinstance(value, str):
                raise ContentTypeError(f"raw content must be str, not {type(value).__name__}")
            return value

        text = self._dumps(value)
        # Some serializers hand back arrays as a quoted string; peel that layer.
        if (
            isinstance(value, Sequence)
            and not isinstance(value, str)
            and len(text) >= 2
            and text[0] == '"'
            and text[-1] == '"'
        ):
            text = text[1:-1]
        return text

    def decode(self, payload: Optional[str], raw: bool = False) -> Any:
        if raw:
            return payload if payload is not None else ""
        if not payload:
            return []
        try:
            return self._loads(payload)
        except ValueError as e:
            raise ContentDecodeError(f"Invalid stored content: {e}") from e


DEFAULT_CODEC = ContentCodec()


def encode_content(value: Any, raw: bool = False) -> str:
    return DEFAULT_CODEC.encode(value, raw)


def decode_content(payload: Optional[str], raw: bool = False) -> Any:
    return DEFAULT_CODEC.decode(payload, raw)
