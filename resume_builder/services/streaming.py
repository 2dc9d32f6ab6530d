"""Helpers for streamed AI responses.

A streamed body is only meaningful once fully drained: chunks are
concatenated first, then the JSON object is located in the whole text.
"""

import codecs
import json
import logging
from typing import Any, AsyncIterable, Dict, Optional, Tuple, Union

from ..errors import ParseError

logger = logging.getLogger(__name__)

Chunk = Union[bytes, str]


async def drain_stream(chunks: AsyncIterable[Chunk]) -> str:
    """Concatenate every chunk of a streamed body into one string.

    Byte chunks are decoded incrementally so a multi-byte UTF-8 sequence
    split across two chunks is decoded correctly.
    """
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    parts = []
    count = 0

    async for chunk in chunks:
        count += 1
        if isinstance(chunk, bytes):
            parts.append(decoder.decode(chunk))
        else:
            parts.append(chunk)

    parts.append(decoder.decode(b"", final=True))
    text = "".join(parts)
    logger.debug(f"Drained {count} chunks ({len(text)} chars)")
    return text


def find_json_object(text: str) -> Optional[Tuple[int, int]]:
    """Locate the first balanced ``{...}`` region in ``text``.

    Braces inside JSON string literals are ignored.

    Returns:
        (start, end) slice bounds, or None if no balanced region exists.
    """
    start = text.find("{")
    if start < 0:
        return None

    depth = 0
    in_string = False
    escaped = False

    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return start, index + 1

    return None


def extract_json_object(text: str) -> Dict[str, Any]:
    """Parse the first balanced JSON object embedded in ``text``.

    Raises:
        ParseError: If no balanced region exists or it is not valid JSON.
    """
    bounds = find_json_object(text)
    if bounds is None:
        raise ParseError("Invalid response format: no JSON object found")

    start, end = bounds
    try:
        return json.loads(text[start:end])
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid response format: {e.msg}") from e
