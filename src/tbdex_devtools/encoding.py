"""
Canonical base64url encoding for compact JWT segments
"""

import json
import re
from typing import Any

from jose.utils import base64url_decode, base64url_encode

from .errors import MalformedTokenError

BASE64URL_REGEX = re.compile(r"[A-Za-z0-9_-]*")


def canonical_json(obj: Any) -> str:
    """
    Serialize a JSON-compatible value deterministically

    Keys are sorted and separators carry no whitespace, so equal values
    always produce equal text.
    """
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def encode_bytes(data: bytes) -> str:
    """
    Encode raw bytes as base64url without padding

    Args:
        data: Bytes to encode

    Returns:
        Unpadded base64url text
    """
    return base64url_encode(data).decode("ascii")


def encode_object(obj: Any) -> str:
    """
    Encode a JSON-compatible value as a base64url JWT segment

    Args:
        obj: Value to serialize (dict, list, str, number, bool or None)

    Returns:
        Unpadded base64url of the canonical UTF-8 JSON text
    """
    return encode_bytes(canonical_json(obj).encode("utf-8"))


def decode_to_bytes(text: str) -> bytes:
    """
    Decode unpadded base64url text back into bytes

    Raises:
        MalformedTokenError: If the text is not valid base64url
    """
    if not isinstance(text, str) or not BASE64URL_REGEX.fullmatch(text):
        raise MalformedTokenError("Invalid base64url segment")

    # a single trailing sextet cannot encode a full byte
    if len(text) % 4 == 1:
        raise MalformedTokenError("Invalid base64url segment length")

    try:
        return base64url_decode(text.encode("ascii"))
    except ValueError as error:
        raise MalformedTokenError(f"Invalid base64url segment: {str(error)}") from error


def decode_to_object(text: str) -> Any:
    """
    Decode a base64url JWT segment back into its JSON value

    Raises:
        MalformedTokenError: If the segment is not base64url-encoded UTF-8 JSON
    """
    raw = decode_to_bytes(text)
    try:
        return json.loads(raw.decode("utf-8"))
    except ValueError as error:
        raise MalformedTokenError(f"Segment is not valid JSON: {str(error)}") from error
