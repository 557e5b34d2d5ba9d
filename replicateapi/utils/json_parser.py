"""
JSON helpers for Replicate API payloads.

This module provides:
- JSONValue: type alias for opaque JSON substructures (output, error, logs)
- json_kind: shape tag for a decoded JSON value
- encode_json_body / decode_json_body: request/response body codecs
- parse_timestamp: RFC 3339 timestamp parsing
"""

import json
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

import requests

from replicateapi.models.errors import DecodingError, EncodingError

JSONValue = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]

JSON_NULL = 'null'
JSON_BOOL = 'bool'
JSON_NUMBER = 'number'
JSON_STRING = 'string'
JSON_ARRAY = 'array'
JSON_OBJECT = 'object'


def json_kind(value: JSONValue) -> str:
    """
    Return the JSON shape of a decoded value.

    Model outputs have no fixed schema: an image model returns a list of
    URLs, a language model a list of tokens, a classifier an object. This
    tag lets callers branch on the shape without guessing at types.

    Args:
        value: A value produced by json.loads

    Returns:
        One of 'null', 'bool', 'number', 'string', 'array', 'object'

    Raises:
        TypeError: If the value is not a JSON-compatible Python object
    """
    if value is None:
        return JSON_NULL
    # bool is a subclass of int, check it first
    if isinstance(value, bool):
        return JSON_BOOL
    if isinstance(value, (int, float)):
        return JSON_NUMBER
    if isinstance(value, str):
        return JSON_STRING
    if isinstance(value, list):
        return JSON_ARRAY
    if isinstance(value, dict):
        return JSON_OBJECT
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


def encode_json_body(payload: Dict[str, Any]) -> str:
    """
    Serialize a request body.

    Args:
        payload: Mapping to send as the request body

    Returns:
        JSON string

    Raises:
        EncodingError: If the payload contains values JSON cannot represent
    """
    try:
        return json.dumps(payload, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise EncodingError(f"encode request: {e}") from e


def decode_json_body(response: requests.Response) -> Any:
    """
    Decode a response body as JSON.

    Raises:
        DecodingError: If the body is not valid JSON
    """
    try:
        return response.json()
    except ValueError as e:
        raise DecodingError(f"decoding the response: {e}") from e


def parse_timestamp(value: Optional[str], field_name: str) -> Optional[datetime]:
    """
    Parse an RFC 3339 timestamp as returned by the API.

    Args:
        value: Timestamp string such as '2023-01-01T12:00:00.123456Z', or None
        field_name: Name of the field, used in error messages

    Returns:
        Timezone-aware datetime, or None when the value is null

    Raises:
        DecodingError: If the value is not a valid timestamp with a timezone
    """
    if value is None:
        return None
    if not isinstance(value, str):
        raise DecodingError(f"{field_name}: expected timestamp string, got {type(value).__name__}")

    text = value.strip()
    if text.endswith('Z') or text.endswith('z'):
        text = text[:-1] + '+00:00'

    # fromisoformat accepts at most 6 fractional digits before Python 3.11
    if '.' in text:
        head, _, tail = text.partition('.')
        digits = ''
        while tail and tail[0].isdigit():
            digits += tail[0]
            tail = tail[1:]
        text = f"{head}.{digits[:6].ljust(6, '0')}{tail}"

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as e:
        raise DecodingError(f"{field_name}: invalid timestamp {value!r}") from e

    if parsed.tzinfo is None:
        raise DecodingError(f"{field_name}: timestamp {value!r} has no timezone")
    return parsed
