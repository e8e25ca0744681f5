"""
JSON Utility Functions

Safe JSON handling plus the structured-output parser that turns raw LLM text
into Python objects without ever raising on malformed output.
"""
import json
import re
from typing import Any, Dict, List, Optional, TypeVar, Union

T = TypeVar("T")

_LEADING_FENCE = re.compile(r"^```[ \t]*(?:json)?[ \t]*\r?\n?", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\r?\n?```\s*$")
_JSON_OPENER = re.compile(r"[\[{]")
_TRAILING_COMMA = re.compile(r",\s*([}\]])")

_decoder = json.JSONDecoder()


def safe_json_parse(
    data: Any,
    default: Any = None
) -> Union[Dict, List, Any]:
    """
    Safely parse JSON data, handling strings and already-parsed objects.

    Examples:
        >>> safe_json_parse('{"key": "value"}')
        {'key': 'value'}

        >>> safe_json_parse({'already': 'parsed'})
        {'already': 'parsed'}

        >>> safe_json_parse('invalid json', default=[])
        []
    """
    if data is None:
        return default

    if isinstance(data, (dict, list)):
        return data

    if isinstance(data, (str, bytes)):
        if not data.strip():
            return default
        try:
            return json.loads(data)
        except (json.JSONDecodeError, ValueError):
            return default

    return default


def strip_code_fence(text: str) -> str:
    """
    Remove a surrounding Markdown code fence (``` or ```json) from model output.
    Text without a leading fence is returned trimmed but otherwise untouched.
    """
    stripped = (text or "").strip()
    if not stripped.startswith("```"):
        return stripped
    stripped = _LEADING_FENCE.sub("", stripped, count=1)
    stripped = _TRAILING_FENCE.sub("", stripped, count=1)
    return stripped.strip()


def _find_embedded_json(text: str) -> Optional[Any]:
    """
    Locate the JSON payload inside prose.

    Tries each opening bracket in order and returns the first structured
    value (a non-empty object, or an array holding objects). Citation
    markers like "[1]" or an empty "[]" before the payload are passed over.
    Then tries the widest bracketed span with trailing commas removed, and
    only then settles for the first trivial value that decoded.
    """
    first_trivial: Optional[Any] = None
    position = 0
    while True:
        match = _JSON_OPENER.search(text, position)
        if match is None:
            break
        try:
            value, end = _decoder.raw_decode(text, match.start())
        except json.JSONDecodeError:
            position = match.start() + 1
            continue
        if _is_structured(value):
            return value
        if first_trivial is None:
            first_trivial = value
        # skip past the trivial value so its inner brackets are not retried
        position = end

    for opener, closer in (("[", "]"), ("{", "}")):
        first = text.find(opener)
        last = text.rfind(closer)
        if first == -1 or last <= first:
            continue
        candidate = _TRAILING_COMMA.sub(r"\1", text[first:last + 1])
        try:
            value = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if _is_structured(value) or first_trivial is None:
            return value

    return first_trivial


def _is_structured(value: Any) -> bool:
    if isinstance(value, dict):
        return bool(value)
    if isinstance(value, list):
        return any(isinstance(item, dict) for item in value)
    return False


def parse_or_default(text: Optional[str], fallback: T) -> Union[Any, T]:
    """
    Parse an LLM response into JSON, returning `fallback` instead of raising.

    Steps:
    1. Trim and strip a Markdown code fence (optionally tagged `json`)
    2. Strict json.loads of what is left
    3. Pattern search for the first embedded JSON array/object
    4. Give up and return `fallback`

    Examples:
        >>> parse_or_default('```json\\n{"subject": "Hi"}\\n```', {})
        {'subject': 'Hi'}

        >>> parse_or_default('Sure! Here you go: [1, 2]', [])
        [1, 2]

        >>> parse_or_default('not json at all', [])
        []
    """
    if not isinstance(text, str):
        return fallback

    body = strip_code_fence(text)
    if not body:
        return fallback

    try:
        return json.loads(body)
    except (json.JSONDecodeError, ValueError):
        pass

    embedded = _find_embedded_json(body)
    if embedded is None:
        return fallback
    return embedded


# ============================================
# SHAPE GUARDS AND FIELD COERCION
# ============================================

def expect_list(value: Any, key: Optional[str] = None) -> List[Any]:
    """
    Return `value` as a list. A dict wrapper like {"outlets": [...]} is
    unwrapped through `key`; anything else becomes [].
    """
    if isinstance(value, list):
        return value
    if key and isinstance(value, dict) and isinstance(value.get(key), list):
        return value[key]
    return []


def expect_dict(value: Any) -> Dict[str, Any]:
    """Return `value` if it is a dict, else {}. A one-item list is unwrapped."""
    if isinstance(value, dict):
        return value
    if isinstance(value, list) and len(value) == 1 and isinstance(value[0], dict):
        return value[0]
    return {}


def coerce_str(value: Any, default: str = "") -> str:
    """Scalar -> stripped string; None, blanks and containers -> default."""
    if value is None or isinstance(value, (dict, list, bool)):
        return default
    text = str(value).strip()
    return text if text else default


def coerce_optional_str(value: Any) -> Optional[str]:
    text = coerce_str(value)
    return text or None


def coerce_score(value: Any) -> Optional[int]:
    """Relevance score -> int clamped to 0..100, None if not numeric."""
    if value is None or isinstance(value, bool):
        return None
    try:
        score = int(round(float(value)))
    except (TypeError, ValueError, OverflowError):
        return None
    return max(0, min(100, score))
