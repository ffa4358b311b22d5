"""Pure helpers for the scan endpoint: data-URL splitting and reply cleanup."""

import json
import re
from dataclasses import dataclass
from typing import Any

# re.ASCII keeps \w to [A-Za-z0-9_]; the payload may not span lines
DATA_URL_RE = re.compile(r"data:(image/\w+);base64,(.*)", re.ASCII)
FENCE_RE = re.compile(r"^```(\w*)?\s*\n?(.*?)\n?\s*```$", re.DOTALL)


class MissingImageError(ValueError):
    pass


class InvalidImageFormatError(ValueError):
    pass


class ResponseParseError(ValueError):
    pass


@dataclass(frozen=True)
class DataUrlImage:
    mime_type: str
    data: str  # raw base64 payload


def parse_data_url(value: Any) -> DataUrlImage:
    """Split `data:<mime>;base64,<payload>` into its parts.

    Raises MissingImageError for an absent or empty value and
    InvalidImageFormatError for anything else that doesn't match.
    """
    if value is None or value == "":
        raise MissingImageError("base64Image is missing")
    if not isinstance(value, str):
        raise InvalidImageFormatError(f"base64Image must be a string, got {type(value).__name__}")

    match = DATA_URL_RE.fullmatch(value)
    if not match:
        raise InvalidImageFormatError("base64Image is not an image data-URL")
    return DataUrlImage(mime_type=match.group(1), data=match.group(2))


def strip_code_fence(text: str) -> str:
    cleaned = text.strip()
    fence = FENCE_RE.match(cleaned)
    if fence and fence.group(2):
        cleaned = fence.group(2).strip()
    return cleaned


def clean_and_parse(raw_text: str) -> Any:
    """Parse a model reply as JSON, tolerating a markdown code fence around it."""
    cleaned = strip_code_fence(raw_text or "")
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ResponseParseError(str(e)) from e
