from pydantic import BaseModel, HttpUrl, TypeAdapter, ValidationError
from typing import Any, List, Optional

_http_url = TypeAdapter(HttpUrl)

FILE_REFERENCE_PREFIXES = ("/", "http://", "https://")


def blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def check_optional_url(value: Optional[str]) -> Optional[str]:
    """Empty strings count as absent; anything else must be an http(s) URL.

    The submitted string is stored as-is so it reads back unchanged.
    """
    value = blank_to_none(value)
    if value is None:
        return None
    try:
        _http_url.validate_python(value)
    except ValidationError:
        raise ValueError("Invalid URL")
    return value


def check_file_reference(value: str) -> str:
    if not value.startswith(FILE_REFERENCE_PREFIXES):
        raise ValueError("File URL must be a relative path or an http(s) URL")
    return value


class PaginationMeta(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class MessageResponse(BaseModel):
    message: str
