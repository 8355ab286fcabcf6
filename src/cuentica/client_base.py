"""Base client functionality for Cuéntica API."""

from __future__ import annotations

import base64
import json
import logging
import math
import mimetypes
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, BinaryIO, Literal, TypeVar

import httpx
from pydantic import BaseModel

from cuentica.exceptions import CuenticaAPIError, CuenticaRateLimitError
from cuentica.models import Attachment

# Each channel can be silenced or raised independently,
# e.g. logging.getLogger("cuentica.request").setLevel(logging.DEBUG)
api_log = logging.getLogger("cuentica.api")
request_log = logging.getLogger("cuentica.request")
error_log = logging.getLogger("cuentica.error")

HttpMethod = Literal["GET", "POST", "PUT", "DELETE"]
QueryValue = str | int | float | bool | date | None

T = TypeVar("T", bound=BaseModel)


class ClientConfig:
    """Configuration for Cuéntica API client."""

    BASE_URL = "https://api.cuentica.com"
    DEFAULT_TIMEOUT = 30.0
    TOKEN_ENV_VAR = "CUENTICA_TOKEN"
    RATE_LIMIT_RESET_HEADER = "X-RateLimit-Reset"


@dataclass(frozen=True)
class RequestDescriptor:
    """One outbound call: verb, path relative to the base URL, body and query.

    A ``None`` query value means "omit the parameter"; an empty string is
    sent as ``key=``.
    """

    method: HttpMethod
    path: str
    body: Any = None
    query: Mapping[str, QueryValue] | None = None

    def query_params(self) -> list[tuple[str, str]]:
        """Return the query as ordered pairs, dropping absent values.

        Returns:
            List of (name, value) pairs in the order they were supplied
        """
        if not self.query:
            return []
        return [
            (key, format_query_value(value))
            for key, value in self.query.items()
            if value is not None
        ]

    def encode_body(self) -> bytes | None:
        """Serialize the body to compact JSON, or None when there is no body."""
        if self.body is None:
            return None
        return json.dumps(dump_payload(self.body), separators=(",", ":")).encode()


def format_query_value(value: str | int | float | bool | date) -> str:
    """Render a scalar query value the way the API expects it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def dump_payload(payload: Any) -> Any:
    """Convert models, dates and containers into JSON-ready values.

    Models only contribute the fields that were explicitly set, so partial
    updates stay partial.
    """
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json", exclude_unset=True)
    if isinstance(payload, Mapping):
        return {key: dump_payload(value) for key, value in payload.items()}
    if isinstance(payload, (list, tuple)):
        return [dump_payload(value) for value in payload]
    if isinstance(payload, date):
        return payload.isoformat()
    return payload


def join_tags(tags: Sequence[str] | None) -> str | None:
    """Flatten a tag list into the comma separated form used by list filters.

    Args:
        tags: Tags to filter by

    Returns:
        None when no list was given (parameter omitted), otherwise the joined
        string, which is empty for an empty list
    """
    if tags is None:
        return None
    return ",".join(tags)


def build_request(
    client: httpx.Client | httpx.AsyncClient,
    descriptor: RequestDescriptor,
    auth_headers: dict[str, str],
) -> httpx.Request:
    """Assemble the outbound request for a descriptor.

    Args:
        client: HTTP client carrying the base URL
        descriptor: The call to make
        auth_headers: Authentication headers

    Returns:
        Request ready to be sent
    """
    headers = dict(auth_headers)
    content = descriptor.encode_body()
    if content is not None:
        headers["Content-Type"] = "application/json"

    request = client.build_request(
        method=descriptor.method,
        url=descriptor.path,
        params=descriptor.query_params(),
        headers=headers,
        content=content,
    )

    request_log.debug("%s %s", descriptor.method, request.url)
    if descriptor.body is not None:
        request_log.debug("Request body: %s", descriptor.body)
    return request


def parse_rate_limit_reset(headers: httpx.Headers) -> datetime:
    """Read the reset instant of a 429 response.

    Args:
        headers: Response headers

    Returns:
        Reset time as an aware UTC datetime; epoch when the header is
        missing or unusable
    """
    raw = headers.get(ClientConfig.RATE_LIMIT_RESET_HEADER)
    try:
        seconds = float(raw) if raw else 0.0
    except ValueError:
        seconds = 0.0
    if not math.isfinite(seconds):
        seconds = 0.0
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return datetime.fromtimestamp(0, tz=timezone.utc)


def response_text(response: httpx.Response) -> str:
    """Return the body as text, or an empty string if it cannot be read."""
    try:
        return response.text
    except httpx.ResponseNotRead:
        return ""


def parse_error_response(response: httpx.Response) -> CuenticaAPIError:
    """Parse error response and return appropriate exception.

    Args:
        response: HTTP response from the API

    Returns:
        CuenticaRateLimitError for 429, CuenticaAPIError otherwise
    """
    request = response.request

    if response.status_code == 429:
        reset_time = parse_rate_limit_reset(response.headers)
        error_log.warning("Rate limit exceeded. Reset at %s", reset_time.isoformat())
        return CuenticaRateLimitError(reset_time, request, response)

    text = response_text(response)
    message = f"HTTP {response.status_code}: {text}"
    error_log.error(message)
    return CuenticaAPIError(message, response.status_code, text, request, response)


def parse_response(response: httpx.Response) -> Any:
    """Classify a JSON API response.

    Args:
        response: HTTP response from the API

    Returns:
        Decoded JSON payload, or None for 204 No Content

    Raises:
        CuenticaRateLimitError: On 429
        CuenticaAPIError: On any other non-2xx status
        json.JSONDecodeError: If a 2xx body is not valid JSON
    """
    if response.status_code == 429 or not response.is_success:
        raise parse_error_response(response)

    if response.status_code == 204:
        request_log.debug("Empty response (204)")
        return None

    data = response.json()
    request_log.debug("Response: %s", data)
    return data


def parse_model(model: type[T], data: Any) -> T | None:
    """Validate a single resource, passing a 204 (None) through."""
    if data is None:
        return None
    return model.model_validate(data)


def parse_model_list(model: type[T], data: Any) -> list[T] | None:
    """Validate a list of resources, passing a 204 (None) through."""
    if data is None:
        return None
    return [model.model_validate(item) for item in data]


def parse_binary_response(response: httpx.Response) -> bytes:
    """Classify a binary (file download) response.

    Error statuses are handled like JSON responses; a successful body is
    returned untouched.

    Args:
        response: HTTP response from the API

    Returns:
        Raw response body
    """
    if not response.is_success:
        raise parse_error_response(response)

    request_log.debug("Binary response (%d bytes)", len(response.content))
    return response.content


def prepare_attachment(
    file: Path | str | BinaryIO | bytes,
    filename: str | None = None,
    mimetype: str | None = None,
) -> Attachment:
    """Prepare a file for inline upload in a document body.

    Args:
        file: File path, file path string, file-like object or raw bytes
        filename: Optional filename override
        mimetype: Optional content type override

    Returns:
        Attachment with base64 encoded content
    """
    if isinstance(file, (Path, str)):
        file_path = Path(file)
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        actual_filename = filename or file_path.name
        file_bytes = file_path.read_bytes()
    else:
        actual_filename = filename or "attachment"
        if isinstance(file, bytes):
            file_bytes = file
        else:
            file_bytes = file.read()

    content_type = (
        mimetype
        or mimetypes.guess_type(actual_filename)[0]
        or "application/octet-stream"
    )
    return Attachment(
        filename=actual_filename,
        data=base64.b64encode(file_bytes).decode("ascii"),
        mimetype=content_type,
    )


def document_body(
    attachment: Attachment | Mapping[str, Any] | None,
    document_date: date | str | None,
    expense_id: int | None,
) -> dict[str, Any]:
    """Build a document create/update body, leaving out unset fields."""
    body: dict[str, Any] = {}
    if attachment is not None:
        body["attachment"] = attachment
    if document_date is not None:
        body["date"] = document_date
    if expense_id is not None:
        body["expense_id"] = expense_id
    return body
