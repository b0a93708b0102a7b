"""Shared request handling for the Stack Exchange and GitHub clients."""

import json
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

import httpx

from .errors import PermanentFetchError, TransientFetchError

T = TypeVar("T")

USER_AGENT = "framework-tracker/0.1.0"


@dataclass
class ApiPage(Generic[T]):
    """First page of results returned for one framework."""

    items: list[T] = field(default_factory=list)
    nbytes: int = 0


def get_json(
    client: httpx.Client,
    url: str,
    *,
    source: str,
    target: str,
    params: dict[str, str] | None = None,
) -> tuple[Any, int]:
    """Issue a GET and decode the JSON body.

    Returns:
        Tuple of (decoded payload, response size in bytes)

    Raises:
        TransientFetchError: On timeouts, transport errors, 429 and 5xx
        PermanentFetchError: On other non-2xx statuses or undecodable bodies
    """
    try:
        response = client.get(url, params=params)
    except httpx.TimeoutException as e:
        raise TransientFetchError(source, target, f"timed out: {e}") from e
    except httpx.TransportError as e:
        raise TransientFetchError(source, target, str(e)) from e

    try:
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        message = f"status code {status} {e.response.reason_phrase}"
        if status == 429 or status >= 500:
            raise TransientFetchError(source, target, message) from e
        raise PermanentFetchError(source, target, message) from e

    body = response.content
    try:
        return json.loads(body), len(body)
    except ValueError as e:
        raise PermanentFetchError(source, target, f"malformed JSON: {e}") from e
