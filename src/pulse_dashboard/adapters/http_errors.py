"""Shared response handling for the API clients."""

import httpx

from pulse_dashboard.domain.errors import FetchError


def raise_for_response(response: httpx.Response) -> dict[str, object]:
    """Return the JSON object body or raise ``FetchError``."""
    if not response.is_success:
        raise FetchError(
            f"Request failed: {response.status_code}",
            status_code=response.status_code,
        )
    try:
        payload = response.json()
    except ValueError as exc:
        raise FetchError("Invalid response body") from exc
    if not isinstance(payload, dict):
        raise FetchError("Invalid response body")
    return payload
