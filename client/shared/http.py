"""JSON-over-HTTP helper used by the backend clients."""
from typing import Any, Dict, Optional

import requests
import structlog

from client.shared.exceptions import ExternalServiceError, MalformedResponseError

logger = structlog.get_logger("stacbot.http")

SERVICE_NAME = "STACBot backend"


def post_json(
    session: requests.Session,
    url: str,
    payload: Dict[str, Any],
    *,
    timeout: Optional[float] = None,
    check_status: bool = True,
) -> Dict[str, Any]:
    """POST ``payload`` as JSON and return the decoded object body.

    Raises ExternalServiceError when the backend cannot be reached or answers
    with an error status (unless ``check_status`` is off), and
    MalformedResponseError when the body is not a JSON object.
    """
    logger.debug("backend_request", url=url)
    try:
        resp = session.post(
            url,
            json=payload,
            headers={"Content-Type": "application/json"},
            timeout=timeout,
        )
    except requests.RequestException as e:
        raise ExternalServiceError(
            SERVICE_NAME, f"Failed to reach API at {url}: {e}", {"url": url}
        ) from e

    if check_status and resp.status_code >= 400:
        try:
            detail = resp.json().get("detail")
        except Exception:
            detail = resp.text
        raise ExternalServiceError(
            SERVICE_NAME,
            f"API error {resp.status_code}: {detail}",
            {"url": url, "status_code": resp.status_code},
        )

    try:
        data = resp.json()
    except ValueError as e:
        raise MalformedResponseError(
            SERVICE_NAME, f"Response from {url} is not valid JSON", {"url": url}
        ) from e
    if not isinstance(data, dict):
        raise MalformedResponseError(
            SERVICE_NAME,
            f"Expected a JSON object from {url}, got {type(data).__name__}",
            {"url": url},
        )
    logger.debug("backend_response", url=url, status_code=resp.status_code)
    return data
