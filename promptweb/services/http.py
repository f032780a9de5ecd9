"""
Shared HTTP request wrapper for platform adapters.
==================================================
Injects bearer auth, serializes JSON bodies and normalizes failures
into ServiceError. No retries: one failed call is one failed step.
"""
import json
import logging
from typing import Any, Dict, Optional

import httpx

from ..exceptions import ServiceError

logger = logging.getLogger("services.http")

DEFAULT_TIMEOUT_SECONDS = 60.0


def extract_error_message(response: httpx.Response) -> str:
    """Pulls a human-readable message out of an error body, if there is one."""
    try:
        body = response.json()
    except (json.JSONDecodeError, ValueError):
        return "Unknown error"

    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if body.get("message"):
            return str(body["message"])
        if isinstance(error, str) and error:
            return error
    return "Unknown error"


class ServiceClient:
    """Base class for one external platform reachable over HTTP."""

    platform = "service"
    base_url = ""

    def __init__(
        self,
        token: str,
        base_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        extra_headers: Optional[Dict[str, str]] = None,
    ):
        headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }
        headers.update(extra_headers or {})
        self.http_client = httpx.AsyncClient(
            base_url=base_url or self.base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def aclose(self):
        await self.http_client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def _request(
        self,
        method: str,
        endpoint: str,
        json_data: Optional[Any] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        logger.debug(f"{self.platform} request: {method} {endpoint}")
        try:
            response = await self.http_client.request(method, endpoint, json=json_data, params=params)
        except httpx.TimeoutException as e:
            raise ServiceError(self.platform, f"Request to {endpoint} timed out") from e
        except httpx.RequestError as e:
            raise ServiceError(self.platform, f"Request to {endpoint} failed: {e}") from e

        if not response.is_success:
            message = extract_error_message(response)
            logger.error(f"{self.platform} {method} {endpoint} -> {response.status_code}: {message}")
            raise ServiceError(self.platform, message, status_code=response.status_code)

        if not response.content:
            return {}
        try:
            return response.json()
        except (json.JSONDecodeError, ValueError) as e:
            raise ServiceError(
                self.platform, f"Invalid JSON in response to {endpoint}", status_code=response.status_code
            ) from e
