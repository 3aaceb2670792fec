"""
HTTP client for the SigNoz query_range API.
"""

import logging
from typing import Any

import httpx

from .config import SigNozConfig
from .shared.models import QueryRangePayload

logger = logging.getLogger("signoz_tools.client")


class SigNozAPIError(Exception):
    """A failed query_range call.

    Attributes:
        status_code: HTTP status, or None for transport errors and timeouts.
        message: Human-readable reason.
    """

    def __init__(self, status_code: int | None, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"API call failed with status {status_code if status_code is not None else 'N/A'}: {message}")

    @property
    def is_auth_error(self) -> bool:
        return self.status_code in (401, 403)


def _error_message(response: httpx.Response) -> str:
    """Pull the backend's error message out of a failed response."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("message", "error"):
            if isinstance(body.get(key), str) and body[key]:
                return body[key]
    return response.text or response.reason_phrase or "Unknown error"


class SigNozClient:
    """Sends query_range payloads to a SigNoz instance.

    Holds no connection state between calls; each request opens its own
    ``httpx.AsyncClient`` so concurrent tool calls stay independent.
    """

    def __init__(self, config: SigNozConfig, transport: httpx.AsyncBaseTransport | None = None):
        self.config = config
        self._transport = transport

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "SIGNOZ-API-KEY": self.config.api_key,
            "User-Agent": self.config.user_agent,
        }

    async def query_range(self, payload: QueryRangePayload) -> dict[str, Any]:
        """POST a payload and return the decoded JSON body.

        Raises:
            SigNozAPIError: On transport errors, timeouts, non-2xx status or a non-JSON body.
        """
        body = payload.to_wire()
        logger.debug(f"POST {self.config.endpoint}: {body}")

        async with httpx.AsyncClient(timeout=self.config.timeout, transport=self._transport) as client:
            try:
                response = await client.post(self.config.endpoint, headers=self.headers, json=body)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                error = SigNozAPIError(e.response.status_code, _error_message(e.response))
                if error.is_auth_error:
                    logger.error(f"Authentication Error ({error.status_code}): Check SIGNOZ_API_KEY.")
                else:
                    logger.warning(str(error))
                raise error from e
            except httpx.TimeoutException as e:
                logger.warning(f"Request to {self.config.endpoint} timed out after {self.config.timeout}s")
                raise SigNozAPIError(None, f"Request timed out after {self.config.timeout}s") from e
            except httpx.RequestError as e:
                logger.warning(f"Request to {self.config.endpoint} failed: {e}")
                raise SigNozAPIError(None, str(e) or type(e).__name__) from e

        try:
            return response.json()
        except ValueError as e:
            raise SigNozAPIError(response.status_code, "Invalid JSON in response") from e
