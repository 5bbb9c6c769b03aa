from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import aiohttp

from app.common.logging_config import TRACE
from app.constants import DEVICE_URL, REQUEST_TIMEOUT_S, STATUS_PATH
from app.state import StatusSnapshot

logger = logging.getLogger(__name__)

# Every poll must reflect live device state, never an intermediate cache
NO_CACHE_HEADERS = {"Cache-Control": "no-cache", "Pragma": "no-cache"}

_NUMERIC_KEYS = ("homePower", "wallboxPower", "wallboxCurrent")


class StatusFetchError(Exception):
    """A poll that did not produce a status document."""

    def __init__(self, diagnostic: str) -> None:
        super().__init__(diagnostic)
        self.diagnostic = diagnostic


class TransportError(StatusFetchError):
    """The request could not be completed (refused, DNS, timeout...)."""


class ProtocolError(StatusFetchError):
    """The device answered with a non-success status code."""

    def __init__(self, status: int) -> None:
        super().__init__(str(status))
        self.status = status


class ParseError(StatusFetchError):
    """The body is not JSON or not shaped like a status document."""


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON even though the json module accepts them
    raise ValueError(f"invalid JSON constant {name!r}")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_status(payload: Any) -> StatusSnapshot:
    """
    Validate a decoded JSON document and turn it into a StatusSnapshot.

    Raises:
        ParseError: if the document does not have the expected shape
    """
    if not isinstance(payload, dict):
        raise ParseError(
            f"expected a JSON object, got {type(payload).__name__}"
        )

    for key in _NUMERIC_KEYS:
        if key not in payload:
            raise ParseError(f"missing field '{key}'")
        if not _is_number(payload[key]):
            raise ParseError(
                f"field '{key}' is not numeric: {payload[key]!r}"
            )

    if "homeRaw" not in payload:
        raise ParseError("missing field 'homeRaw'")
    home_raw = payload["homeRaw"]
    if not (_is_number(home_raw) or isinstance(home_raw, str)):
        raise ParseError(f"field 'homeRaw' has unexpected value: {home_raw!r}")

    error = payload.get("error")
    if error is None:
        error = ""
    elif not isinstance(error, str):
        raise ParseError(f"field 'error' is not a string: {error!r}")

    return StatusSnapshot(
        home_power=payload["homePower"],
        home_raw=home_raw,
        wallbox_power=payload["wallboxPower"],
        wallbox_current=payload["wallboxCurrent"],
        error=error,
    )


class WallEnoClient:
    """Async HTTP client for the wall-eno status endpoint."""

    def __init__(
        self,
        base_url: str = DEVICE_URL,
        timeout: float = REQUEST_TIMEOUT_S,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self._session = session
        self._owns_session = session is None

    @property
    def base_url(self) -> str:
        return self._base_url

    @base_url.setter
    def base_url(self, value: str) -> None:
        self._base_url = value.rstrip("/")

    @property
    def status_url(self) -> str:
        return f"{self.base_url}{STATUS_PATH}"

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def fetch_status(self) -> StatusSnapshot:
        """
        Issue one GET for the status document.

        Returns:
            The decoded snapshot (its ``error`` may carry a device-reported condition)

        Raises:
            TransportError: request could not be completed
            ProtocolError: status code other than 200
            ParseError: body is not a well-formed status document
        """
        url = self.status_url
        try:
            async with self._get_session().get(
                url,
                headers=NO_CACHE_HEADERS,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as resp:
                if resp.status != 200:
                    raise ProtocolError(resp.status)
                body = await resp.text()
        except UnicodeDecodeError as e:
            raise ParseError(str(e)) from e
        except asyncio.TimeoutError as e:
            raise TransportError("request timed out") from e
        except (aiohttp.ClientError, OSError) as e:
            raise TransportError(str(e) or type(e).__name__) from e

        logger.log(TRACE, "GET %s -> %s", url, body)
        try:
            payload = json.loads(body, parse_constant=_reject_constant)
        except ValueError as e:
            raise ParseError(str(e)) from e
        return parse_status(payload)

    async def close(self) -> None:
        """Close the underlying session if this client created it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None


# Module-level singleton instance
client = WallEnoClient()
