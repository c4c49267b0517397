"""HTTP API client for the building-automation portal."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional
from urllib.parse import quote

import aiohttp
from aiohttp.client import ClientTimeout
from yarl import URL

from ..const import (
    CLIENTS_CONTAINER,
    DEFAULT_HEADERS,
    DEFAULT_VALUE_PATH,
    ORDER_ASCENDING,
    SITES_CONTAINER,
    URL_CONTAINER_CHILDREN,
    URL_GET_TOKEN,
    URL_TREND_SAMPLES,
    URL_VALUE,
)
from ..models import Credential, Sample, ValueReading
from .exceptions import ApiException, AuthError, MalformedUpstreamDataError, UpstreamError
from .sample_parser import parse_trend_samples
from .token_cache import TokenCache

if TYPE_CHECKING:
    from ..config import Settings

_LOGGER = logging.getLogger(__name__)

BODY_LOG_LIMIT = 300


def encode_query_value(value: str) -> str:
    """Percent-encode a query value with no safe characters."""
    return quote(value, safe="")


def encode_object_id(path: str) -> str:
    """Encode a portal object path for use as a URL path segment.

    The portal expects the path encoded twice, so ``/`` becomes ``%252F``.
    """
    return quote(quote(path, safe=""), safe="")


def extract_names(data: Any) -> List[str]:
    """Pull ``Name`` values out of a listing body; non-arrays yield []."""
    if not isinstance(data, list):
        return []
    return [item["Name"] for item in data if isinstance(item, dict) and item.get("Name")]


class AutomationClient:
    """Authenticated client for the building-automation portal."""

    __slots__ = ("_session", "_settings", "_tokens", "_timeout")

    def __init__(
        self,
        session: aiohttp.ClientSession,
        settings: Settings,
        token_cache: Optional[TokenCache] = None,
    ) -> None:
        """Initialize the API client.

        Args:
            session: aiohttp client session for HTTP requests
            settings: Portal location, credentials and timeouts
            token_cache: Credential cache; one is created when omitted
        """
        self._session = session
        self._settings = settings
        self._tokens = token_cache or TokenCache(settings.token_validity_seconds)
        self._timeout = ClientTimeout(total=settings.request_timeout)

    @property
    def token_cache(self) -> TokenCache:
        return self._tokens

    def _url(self, endpoint: str, query: str = "") -> URL:
        raw = f"{self._settings.api_base}{endpoint}"
        if query:
            raw = f"{raw}?{query}"
        return URL(raw, encoded=True)

    async def _authenticate(self) -> str:
        """Run the password grant and return the access token.

        Raises:
            AuthError: If the call fails or returns no token
        """
        _LOGGER.info("Requesting new portal access token")
        url = self._url(URL_GET_TOKEN)
        form = {
            "grant_type": "password",
            "username": self._settings.username,
            "password": self._settings.password,
        }
        headers = {"Content-Type": "application/x-www-form-urlencoded", **DEFAULT_HEADERS}

        try:
            async with self._session.post(url, data=form, headers=headers, timeout=self._timeout) as response:
                body = await response.text()
                if not 200 <= response.status < 300:
                    _LOGGER.error(f"Token request failed: {response.status} {body[:BODY_LOG_LIMIT]}")
                    raise AuthError(f"Token request failed: {response.status}")
                try:
                    data = json.loads(body)
                except ValueError as err:
                    raise AuthError("Token response is not JSON") from err
        except (asyncio.TimeoutError, aiohttp.ClientError) as exc:
            _LOGGER.error(f"Token request error: {type(exc).__name__}: {exc}")
            raise AuthError(f"Token request error: {exc}") from exc

        token = data.get("access_token") if isinstance(data, dict) else None
        if not token:
            _LOGGER.error("No access token in token response")
            raise AuthError("No access token in response")

        _LOGGER.info("Portal access token obtained")
        return token

    async def get_token(self) -> Credential:
        """Return a valid credential, authenticating when the cache is stale.

        Raises:
            AuthError: If authentication fails
        """
        return await self._tokens.get(self._authenticate)

    async def _get_json(self, url: URL) -> Any:
        """Issue one authenticated GET and decode the JSON body.

        Raises:
            AuthError: If a token cannot be obtained
            UpstreamError: On a non-2xx response
            ApiException: On transport errors or timeouts
            MalformedUpstreamDataError: If the body is not JSON
        """
        credential = await self.get_token()
        headers = {**DEFAULT_HEADERS, "Authorization": f"Bearer {credential.token}"}

        if _LOGGER.isEnabledFor(logging.DEBUG):
            _LOGGER.debug("HTTP GET %s", url)

        try:
            async with self._session.get(url, headers=headers, timeout=self._timeout) as response:
                body = await response.text()
                if not 200 <= response.status < 300:
                    _LOGGER.error(f"Request failed {url.path}: {response.status} {body[:BODY_LOG_LIMIT]}")
                    error = UpstreamError(response.status, body, str(url))
                    if error.is_auth_failure:
                        self._tokens.invalidate(credential)
                    raise error
        except (asyncio.TimeoutError, aiohttp.ClientError) as exc:
            _LOGGER.error(f"Request error {url.path}: {type(exc).__name__}: {exc}")
            raise ApiException(f"Request error: {exc}") from exc

        try:
            return json.loads(body)
        except ValueError as err:
            _LOGGER.error(f"Invalid JSON from {url.path}: {body[:BODY_LOG_LIMIT]}")
            raise MalformedUpstreamDataError(f"Invalid JSON: {body[:BODY_LOG_LIMIT]}") from err

    async def list_sites(self) -> List[str]:
        url = self._url(URL_CONTAINER_CHILDREN.format(container_id=encode_object_id(SITES_CONTAINER)))
        names = extract_names(await self._get_json(url))
        _LOGGER.info(f"Found {len(names)} portal sites")
        return names

    async def list_clients(self) -> List[str]:
        url = self._url(URL_CONTAINER_CHILDREN.format(container_id=encode_object_id(CLIENTS_CONTAINER)))
        names = extract_names(await self._get_json(url))
        _LOGGER.info(f"Found {len(names)} portal interface clients")
        return names

    async def read_value(self, value_path: str = DEFAULT_VALUE_PATH) -> ValueReading:
        """Read a single value object.

        Args:
            value_path: Portal path of the value, unencoded

        Returns:
            The ``Value`` field when present, otherwise the bare body
        """
        url = self._url(URL_VALUE.format(value_id=encode_object_id(value_path)))
        data = await self._get_json(url)
        value = data["Value"] if isinstance(data, dict) and "Value" in data else data
        if _LOGGER.isEnabledFor(logging.DEBUG):
            _LOGGER.debug("Value %s = %r", value_path, value)
        return ValueReading(value=value, raw=data)

    async def read_trend_samples(self, trend_id: str, order_by: str = ORDER_ASCENDING) -> List[Sample]:
        """Fetch the samples of one trend stream.

        Args:
            trend_id: Portal path of the trend log, unencoded
            order_by: Sort directive passed to the portal

        Returns:
            Parsed samples in portal order

        Raises:
            ValueError: If trend_id is empty
            UpstreamError: On a non-2xx response
            MalformedUpstreamDataError: If the body is not an array of samples
        """
        if not trend_id:
            raise ValueError("Missing required parameter: trend_id")

        query = f"trendId={encode_query_value(trend_id)}&orderBy={encode_query_value(order_by)}"
        data = await self._get_json(self._url(URL_TREND_SAMPLES, query))
        samples = parse_trend_samples(data, trend_id)
        if _LOGGER.isEnabledFor(logging.DEBUG):
            _LOGGER.debug("Fetched %d samples for %s", len(samples), trend_id.rsplit("/", 1)[-1])
        return samples

    def request_summary(self) -> Dict[str, Any]:
        """Describe client state for diagnostics, without secrets."""
        credential = self._tokens.credential
        return {
            "api_base": self._settings.api_base,
            "token_cached": credential is not None,
            "token_valid": self._tokens.is_valid(),
            "issued_at": credential.issued_at if credential else None,
        }
