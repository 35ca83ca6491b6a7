"""
HTTP access to the remote API.

:py:class:`Client` performs the authenticated requests and hands back decoded
JSON; it neither retries nor interprets the payloads.
"""
import json
import logging
import typing

import httpx

from .config import TrelloConfig, get_config
from .exceptions import (
    AuthenticationError,
    InvalidPayloadError,
    RateLimitError,
    ResourceNotFoundError,
    TransportError,
)

logger = logging.getLogger(__name__)

_STATUS_ERRORS: typing.Mapping[int, typing.Type[TransportError]] = {
    401: AuthenticationError,
    404: ResourceNotFoundError,
    429: RateLimitError,
}

JSONValue = typing.Union[
    bool, int, float, str, typing.Sequence[typing.Any], typing.Mapping[str, typing.Any], None
]


def _stringify(value: typing.Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _encode_options(
    options: typing.Optional[typing.Mapping[str, typing.Any]],
) -> typing.Dict[str, str]:
    if not options:
        return {}
    return {k: _stringify(v) for k, v in options.items() if v is not None}


class Client:
    """Client for the Trello REST API.

    Authentication is carried in the query string of every request,
    as the remote API expects.
    """

    config: TrelloConfig
    _http: httpx.Client

    def __init__(
        self,
        config: typing.Optional[TrelloConfig] = None,
        transport: typing.Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.config = config if config is not None else get_config()
        self._http = httpx.Client(
            base_url=self.config.base_url,
            timeout=self.config.timeout_seconds,
            headers={"User-Agent": self.config.user_agent, "Accept": "application/json"},
            transport=transport,
        )

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def get(
        self, path: str, options: typing.Optional[typing.Mapping[str, typing.Any]] = None
    ) -> JSONValue:
        return self.request("GET", path, params=options)

    def put(
        self, path: str, body: typing.Optional[typing.Mapping[str, typing.Any]] = None
    ) -> JSONValue:
        return self.request("PUT", path, body=body)

    def post(
        self, path: str, body: typing.Optional[typing.Mapping[str, typing.Any]] = None
    ) -> JSONValue:
        return self.request("POST", path, body=body)

    def delete(self, path: str) -> JSONValue:
        return self.request("DELETE", path)

    def request(
        self,
        method: str,
        path: str,
        params: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        body: typing.Optional[typing.Mapping[str, typing.Any]] = None,
    ) -> JSONValue:
        query = dict(self.config.auth_params)
        query.update(_encode_options(params))
        logger.debug(f"{method} {path} {sorted(_encode_options(params).items())}")
        try:
            response = self._http.request(
                method,
                path,
                params=query,
                json=dict(body) if body is not None else None,
            )
        except httpx.RequestError as e:
            raise TransportError(method, path) from e

        if response.is_error:
            error_class = _STATUS_ERRORS.get(response.status_code, TransportError)
            logger.debug(f"{method} {path} returned {response.status_code}")
            raise error_class(method, path, response.status_code, response.text)

        if not response.content:
            return None
        try:
            return response.json()
        except json.JSONDecodeError as e:
            raise InvalidPayloadError(
                f"{method} {path} returned a body that is not JSON: {response.text[:200]!r}"
            ) from e


_default_client: typing.Optional[Client] = None


def get_client() -> Client:
    """
    Returns the client used when none is given explicitly, creating it from
    the global configuration on first use.
    """
    global _default_client

    if _default_client is None:
        _default_client = Client()
    return _default_client


def set_client(client: typing.Optional[Client]) -> None:
    global _default_client

    _default_client = client
