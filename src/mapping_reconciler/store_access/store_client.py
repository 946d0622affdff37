"""Document store client protocol and HTTP implementation."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from types import TracebackType
from typing import Any, Protocol
from urllib.parse import quote

import httpx
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential
from tenacity.wait import wait_base

from mapping_reconciler.configuration.runtime_settings import StoreSettings

_STORE_CLIENT_LOGGER = logging.getLogger("mapping_reconciler.store.client")
_STORE_CLIENT_LOGGER.addHandler(logging.NullHandler())


class TransportFailure(Exception):
    """Raised when a document store request fails for a reason other than an ignored status."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DocumentStoreClient(Protocol):
    """Protocol implemented by both real and fake document store clients."""

    def get_mapping(self, index: str, *, ignore: Sequence[int] = ()) -> Mapping[str, Any]: ...

    def put_mapping(
        self, index: str, doc_type: str, body: Mapping[str, Any]
    ) -> Mapping[str, Any]: ...


class HttpDocumentStoreClient:
    """Client for an Elasticsearch-compatible REST endpoint.

    Connection-level failures are retried up to ``settings.max_attempts`` times.
    HTTP error responses are not retried; a status listed in ``ignore`` is
    returned as a body carrying ``"status"`` instead of raising.
    """

    def __init__(
        self,
        settings: StoreSettings,
        http_client: httpx.Client | None = None,
        *,
        retry_wait: wait_base | None = None,
    ) -> None:
        self._settings = settings
        self._owns_http_client = http_client is None
        self._http = http_client or self._create_http_client()
        self._retry_wait = retry_wait or wait_exponential(multiplier=0.5, max=8)

    def get_mapping(self, index: str, *, ignore: Sequence[int] = ()) -> Mapping[str, Any]:
        return self._request("GET", f"/{_quote(index)}/_mapping", ignore=ignore)

    def put_mapping(
        self, index: str, doc_type: str, body: Mapping[str, Any]
    ) -> Mapping[str, Any]:
        return self._request(
            "PUT",
            f"/{_quote(index)}/_mapping/{_quote(doc_type)}",
            json=dict(body),
        )

    def close(self) -> None:
        if self._owns_http_client:
            self._http.close()

    def __enter__(self) -> HttpDocumentStoreClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def _request(
        self,
        method: str,
        path: str,
        *,
        ignore: Sequence[int] = (),
        json: Mapping[str, Any] | None = None,
    ) -> Mapping[str, Any]:
        url = f"{self._settings.url}{path}"
        try:
            response = self._send_with_retries(method, url, json=json)
        except httpx.TransportError as exc:
            raise TransportFailure(f"{method} {url} failed: {exc}") from exc

        if response.status_code in ignore:
            _STORE_CLIENT_LOGGER.debug("%s %s -> %s (ignored)", method, url, response.status_code)
            body = _decode_body(response, method, url, strict=False)
            return {**body, "status": response.status_code}

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise TransportFailure(
                f"{method} {url} returned HTTP {response.status_code}: {response.text}",
                status_code=response.status_code,
            ) from exc
        return _decode_body(response, method, url, strict=True)

    def _send_with_retries(
        self, method: str, url: str, *, json: Mapping[str, Any] | None
    ) -> httpx.Response:
        retrying = Retrying(
            stop=stop_after_attempt(self._settings.max_attempts),
            wait=self._retry_wait,
            retry=retry_if_exception_type(httpx.TransportError),
            reraise=True,
        )
        for attempt in retrying:
            with attempt:
                _STORE_CLIENT_LOGGER.debug(
                    "%s %s (attempt %d)", method, url, attempt.retry_state.attempt_number
                )
                response = self._http.request(method, url, json=json)
        return response

    def _create_http_client(self) -> httpx.Client:
        auth = None
        if self._settings.username:
            auth = httpx.BasicAuth(self._settings.username, self._settings.password or "")
        return httpx.Client(
            timeout=self._settings.timeout_seconds,
            verify=self._settings.verify_tls,
            auth=auth,
            headers={"Accept": "application/json"},
        )


def _quote(segment: str) -> str:
    return quote(segment, safe="")


def _decode_body(
    response: httpx.Response, method: str, url: str, *, strict: bool
) -> dict[str, Any]:
    if not response.content:
        return {}
    try:
        decoded = response.json()
    except ValueError as exc:
        if not strict:
            return {}
        raise TransportFailure(
            f"{method} {url} returned a non-JSON body.", status_code=response.status_code
        ) from exc
    if not isinstance(decoded, Mapping):
        if not strict:
            return {}
        raise TransportFailure(
            f"{method} {url} returned a non-object body.", status_code=response.status_code
        )
    return dict(decoded)
