#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from types import TracebackType
from typing import Any, ClassVar

import aiohttp
from yarl import URL

from .._http import Field, Fields, HTTPResponse
from ..config import SESClientConfig
from ..interfaces.http import HTTPClient, HTTPRequest, HTTPRequestConfiguration


class AIOHTTPClient(HTTPClient):
    """Implementation of :py:class:`.interfaces.http.HTTPClient` using aiohttp."""

    TRANSPORT_EXCEPTIONS: ClassVar[tuple[type[BaseException], ...]] = (
        aiohttp.ClientError,
        TimeoutError,
    )

    def __init__(
        self,
        *,
        client_config: SESClientConfig | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        """
        :param client_config: Configuration that applies to all requests made with this
            client.
        :param session: A session owned by the caller and reused across calls. When
            omitted the client opens its own on first use and closes it in
            :py:meth:`close`.
        """
        self._config = client_config or SESClientConfig()
        self._session = session
        self._owns_session = session is None
        if self._config.verify_peer and self._config.verify_host:
            self._ssl: Any = True
        else:
            self._ssl = self._config.ssl_context()

    async def send(
        self,
        request: HTTPRequest,
        *,
        request_config: HTTPRequestConfiguration | None = None,
    ) -> HTTPResponse:
        """Send HTTP request using aiohttp client.

        :param request: The request including destination URI, fields, payload.
        :param request_config: Configuration specific to this request.
        """
        request_config = request_config or HTTPRequestConfiguration()
        timeout = request_config.timeout
        if timeout is None:
            timeout = self._config.timeout

        # The signer has already percent-encoded the query; stop yarl re-quoting it.
        async with self._get_session().request(
            method=request.method,
            url=URL(request.destination.build(), encoded=True),
            headers=[pair for fld in request.fields for pair in fld.as_tuples()],
            data=request.body,
            allow_redirects=self._config.follow_redirects,
            ssl=self._ssl,
            timeout=aiohttp.ClientTimeout(total=timeout),
        ) as resp:
            return await self._marshal_response(resp)

    def is_timeout_error(self, error: BaseException) -> bool:
        return isinstance(error, TimeoutError)

    async def close(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "AIOHTTPClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.close()

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession()
        return self._session

    async def _marshal_response(
        self, aiohttp_resp: aiohttp.ClientResponse
    ) -> HTTPResponse:
        """Convert a ``aiohttp.ClientResponse`` to an ``HTTPResponse``."""
        headers = Fields()
        for header_name, header_val in aiohttp_resp.headers.items():
            if header_name in headers:
                headers[header_name].add(header_val)
            else:
                headers.set_field(Field(name=header_name, values=[header_val]))

        return HTTPResponse(
            status=aiohttp_resp.status,
            fields=headers,
            body=await aiohttp_resp.read(),
            reason=aiohttp_resp.reason,
        )
