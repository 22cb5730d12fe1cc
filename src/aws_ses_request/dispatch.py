# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import logging

from .exceptions import TransportError
from .interfaces.http import (
    HTTPClient,
    HTTPRequest,
    HTTPRequestConfiguration,
    HTTPResponse,
)

logger = logging.getLogger(__name__)


class RequestDispatcher:
    """Sends signed requests and reports transport failures as values."""

    def __init__(self, http_client: HTTPClient) -> None:
        self._http_client = http_client

    async def dispatch(
        self,
        request: HTTPRequest,
        *,
        request_config: HTTPRequestConfiguration | None = None,
    ) -> HTTPResponse | TransportError:
        """Issue exactly one HTTP call for ``request``.

        Any status code the server answers with is returned as a response. Failures
        listed in the client's ``TRANSPORT_EXCEPTIONS`` are returned as a
        :py:class:`TransportError` instead of being raised. Nothing is retried.

        :param request: A signed request.
        :param request_config: Per-call settings such as the timeout.
        """
        host = request.destination.host
        logger.debug("Sending %s request to %s", request.method, host)
        try:
            response = await self._http_client.send(
                request, request_config=request_config
            )
        except self._http_client.TRANSPORT_EXCEPTIONS as e:
            logger.warning(
                "Transport failure for %s %s: %r",
                request.method,
                host,
                e,
            )
            return TransportError(
                str(e) or type(e).__name__,
                code=type(e).__name__,
                is_timeout_error=self._http_client.is_timeout_error(e),
            )
        logger.debug("Received HTTP %s from %s", response.status, host)
        return response
