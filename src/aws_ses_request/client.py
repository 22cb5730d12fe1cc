# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import datetime
import logging
from types import TracebackType

import aiohttp

from ._identity import AWSCredentialIdentity
from .aio.aiohttp import AIOHTTPClient
from .config import SESClientConfig
from .dispatch import RequestDispatcher
from .exceptions import MissingExpectedParameterException
from .interfaces.http import HTTPClient, HTTPRequestConfiguration
from .parameters import RequestParameters
from .responses import ResponseInterpreter, SESResult
from .signers import SESSigV4Signer

logger = logging.getLogger(__name__)


class SESClient:
    """Signs, sends and interprets SES Query API requests.

    Each call to :py:meth:`send` performs exactly one HTTP exchange and always
    returns an :py:data:`~aws_ses_request.responses.SESResult`; expected failures are
    never raised.
    """

    def __init__(
        self,
        *,
        identity: AWSCredentialIdentity,
        config: SESClientConfig | None = None,
        http_client: HTTPClient | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        """
        :param identity: Credentials used to sign every request.
        :param config: Client-level configuration. Defaults to ``us-east-1``.
        :param http_client: Transport to send requests with. Defaults to an
            :py:class:`AIOHTTPClient` built from ``config``.
        :param session: An aiohttp session to reuse when the default transport is
            used. The caller keeps ownership of it.
        """
        self._identity = identity
        self._config = config or SESClientConfig()
        if http_client is None:
            http_client = AIOHTTPClient(client_config=self._config, session=session)
            self._owned_client: AIOHTTPClient | None = http_client
        else:
            self._owned_client = None
        self._signer = SESSigV4Signer()
        self._dispatcher = RequestDispatcher(http_client)
        self._interpreter = ResponseInterpreter()

    @property
    def config(self) -> SESClientConfig:
        return self._config

    async def send(
        self,
        parameters: RequestParameters,
        *,
        method: str = "POST",
        request_config: HTTPRequestConfiguration | None = None,
        date: datetime.datetime | None = None,
    ) -> SESResult:
        """Sign and send one request.

        :param parameters: Query API parameters. ``Action`` is required.
        :param method: ``GET``, ``POST`` or ``DELETE``.
        :param request_config: Per-call settings such as the timeout.
        :param date: Signing time. Defaults to the current UTC time.
        :raises MissingExpectedParameterException: If ``Action`` is not set.
        :raises UnsupportedMethodException: If ``method`` is not supported.
        """
        action = parameters.action
        if not action:
            raise MissingExpectedParameterException(
                "The Action parameter must be set before a request can be sent."
            )
        request = self._signer.sign(
            method=method,
            parameters=parameters,
            identity=self._identity,
            region=self._config.region,
            host=self._config.endpoint_host,
            date=date,
            user_agent=self._config.user_agent,
        )
        response = await self._dispatcher.dispatch(
            request, request_config=request_config
        )
        result = self._interpreter.interpret(response)
        logger.debug("%s finished with %s", action, type(result).__name__)
        return result

    async def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owned_client is not None:
            await self._owned_client.close()

    async def __aenter__(self) -> "SESClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.close()
