#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0

import ssl

import aiohttp
import pytest
from aws_ses_request import (
    URI,
    AWSCredentialIdentity,
    ErrorKind,
    Fields,
    HTTPRequest,
    RequestDispatcher,
    RequestParameters,
    SESClient,
    SESClientConfig,
    TransportError,
)
from aws_ses_request.aio.aiohttp import AIOHTTPClient

# Nothing listens on port 1, so connecting fails immediately.
UNREACHABLE_HOST = "127.0.0.1:1"


class TestAIOHTTPTimeoutErrorHandling:
    """Test timeout error handling for AIOHTTPClient."""

    @pytest.fixture
    def client(self) -> AIOHTTPClient:
        return AIOHTTPClient()

    async def test_timeout_error_detection(self, client: AIOHTTPClient) -> None:
        assert client.is_timeout_error(TimeoutError("Connection timed out"))

    async def test_non_timeout_error_detection(self, client: AIOHTTPClient) -> None:
        assert not client.is_timeout_error(aiohttp.ClientConnectionError())

    def test_transport_exceptions(self, client: AIOHTTPClient) -> None:
        assert issubclass(
            aiohttp.ClientConnectorError, client.TRANSPORT_EXCEPTIONS
        )
        assert TimeoutError in client.TRANSPORT_EXCEPTIONS


def test_ssl_verification_defaults_on() -> None:
    client = AIOHTTPClient()
    assert client._ssl is True  # type: ignore[reportPrivateUsage]


def test_ssl_verification_can_be_relaxed() -> None:
    client = AIOHTTPClient(
        client_config=SESClientConfig(verify_peer=False, verify_host=False)
    )
    context = client._ssl  # type: ignore[reportPrivateUsage]
    assert isinstance(context, ssl.SSLContext)
    assert context.verify_mode == ssl.CERT_NONE
    assert context.check_hostname is False


async def test_unreachable_host_is_transport_error() -> None:
    request = HTTPRequest(
        method="POST",
        destination=URI(host="127.0.0.1", port=1, path="/"),
        fields=Fields(),
        body=b"Action=SendEmail",
    )
    async with AIOHTTPClient() as http_client:
        result = await RequestDispatcher(http_client).dispatch(request)

    assert isinstance(result, TransportError)
    assert result.kind is ErrorKind.TRANSPORT
    assert result.is_timeout_error is False


async def test_client_reports_unreachable_host() -> None:
    identity = AWSCredentialIdentity(
        access_key_id="AKIDEXAMPLE",
        secret_access_key="wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY",
    )
    params = RequestParameters({"Action": "SendEmail"})
    config = SESClientConfig(host=UNREACHABLE_HOST, timeout=10)

    async with SESClient(identity=identity, config=config) as client:
        result = await client.send(params)

    assert isinstance(result, TransportError)
    assert result.kind is ErrorKind.TRANSPORT


async def test_supplied_session_is_not_closed() -> None:
    async with aiohttp.ClientSession() as session:
        client = AIOHTTPClient(session=session)
        await client.close()
        assert not session.closed
