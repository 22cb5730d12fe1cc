# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

import ssl

import pytest
from aws_ses_request import SESClientConfig


def test_defaults() -> None:
    config = SESClientConfig()
    assert config.region == "us-east-1"
    assert config.endpoint_host == "email.us-east-1.amazonaws.com"
    assert config.verify_peer is True
    assert config.verify_host is True
    assert config.follow_redirects is True
    assert config.timeout is None


def test_endpoint_host_follows_region() -> None:
    assert (
        SESClientConfig(region="eu-central-1").endpoint_host
        == "email.eu-central-1.amazonaws.com"
    )


def test_explicit_host_wins() -> None:
    config = SESClientConfig(region="eu-central-1", host="localhost")
    assert config.endpoint_host == "localhost"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"region": ""},
        {"timeout": 0},
        {"timeout": -1.5},
    ],
)
def test_invalid_values(kwargs: dict[str, object]) -> None:
    with pytest.raises(ValueError):
        SESClientConfig(**kwargs)  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "verify_peer,verify_host,check_hostname,verify_mode",
    [
        (True, True, True, ssl.CERT_REQUIRED),
        (True, False, False, ssl.CERT_REQUIRED),
        (False, True, False, ssl.CERT_NONE),
        (False, False, False, ssl.CERT_NONE),
    ],
)
def test_ssl_context(
    verify_peer: bool,
    verify_host: bool,
    check_hostname: bool,
    verify_mode: ssl.VerifyMode,
) -> None:
    config = SESClientConfig(verify_peer=verify_peer, verify_host=verify_host)
    context = config.ssl_context()
    assert context.check_hostname is check_hostname
    assert context.verify_mode == verify_mode
