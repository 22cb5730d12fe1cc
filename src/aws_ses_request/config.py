# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import ssl
from dataclasses import dataclass

DEFAULT_REGION = "us-east-1"
DEFAULT_USER_AGENT = "aws-ses-request/python"


@dataclass(kw_only=True, frozen=True)
class SESClientConfig:
    """Client-level configuration applied to every request a client sends.

    :param region: The AWS region requests are scoped to.
    :param host: The SES endpoint host. Defaults to ``email.<region>.amazonaws.com``.
    :param verify_peer: Whether the server certificate must chain to a trusted root.
    :param verify_host: Whether the certificate must match ``host``.
    :param follow_redirects: Whether HTTP redirects are followed.
    :param user_agent: Value of the ``User-Agent`` header. ``None`` omits it.
    :param timeout: Default limit, in seconds, for a whole exchange. ``None``
        disables the limit.
    """

    region: str = DEFAULT_REGION
    host: str | None = None
    verify_peer: bool = True
    verify_host: bool = True
    follow_redirects: bool = True
    user_agent: str | None = DEFAULT_USER_AGENT
    timeout: float | None = None

    def __post_init__(self) -> None:
        if not self.region:
            raise ValueError("region must be a non-empty string.")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}.")

    @property
    def endpoint_host(self) -> str:
        return self.host or f"email.{self.region}.amazonaws.com"

    def ssl_context(self) -> ssl.SSLContext:
        """Build the TLS context matching ``verify_peer`` and ``verify_host``."""
        context = ssl.create_default_context()
        if not self.verify_host or not self.verify_peer:
            context.check_hostname = False
        if not self.verify_peer:
            context.verify_mode = ssl.CERT_NONE
        return context
