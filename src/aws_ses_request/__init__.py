# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""aws-ses-request signs Amazon SES Query API requests with AWS Signature Version 4,
sends them, and turns the responses into success or structured error values."""

from __future__ import annotations

from ._http import URI, Field, Fields, HTTPRequest, HTTPResponse
from ._identity import AWSCredentialIdentity
from .client import SESClient
from .config import SESClientConfig
from .dispatch import RequestDispatcher
from .exceptions import (
    ErrorKind,
    MalformedResponseError,
    ServiceError,
    SESError,
    TransportError,
)
from .interfaces.http import HTTPRequestConfiguration
from .parameters import Multiple, RequestParameters, Single
from .responses import ResponseInterpreter, SESResult, Success, raise_for_error
from .signers import SESSigV4Signer, SigningContext

__license__ = "Apache-2.0"
__version__ = "0.1.0"

__all__ = (
    "URI",
    "AWSCredentialIdentity",
    "ErrorKind",
    "Field",
    "Fields",
    "HTTPRequest",
    "HTTPRequestConfiguration",
    "HTTPResponse",
    "MalformedResponseError",
    "Multiple",
    "RequestDispatcher",
    "RequestParameters",
    "ResponseInterpreter",
    "SESClient",
    "SESClientConfig",
    "SESError",
    "SESResult",
    "SESSigV4Signer",
    "ServiceError",
    "SigningContext",
    "Single",
    "Success",
    "TransportError",
    "raise_for_error",
)
