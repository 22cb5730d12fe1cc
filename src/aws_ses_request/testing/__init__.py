#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
"""Shared utilities for testing code that sends SES requests."""

from .mockhttp import MockHTTPClient, MockHTTPClientError, MockTransportError

__all__ = (
    "MockHTTPClient",
    "MockHTTPClientError",
    "MockTransportError",
)
