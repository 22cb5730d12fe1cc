# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""Classification of SES responses into a success or a structured error."""

import logging
from dataclasses import dataclass
from xml.etree import ElementTree as ET

from .exceptions import (
    MalformedResponseError,
    SESError,
    ServiceError,
    TransportError,
)
from .interfaces.http import HTTPResponse

logger = logging.getLogger(__name__)

SUCCESS_STATUS_CODES: frozenset[int] = frozenset({200, 201, 202, 204})


@dataclass(kw_only=True, frozen=True)
class Success:
    """A completed exchange that did not carry an SES error document."""

    status_code: int
    body: ET.Element | None
    """Root element of the parsed XML body, or None if the body was empty."""

    @property
    def request_id(self) -> str | None:
        """The ``ResponseMetadata/RequestId`` value, if present."""
        if self.body is None:
            return None
        metadata = _child(self.body, "ResponseMetadata")
        if metadata is None:
            return None
        return _child_text(metadata, "RequestId")

    @property
    def result(self) -> ET.Element | None:
        """The ``<Action>Result`` element of the response, if present."""
        if self.body is None:
            return None
        for child in self.body:
            if _local_name(child.tag).endswith("Result"):
                return child
        return None


type SESResult = Success | TransportError | ServiceError | MalformedResponseError


class ResponseInterpreter:
    """Turns the raw outcome of a dispatch into an :py:data:`SESResult`."""

    def interpret(self, response: HTTPResponse | TransportError) -> SESResult:
        """Classify a response.

        Transport errors pass through untouched. Otherwise the body is parsed as
        XML. A non-success status whose document has an ``Error`` element becomes a
        :py:class:`ServiceError`; any other parsed document is a
        :py:class:`Success`. A body that cannot be parsed becomes a
        :py:class:`MalformedResponseError`.
        """
        if isinstance(response, TransportError):
            return response

        status = response.status
        if not response.body.strip() and status in SUCCESS_STATUS_CODES:
            return Success(status_code=status, body=None)

        try:
            root = ET.fromstring(response.body)
        except ET.ParseError as e:
            logger.debug("Unable to parse HTTP %s response body: %s", status, e)
            return MalformedResponseError(
                f"Response body is not a valid XML document: {e}",
                status_code=status,
                body=response.body,
            )

        error = _child(root, "Error")
        if status not in SUCCESS_STATUS_CODES and error is not None:
            service_error = ServiceError(
                _child_text(error, "Message") or "",
                status_code=status,
                type=_child_text(error, "Type") or "",
                code=_child_text(error, "Code") or "",
                request_id=_child_text(root, "RequestId") or "",
            )
            logger.debug(
                "SES returned %s (%s) for request %s",
                service_error.code,
                status,
                service_error.request_id,
            )
            return service_error

        return Success(status_code=status, body=root)


def raise_for_error(result: SESResult) -> Success:
    """Return ``result`` if it is a :py:class:`Success`, otherwise raise it."""
    if isinstance(result, SESError):
        raise result
    return result


def _local_name(tag: str) -> str:
    # ElementTree spells namespaced tags as "{uri}local".
    return tag.rpartition("}")[2]


def _child(element: ET.Element, name: str) -> ET.Element | None:
    for child in element:
        if _local_name(child.tag) == name:
            return child
    return None


def _child_text(element: ET.Element, name: str) -> str | None:
    child = _child(element, name)
    if child is None:
        return None
    return (child.text or "").strip()
