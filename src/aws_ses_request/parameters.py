# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""Collection of the Query API parameters that make up an SES request."""

from collections.abc import Iterator, MutableMapping
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Single:
    """A parameter holding exactly one value."""

    value: str

    def as_list(self) -> list[str]:
        return [self.value]


@dataclass(frozen=True)
class Multiple:
    """A parameter holding an ordered list of values.

    Encoded as ``Key.1``, ``Key.2``, ... following the AWS Query list convention.
    """

    values: list[str] = field(default_factory=list)

    def as_list(self) -> list[str]:
        return list(self.values)

    def appended(self, value: str) -> "Multiple":
        return Multiple([*self.values, value])


type ParameterValue = Single | Multiple


class RequestParameters(MutableMapping[str, ParameterValue]):
    """Ordered mapping of parameter names to :py:class:`Single` or
    :py:class:`Multiple` values.

    Instances belong to a single request and must not be shared between requests
    that are in flight at the same time.
    """

    def __init__(self, initial: dict[str, str] | None = None):
        self._parameters: dict[str, ParameterValue] = {}
        for key, value in (initial or {}).items():
            self.set_parameter(key, value)

    def set_parameter(self, key: str, value: str, replace: bool = True) -> None:
        """Set a request parameter.

        :param key: The parameter name.
        :param value: The parameter value. Empty strings are kept as-is.
        :param replace: Overwrite an existing value when ``True``. When ``False`` and
            the key already holds a value, ``value`` is appended and the parameter
            becomes :py:class:`Multiple`.
        """
        current = self._parameters.get(key)
        if replace or current is None:
            self._parameters[key] = Single(value)
        elif isinstance(current, Multiple):
            self._parameters[key] = current.appended(value)
        else:
            self._parameters[key] = Multiple([current.value, value])

    def add_parameter(self, key: str, value: str) -> None:
        """Append ``value`` to a list parameter, creating it if needed."""
        current = self._parameters.get(key)
        if current is None:
            self._parameters[key] = Multiple([value])
        else:
            self._parameters[key] = Multiple(current.as_list()).appended(value)

    @property
    def action(self) -> str | None:
        """The ``Action`` parameter, if one has been set."""
        match self._parameters.get("Action"):
            case Single(value=value):
                return value
            case _:
                return None

    def flattened(self) -> list[tuple[str, str]]:
        """Expand every parameter into ``(name, value)`` pairs ready for encoding.

        :py:class:`Multiple` values become indexed names starting at 1. Pairs are
        returned in insertion order; sorting is left to the signer.
        """
        pairs: list[tuple[str, str]] = []
        for key, param in self._parameters.items():
            match param:
                case Single(value=value):
                    pairs.append((key, value))
                case Multiple(values=values):
                    pairs.extend(
                        (f"{key}.{index}", value)
                        for index, value in enumerate(values, start=1)
                    )
        return pairs

    def __getitem__(self, key: str) -> ParameterValue:
        return self._parameters[key]

    def __setitem__(self, key: str, value: ParameterValue) -> None:
        if not isinstance(value, Single | Multiple):
            raise TypeError(
                f"Expected Single or Multiple for parameter {key!r}, got {type(value)}."
            )
        self._parameters[key] = value

    def __delitem__(self, key: str) -> None:
        del self._parameters[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._parameters)

    def __len__(self) -> int:
        return len(self._parameters)

    def __repr__(self) -> str:
        return f"RequestParameters({self._parameters!r})"
