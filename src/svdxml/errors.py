# Copyright (c) 2023 Nordic Semiconductor ASA
# SPDX-License-Identifier: Apache-2.0

from typing import Any, Optional, Sequence

from lxml import etree as ET


def element_location(element: Optional[ET._Element]) -> str:
    """Get a human readable location of an element in its document, e.g. /device/peripherals."""
    if element is None:
        return "<unknown>"
    try:
        return element.getroottree().getpath(element)
    except (TypeError, ValueError):
        return f"<{element.tag}>"


class SvdError(Exception):
    """Base class for errors raised by the library."""

    ...


class SvdParseError(SvdError):
    """Raised when an SVD document could not be read as XML."""

    ...


class SvdMissingElementError(SvdError, LookupError):
    """Raised when a required child element is absent."""

    def __init__(self, name: str, parent: Optional[ET._Element]) -> None:
        self.name: str = name
        self.location: str = element_location(parent)
        super().__init__(f"{self.location} is missing required element '{name}'")


class SvdMissingAttributeError(SvdError, LookupError):
    """Raised when a required attribute is absent."""

    def __init__(self, name: str, element: Optional[ET._Element]) -> None:
        self.name: str = name
        self.location: str = element_location(element)
        super().__init__(f"{self.location} is missing required attribute '{name}'")


class SvdMalformedValueError(SvdError, ValueError):
    """Raised when the text of an element could not be converted to the expected type."""

    def __init__(
        self,
        text: Optional[str],
        expected: str,
        element: Optional[ET._Element] = None,
    ) -> None:
        self.text: Optional[str] = text
        self.expected: str = expected
        self.location: Optional[str] = (
            element_location(element) if element is not None else None
        )
        location_str = f" in {self.location}" if self.location is not None else ""
        super().__init__(f"Invalid {expected} value {text!r}{location_str}")


class SvdEncodeError(SvdError, ValueError):
    """Raised when an entity holds a value that cannot be written to an SVD document."""

    def __init__(self, subject: str, explanation: str) -> None:
        self.subject: str = subject
        super().__init__(f"Unable to encode {subject}: {explanation}")


class SvdPathError(SvdError):
    """Raised when trying to access a nonexistent SVD element by name."""

    def __init__(self, path: Sequence[str], source: Any, explanation: str = "") -> None:
        formatted_explanation = "" if not explanation else f" ({explanation})"
        path_str = ".".join(path)
        message = (
            f"{source!s} does not contain an element '{path_str}'{formatted_explanation}"
        )

        super().__init__(message)


class SvdKeyError(SvdPathError, KeyError):
    """Raised when given an invalid child element name."""

    ...
