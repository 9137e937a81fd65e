# Copyright (c) 2023 Nordic Semiconductor ASA
# SPDX-License-Identifier: Apache-2.0

"""
Small reusable building blocks used by every entity to read itself from an XML element and
write itself back.

The parse side follows one rule: a field that is absent is either an error (required) or None
(optional), and a field that is present but malformed is always an error. Every optional field
goes through optional() so that those two cases never get mixed up.
"""

from __future__ import annotations

import re
import typing
from typing import Callable, Iterator, Optional, Type, TypeVar

from lxml import etree as ET

from .enums import CaseInsensitiveStrEnum
from .errors import (
    SvdEncodeError,
    SvdMalformedValueError,
    SvdMissingAttributeError,
    SvdMissingElementError,
)

T = TypeVar("T")
E = TypeVar("E", bound=CaseInsensitiveStrEnum)

# Element level parser, converting a child element to a value.
SubParser = Callable[[ET._Element], T]

_DEC_PATTERN = re.compile(r"[0-9]+")
_HEX_PATTERN = re.compile(r"0[xX][0-9a-fA-F]+")
_BIN_PATTERN = re.compile(r"#[01]+")


def as_unsigned_integer(text: str, element: Optional[ET._Element] = None) -> int:
    """
    Convert a string representation of an integer following the SVD format to its corresponding
    integer representation.

    Decimal, 0x-prefixed hexadecimal and #-prefixed binary literals are accepted.

    :param text: String representation of the integer.
    :param element: Element the text was read from, used for error reporting.

    :raises SvdMalformedValueError: If the text is not a non-negative integer literal.

    :return: Decoded integer.
    """
    number = text.strip()

    if _HEX_PATTERN.fullmatch(number):
        return int(number[2:], base=16)
    if _BIN_PATTERN.fullmatch(number):
        return int(number[1:], base=2)
    if _DEC_PATTERN.fullmatch(number):
        return int(number, base=10)

    raise SvdMalformedValueError(text, "unsigned integer", element)


def as_bool(text: str, element: Optional[ET._Element] = None) -> bool:
    """
    Convert a string representation of a boolean following the SVD format to its corresponding
    boolean representation.
    """
    value = text.strip()
    if value in ("true", "1"):
        return True
    if value in ("false", "0"):
        return False
    raise SvdMalformedValueError(text, "boolean", element)


def find_child(element: ET._Element, name: str) -> Optional[ET._Element]:
    """Get the first child element with the given tag, if any."""
    for child in iter_children(element, name):
        return child
    return None


def iter_children(element: Optional[ET._Element], *tags: str) -> Iterator[ET._Element]:
    """
    Iterate over the element children of an lxml element, optionally filtered by tag.
    Comments and processing instructions are skipped.
    If the element is None, an empty iterator is returned.
    """
    if element is None:
        return iter(())

    children = element.iterchildren(*tags) if tags else element.iterchildren()
    it = (c for c in children if isinstance(c.tag, str))
    return typing.cast(Iterator[ET._Element], it)


def get_text(element: ET._Element) -> str:
    """Get the trimmed text of an element. An element without text yields an empty string."""
    return (element.text or "").strip()


def get_uint(element: ET._Element) -> int:
    """Get the text of an element as an unsigned integer."""
    return as_unsigned_integer(element.text or "", element)


def get_bool(element: ET._Element) -> bool:
    """Get the text of an element as a boolean."""
    return as_bool(element.text or "", element)


def as_enum(enum_cls: Type[E], text: str, element: Optional[ET._Element] = None) -> E:
    """Convert a string to a member of enum_cls, ignoring case."""
    value = text.strip()
    try:
        return enum_cls(value)
    except ValueError as e:
        raise SvdMalformedValueError(text, enum_cls.__name__, element) from e


def get_enum(enum_cls: Type[E]) -> SubParser[E]:
    """Create an element parser converting the element text to a member of enum_cls."""

    def parse_enum(element: ET._Element) -> E:
        return as_enum(enum_cls, element.text or "", element)

    return parse_enum


def required_child_element(element: ET._Element, name: str) -> ET._Element:
    """
    Get the child element with the given name, for recursive parsing.

    :raises SvdMissingElementError: If the element has no such child.
    """
    child = find_child(element, name)
    if child is None:
        raise SvdMissingElementError(name, element)
    return child


def required_text(element: ET._Element, name: str) -> str:
    """
    Get the trimmed text of the child element with the given name.

    :raises SvdMissingElementError: If the element has no such child.
    """
    return get_text(required_child_element(element, name))


def required(element: ET._Element, name: str, sub_parser: SubParser[T]) -> T:
    """
    Parse the child element with the given name using sub_parser.

    :raises SvdMissingElementError: If the element has no such child.
    """
    return sub_parser(required_child_element(element, name))


def optional(element: ET._Element, name: str, sub_parser: SubParser[T]) -> Optional[T]:
    """
    Parse the child element with the given name using sub_parser, if the child exists.
    Errors raised by sub_parser are propagated as is.

    :return: The parsed value, or None if the element has no such child.
    """
    child = find_child(element, name)
    if child is None:
        return None
    return sub_parser(child)


def required_attribute(element: ET._Element, name: str) -> str:
    """
    Get the value of an attribute.

    :raises SvdMissingAttributeError: If the element does not have the attribute.
    """
    value = element.get(name)
    if value is None:
        raise SvdMissingAttributeError(name, element)
    return value


def optional_attribute(element: ET._Element, name: str) -> Optional[str]:
    """Get the value of an attribute, or None if the element does not have it."""
    return element.get(name)


def format_uint(value: int) -> str:
    """Format an unsigned integer in decimal."""
    _check_uint(value)
    return str(value)


def format_hex(value: int) -> str:
    """Format an unsigned integer in hexadecimal, zero padded to at least 8 digits."""
    _check_uint(value)
    return f"0x{value:08X}"


def format_bool(value: bool) -> str:
    return "true" if value else "false"


def format_enum(value: CaseInsensitiveStrEnum) -> str:
    if not isinstance(value, CaseInsensitiveStrEnum):
        raise ValueError(f"{value!r} is not an enumerated value")
    return value.value


def _check_uint(value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{value!r} is not an unsigned integer")


def new_element(tag: str, text: Optional[str] = None) -> ET._Element:
    """Create a new detached element, optionally containing text."""
    element = ET.Element(tag)
    if text is not None:
        element.text = text
    return element


def append_text(
    parent: ET._Element,
    tag: str,
    value: T,
    formatter: Callable[[T], str] = str,
) -> ET._Element:
    """
    Append a child element containing the formatted value.

    :raises SvdEncodeError: If the value could not be formatted.
    """
    child = ET.Element(tag)
    try:
        child.text = formatter(value)
    except ValueError as e:
        raise SvdEncodeError(f"element '{tag}' in <{parent.tag}>", str(e)) from e

    parent.append(child)
    return child


def append_optional(
    parent: ET._Element,
    tag: str,
    value: Optional[T],
    formatter: Callable[[T], str] = str,
) -> Optional[ET._Element]:
    """Append a child element containing the formatted value, if the value is not None."""
    if value is None:
        return None
    return append_text(parent, tag, value, formatter)
