# Copyright (c) 2023 Nordic Semiconductor ASA
# SPDX-License-Identifier: Apache-2.0

"""
The parse/encode contract shared by every entity in the SVD tree.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from lxml import etree as ET
from typing_extensions import Self


class SvdEntity(ABC):
    """
    Base class for the typed representation of an SVD element.

    Subclasses read themselves from an element in parse(), validating required fields first,
    then optional fields, then child entities and finally collections of children. The first
    error raised aborts the whole parse; no partially constructed entity is ever returned.

    encode() does the reverse, producing a new element tree that the entity keeps no reference
    to. Only fields that are set are written, so a value is never invented for an element that
    did not declare it.
    """

    # Tag of the XML element represented by the class.
    TAG: str

    @classmethod
    @abstractmethod
    def parse(cls, element: ET._Element) -> Self:
        """
        Create an entity from an XML element.

        :param element: Element to parse. It is only read, never modified or retained.

        :raises SvdError: If the element does not describe a valid entity.
        """
        ...

    @abstractmethod
    def encode(self) -> ET._Element:
        """
        Create a new XML element describing the entity.

        :raises SvdEncodeError: If the entity holds a value that cannot be written.
        """
        ...
