# Copyright (c) 2023 Nordic Semiconductor ASA
# SPDX-License-Identifier: Apache-2.0

"""
Root of the SVD entity tree.
"""

from __future__ import annotations

import dataclasses as dc
from dataclasses import dataclass
from typing import List, Optional

from lxml import etree as ET
from typing_extensions import Self

from ._combinators import (
    append_optional,
    append_text,
    format_uint,
    get_text,
    get_uint,
    iter_children,
    optional,
    required_attribute,
    required_child_element,
    required_text,
)
from ._entity import SvdEntity
from .cpu import Cpu
from .defaults import Defaults
from .errors import SvdKeyError
from .peripheral import Peripheral
from .register import Cluster, RegisterOrCluster

# Namespace of the attributes used to point the document at its schema.
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"

# Prefix bound to XSI_NAMESPACE in encoded documents.
XSI_PREFIX = "xs"


@dataclass
class Device(SvdEntity):
    """Representation of a SVD device."""

    TAG = "device"

    # Name of the device.
    name: str

    # Version of the CMSIS schema that the SVD file conforms to, e.g. "1.3".
    schema_version: str

    # Version of the device description.
    version: Optional[str] = None

    # Description of the device.
    description: Optional[str] = None

    # Full device vendor name.
    vendor: Optional[str] = None

    # Abbreviated device vendor name.
    vendor_id: Optional[str] = None

    # Device series name.
    series: Optional[str] = None

    # The license to use for the device header file.
    license_text: Optional[str] = None

    # Number of data bits selected by each address.
    address_unit_bits: Optional[int] = None

    # Width of the maximum data transfer supported by the device.
    width: Optional[int] = None

    # Description of the device processor.
    cpu: Optional[Cpu] = None

    # Peripherals of the device, in document order.
    peripherals: List[Peripheral] = dc.field(default_factory=list)

    # Register properties declared at device level.
    defaults: Defaults = dc.field(default_factory=Defaults)

    @classmethod
    def parse(cls, element: ET._Element) -> Self:
        """
        Create a device from the root element of an SVD document.

        :raises SvdMissingElementError: If <name> or <peripherals> is absent.
        :raises SvdMissingAttributeError: If the schemaVersion attribute is absent.
        :raises SvdMalformedValueError: If a value could not be converted to its type.
        """
        return cls(
            name=required_text(element, "name"),
            schema_version=required_attribute(element, "schemaVersion"),
            version=optional(element, "version", get_text),
            description=optional(element, "description", get_text),
            vendor=optional(element, "vendor", get_text),
            vendor_id=optional(element, "vendorID", get_text),
            series=optional(element, "series", get_text),
            license_text=optional(element, "licenseText", get_text),
            address_unit_bits=optional(element, "addressUnitBits", get_uint),
            width=optional(element, "width", get_uint),
            cpu=optional(element, "cpu", Cpu.parse),
            peripherals=[
                Peripheral.parse(e)
                for e in iter_children(
                    required_child_element(element, "peripherals"), Peripheral.TAG
                )
            ],
            defaults=Defaults.parse(element),
        )

    def encode(self) -> ET._Element:
        """
        Create the root element of an SVD document describing the device.
        The schema attributes are always written, derived from schema_version.

        Children are written in the order: name, version, description, vendor, vendorID,
        series, licenseText, addressUnitBits, width, the device level register properties
        (size, access, protection, resetValue, resetMask), cpu and peripherals.
        This puts cpu after the register properties, unlike the CMSIS-SVD schema which places
        it before addressUnitBits. Parsing accepts either order.
        """
        element = ET.Element(self.TAG, nsmap={XSI_PREFIX: XSI_NAMESPACE})
        element.set("schemaVersion", self.schema_version)
        element.set(
            f"{{{XSI_NAMESPACE}}}noNamespaceSchemaLocation", self.schema_location
        )

        append_text(element, "name", self.name)
        append_optional(element, "version", self.version)
        append_optional(element, "description", self.description)
        append_optional(element, "vendor", self.vendor)
        append_optional(element, "vendorID", self.vendor_id)
        append_optional(element, "series", self.series)
        append_optional(element, "licenseText", self.license_text)
        append_optional(element, "addressUnitBits", self.address_unit_bits, format_uint)
        append_optional(element, "width", self.width, format_uint)
        self.defaults.encode_into(element)

        if self.cpu is not None:
            element.append(self.cpu.encode())

        peripherals = ET.SubElement(element, "peripherals")
        for peripheral in self.peripherals:
            peripherals.append(peripheral.encode())

        return element

    @property
    def schema_location(self) -> str:
        """File name of the schema the device conforms to."""
        return f"CMSIS-SVD_Schema_{self.schema_version}.xsd"

    def get_peripheral(self, name: str) -> Peripheral:
        """
        Get the first peripheral with the given name.

        :raises SvdKeyError: If the device has no such peripheral.
        """
        for peripheral in self.peripherals:
            if peripheral.name == name:
                return peripheral
        raise SvdKeyError([name], self)

    def effective_defaults(self, peripheral: str, *path: str) -> Defaults:
        """
        Resolve the register properties in effect at a given level of the device.

        :param peripheral: Name of the peripheral.
        :param path: Names of the clusters and register to descend through, starting at the
                     top level of the peripheral. If empty, the properties in effect for the
                     peripheral itself are returned.

        :raises SvdKeyError: If an element on the path does not exist.

        :return: For each property, the value declared by the innermost level that declares it.
        """
        levels: List[Defaults] = [self.defaults]

        current = self.get_peripheral(peripheral)
        levels.append(current.defaults)
        children: List[RegisterOrCluster] = current.registers or []

        for i, name in enumerate(path):
            for child in children:
                if child.name == name:
                    break
            else:
                raise SvdKeyError([peripheral, *path[: i + 1]], self)

            levels.append(child.defaults)
            children = child.children if isinstance(child, Cluster) else []

        return Defaults.resolve(reversed(levels))

    def __str__(self) -> str:
        return f"device '{self.name}'"
