# Copyright (c) 2023 Nordic Semiconductor ASA
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import dataclasses as dc
from dataclasses import dataclass
from typing import Iterator, List, Optional

from lxml import etree as ET
from typing_extensions import Self

from ._combinators import (
    append_optional,
    append_text,
    format_enum,
    format_hex,
    format_uint,
    get_enum,
    get_text,
    get_uint,
    iter_children,
    new_element,
    optional,
    optional_attribute,
    required,
    required_text,
)
from ._entity import SvdEntity
from .defaults import Defaults
from .dim import DimElement
from .enums import AddressBlockUsage, Protection
from .register import (
    Register,
    RegisterOrCluster,
    encode_registers,
    iter_registers,
    parse_registers,
)


@dataclass
class AddressBlock(SvdEntity):
    """Address range mapped to a peripheral."""

    TAG = "addressBlock"

    # Start address of the address block, relative to the peripheral base address.
    offset: int

    # Number of address unit bits covered by the address block.
    size: int

    # Address block usage.
    usage: AddressBlockUsage

    # Protection level for the address block.
    protection: Optional[Protection] = None

    @classmethod
    def parse(cls, element: ET._Element) -> Self:
        return cls(
            offset=required(element, "offset", get_uint),
            size=required(element, "size", get_uint),
            usage=required(element, "usage", get_enum(AddressBlockUsage)),
            protection=optional(element, "protection", get_enum(Protection)),
        )

    def encode(self) -> ET._Element:
        element = new_element(self.TAG)
        append_text(element, "offset", self.offset, format_hex)
        append_text(element, "size", self.size, format_hex)
        append_text(element, "usage", self.usage, format_enum)
        append_optional(element, "protection", self.protection, format_enum)
        return element


@dataclass
class Interrupt(SvdEntity):
    """Peripheral interrupt description."""

    TAG = "interrupt"

    # Name of the interrupt.
    name: str

    # Interrupt number.
    value: int

    # Description of the interrupt.
    description: Optional[str] = None

    @classmethod
    def parse(cls, element: ET._Element) -> Self:
        return cls(
            name=required_text(element, "name"),
            value=required(element, "value", get_uint),
            description=optional(element, "description", get_text),
        )

    def encode(self) -> ET._Element:
        element = new_element(self.TAG)
        append_text(element, "name", self.name)
        append_optional(element, "description", self.description)
        append_text(element, "value", self.value, format_uint)
        return element


@dataclass
class Peripheral(SvdEntity):
    """
    SVD peripheral element.

    Every field is optional, since a peripheral that is derived from another one may leave out
    everything but the attribute naming its base.
    """

    TAG = "peripheral"

    # Name of the peripheral.
    name: Optional[str] = None

    # Version of the peripheral.
    version: Optional[str] = None

    # Description of the peripheral.
    description: Optional[str] = None

    # Name of a different peripheral that corresponds to this peripheral.
    alternate_peripheral: Optional[str] = None

    # Name of the group that the peripheral belongs to.
    group_name: Optional[str] = None

    # String to prepend to the names of registers contained in the peripheral.
    prepend_to_name: Optional[str] = None

    # String to append to the names of registers contained in the peripheral.
    append_to_name: Optional[str] = None

    # Name of the C struct that represents the peripheral.
    header_struct_name: Optional[str] = None

    # C expression that is true when the peripheral is disabled.
    disable_condition: Optional[str] = None

    # Base address of the peripheral.
    base_address: Optional[int] = None

    # Register properties declared by the peripheral itself.
    defaults: Defaults = dc.field(default_factory=Defaults)

    # Address blocks of the peripheral, in document order.
    address_blocks: List[AddressBlock] = dc.field(default_factory=list)

    # Interrupts of the peripheral, in document order.
    interrupts: List[Interrupt] = dc.field(default_factory=list)

    # Registers and clusters of the peripheral, or None if it has no <registers> element.
    registers: Optional[List[RegisterOrCluster]] = None

    # Dimensions, if the peripheral is repeated.
    dim: Optional[DimElement] = None

    # Name of the peripheral this peripheral is derived from.
    derived_from: Optional[str] = None

    @classmethod
    def parse(cls, element: ET._Element) -> Self:
        return cls(
            derived_from=optional_attribute(element, "derivedFrom"),
            name=optional(element, "name", get_text),
            version=optional(element, "version", get_text),
            description=optional(element, "description", get_text),
            alternate_peripheral=optional(element, "alternatePeripheral", get_text),
            group_name=optional(element, "groupName", get_text),
            prepend_to_name=optional(element, "prependToName", get_text),
            append_to_name=optional(element, "appendToName", get_text),
            header_struct_name=optional(element, "headerStructName", get_text),
            disable_condition=optional(element, "disableCondition", get_text),
            base_address=optional(element, "baseAddress", get_uint),
            dim=DimElement.parse_group(element),
            defaults=Defaults.parse(element),
            address_blocks=[
                AddressBlock.parse(e) for e in iter_children(element, AddressBlock.TAG)
            ],
            interrupts=[
                Interrupt.parse(e) for e in iter_children(element, Interrupt.TAG)
            ],
            registers=optional(element, "registers", parse_registers),
        )

    def encode(self) -> ET._Element:
        element = new_element(self.TAG)
        if self.derived_from is not None:
            element.set("derivedFrom", self.derived_from)

        if self.dim is not None:
            self.dim.encode_into(element)
        append_optional(element, "name", self.name)
        append_optional(element, "version", self.version)
        append_optional(element, "description", self.description)
        append_optional(element, "alternatePeripheral", self.alternate_peripheral)
        append_optional(element, "groupName", self.group_name)
        append_optional(element, "prependToName", self.prepend_to_name)
        append_optional(element, "appendToName", self.append_to_name)
        append_optional(element, "headerStructName", self.header_struct_name)
        append_optional(element, "disableCondition", self.disable_condition)
        append_optional(element, "baseAddress", self.base_address, format_hex)
        self.defaults.encode_into(element)

        for address_block in self.address_blocks:
            element.append(address_block.encode())
        for interrupt in self.interrupts:
            element.append(interrupt.encode())

        if self.registers is not None:
            registers = ET.SubElement(element, "registers")
            encode_registers(registers, self.registers)

        return element

    def get(self, name: str) -> Optional[RegisterOrCluster]:
        """Get a top level register or cluster by name."""
        for child in self.registers or ():
            if child.name == name:
                return child
        return None

    def register_iter(self) -> Iterator[Register]:
        """Iterate depth first over all registers of the peripheral, including those in clusters."""
        return iter_registers(self.registers or ())
