# Copyright (c) 2023 Nordic Semiconductor ASA
# SPDX-License-Identifier: Apache-2.0

"""
Registers and clusters of registers.
"""

from __future__ import annotations

import dataclasses as dc
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Union

from lxml import etree as ET
from typing_extensions import Self

from ._combinators import (
    append_optional,
    append_text,
    format_enum,
    format_hex,
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
from .enums import DataType, ReadAction, WriteAction
from .field import Field, WriteConstraint


@dataclass
class Register(SvdEntity):
    """SVD register element."""

    TAG = "register"

    # Name of the register.
    name: str

    # Address offset of the register, relative to the enclosing peripheral or cluster.
    address_offset: int

    # Display name of the register.
    display_name: Optional[str] = None

    # Description of the register.
    description: Optional[str] = None

    # Alternate group of the register.
    alternate_group: Optional[str] = None

    # Name of a different register that corresponds to this register.
    alternate_register: Optional[str] = None

    # Register properties declared by the register itself.
    defaults: Defaults = dc.field(default_factory=Defaults)

    # C data type to use when accessing the register.
    data_type: Optional[DataType] = None

    # Side effect of writing the register.
    modified_write_values: Optional[WriteAction] = None

    # Write constraint of the register.
    write_constraint: Optional[WriteConstraint] = None

    # Side effect of reading the register.
    read_action: Optional[ReadAction] = None

    # Fields of the register, or None if the register has no <fields> element.
    fields: Optional[List[Field]] = None

    # Dimensions, if the register is repeated.
    dim: Optional[DimElement] = None

    # Name of the register this register is derived from.
    derived_from: Optional[str] = None

    @classmethod
    def parse(cls, element: ET._Element) -> Self:
        return cls(
            name=required_text(element, "name"),
            address_offset=required(element, "addressOffset", get_uint),
            derived_from=optional_attribute(element, "derivedFrom"),
            display_name=optional(element, "displayName", get_text),
            description=optional(element, "description", get_text),
            alternate_group=optional(element, "alternateGroup", get_text),
            alternate_register=optional(element, "alternateRegister", get_text),
            data_type=optional(element, "dataType", get_enum(DataType)),
            modified_write_values=optional(
                element, "modifiedWriteValues", get_enum(WriteAction)
            ),
            write_constraint=optional(element, "writeConstraint", WriteConstraint.parse),
            read_action=optional(element, "readAction", get_enum(ReadAction)),
            dim=DimElement.parse_group(element),
            defaults=Defaults.parse(element),
            fields=optional(element, "fields", _parse_fields),
        )

    def encode(self) -> ET._Element:
        element = new_element(self.TAG)
        if self.derived_from is not None:
            element.set("derivedFrom", self.derived_from)

        if self.dim is not None:
            self.dim.encode_into(element)
        append_text(element, "name", self.name)
        append_optional(element, "displayName", self.display_name)
        append_optional(element, "description", self.description)
        append_optional(element, "alternateGroup", self.alternate_group)
        append_optional(element, "alternateRegister", self.alternate_register)
        append_text(element, "addressOffset", self.address_offset, format_hex)
        self.defaults.encode_into(element)
        append_optional(element, "dataType", self.data_type, format_enum)
        append_optional(
            element, "modifiedWriteValues", self.modified_write_values, format_enum
        )
        if self.write_constraint is not None:
            element.append(self.write_constraint.encode())
        append_optional(element, "readAction", self.read_action, format_enum)

        if self.fields is not None:
            fields = ET.SubElement(element, "fields")
            for field in self.fields:
                fields.append(field.encode())

        return element


def _parse_fields(element: ET._Element) -> List[Field]:
    return [Field.parse(e) for e in iter_children(element, Field.TAG)]


@dataclass
class Cluster(SvdEntity):
    """SVD cluster element, a group of registers and nested clusters."""

    TAG = "cluster"

    # Name of the cluster.
    name: str

    # Address offset of the cluster, relative to the enclosing peripheral or cluster.
    address_offset: int

    # Description of the cluster.
    description: Optional[str] = None

    # Name of a different cluster that corresponds to this cluster.
    alternate_cluster: Optional[str] = None

    # Name of the C struct used to represent the cluster.
    header_struct_name: Optional[str] = None

    # Register properties declared by the cluster itself.
    defaults: Defaults = dc.field(default_factory=Defaults)

    # Registers and clusters contained in the cluster, in document order.
    children: List[RegisterOrCluster] = dc.field(default_factory=list)

    # Dimensions, if the cluster is repeated.
    dim: Optional[DimElement] = None

    # Name of the cluster this cluster is derived from.
    derived_from: Optional[str] = None

    @classmethod
    def parse(cls, element: ET._Element) -> Self:
        return cls(
            name=required_text(element, "name"),
            address_offset=required(element, "addressOffset", get_uint),
            derived_from=optional_attribute(element, "derivedFrom"),
            description=optional(element, "description", get_text),
            alternate_cluster=optional(element, "alternateCluster", get_text),
            header_struct_name=optional(element, "headerStructName", get_text),
            dim=DimElement.parse_group(element),
            defaults=Defaults.parse(element),
            children=parse_registers(element),
        )

    def encode(self) -> ET._Element:
        element = new_element(self.TAG)
        if self.derived_from is not None:
            element.set("derivedFrom", self.derived_from)

        if self.dim is not None:
            self.dim.encode_into(element)
        append_text(element, "name", self.name)
        append_optional(element, "description", self.description)
        append_optional(element, "alternateCluster", self.alternate_cluster)
        append_optional(element, "headerStructName", self.header_struct_name)
        append_text(element, "addressOffset", self.address_offset, format_hex)
        self.defaults.encode_into(element)
        encode_registers(element, self.children)
        return element

    def get(self, name: str) -> Optional[RegisterOrCluster]:
        """Get a direct child register or cluster by name."""
        for child in self.children:
            if child.name == name:
                return child
        return None


RegisterOrCluster = Union[Register, Cluster]


def parse_registers(element: ET._Element) -> List[RegisterOrCluster]:
    """Parse the register and cluster children of an element, keeping their document order."""
    children: List[RegisterOrCluster] = []
    for child in iter_children(element, Register.TAG, Cluster.TAG):
        if child.tag == Register.TAG:
            children.append(Register.parse(child))
        else:
            children.append(Cluster.parse(child))
    return children


def encode_registers(parent: ET._Element, children: Iterable[RegisterOrCluster]) -> None:
    """Append the encoded form of each register and cluster to parent, in order."""
    for child in children:
        parent.append(child.encode())


def iter_registers(children: Iterable[RegisterOrCluster]) -> Iterator[Register]:
    """Iterate depth first over all registers, descending into clusters."""
    for child in children:
        if isinstance(child, Cluster):
            yield from iter_registers(child.children)
        else:
            yield child
