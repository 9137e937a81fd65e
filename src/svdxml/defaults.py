# Copyright (c) 2023 Nordic Semiconductor ASA
# SPDX-License-Identifier: Apache-2.0

"""
Register properties that are declared at one level of the SVD tree and inherited by the levels
below it (device -> peripheral -> cluster -> register).

Each level keeps only the properties it declares itself. Inheritance is resolved on request by
walking the chain of ancestors, so encoding a level never writes out a property that the level
did not declare.
"""

from __future__ import annotations

import dataclasses as dc
from dataclasses import dataclass
from typing import Iterable, Optional, Protocol

from lxml import etree as ET
from typing_extensions import TypeGuard

from ._combinators import (
    append_optional,
    format_enum,
    format_hex,
    format_uint,
    get_enum,
    get_uint,
    optional,
)
from .enums import Access, Protection


@dataclass
class Defaults:
    """Common SVD device/peripheral/cluster/register level properties."""

    # Size of the register in bits.
    size: Optional[int] = None

    # Access rights of the register.
    access: Optional[Access] = None

    # Protection level of the register.
    protection: Optional[Protection] = None

    # Reset value of the register.
    reset_value: Optional[int] = None

    # Bits of the register that have a defined reset value.
    reset_mask: Optional[int] = None

    @classmethod
    def parse(cls, element: ET._Element) -> Defaults:
        """
        Read the properties declared directly in the given element.
        Children of the element are not searched, and absent properties are left as None.
        """
        return cls(
            size=optional(element, "size", get_uint),
            access=optional(element, "access", get_enum(Access)),
            protection=optional(element, "protection", get_enum(Protection)),
            reset_value=optional(element, "resetValue", get_uint),
            reset_mask=optional(element, "resetMask", get_uint),
        )

    def encode_into(self, parent: ET._Element) -> None:
        """Append an element to parent for each declared property, in schema order."""
        append_optional(parent, "size", self.size, format_uint)
        append_optional(parent, "access", self.access, format_enum)
        append_optional(parent, "protection", self.protection, format_enum)
        append_optional(parent, "resetValue", self.reset_value, format_hex)
        append_optional(parent, "resetMask", self.reset_mask, format_hex)

    @property
    def is_empty(self) -> bool:
        """True if no property is declared."""
        return all(getattr(self, f.name) is None for f in dc.fields(self))

    def inherit(self, base: Optional[Defaults]) -> Defaults:
        """
        Get the effective properties of this level given the effective properties of the
        enclosing level. Neither object is modified.
        """
        if base is None:
            return dc.replace(self)

        return Defaults(
            size=self.size if self.size is not None else base.size,
            access=self.access if self.access is not None else base.access,
            protection=(
                self.protection if self.protection is not None else base.protection
            ),
            reset_value=(
                self.reset_value if self.reset_value is not None else base.reset_value
            ),
            reset_mask=(
                self.reset_mask if self.reset_mask is not None else base.reset_mask
            ),
        )

    @classmethod
    def resolve(cls, levels: Iterable[Defaults]) -> Defaults:
        """
        Resolve the effective properties of a chain of levels.

        :param levels: Properties of each level, starting with the innermost one
                       (e.g. register, cluster, peripheral, device).

        :return: For each property, the value declared by the innermost level that declares it.
                 Properties that no level declares are None.
        """
        effective = cls()
        for level in levels:
            effective = effective.inherit(level)
        return effective


class FullDefaults(Protocol):
    """Protocol that describes a fully defined set of register properties."""

    size: int
    access: Access
    protection: Optional[Protection]
    reset_value: int
    reset_mask: int

    @staticmethod
    def is_full(props: Defaults) -> TypeGuard[FullDefaults]:
        """Check if the given register properties has all the required fields set."""
        return all(
            f is not None
            for f in (
                props.size,
                props.access,
                props.reset_value,
                props.reset_mask,
            )
        )
