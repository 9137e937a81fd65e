# Copyright (c) 2023 Nordic Semiconductor ASA
# SPDX-License-Identifier: Apache-2.0

"""
Fields of a register and the values they can hold.
"""

from __future__ import annotations

import dataclasses as dc
import enum
import re
from dataclasses import dataclass
from typing import List, NamedTuple, Optional

from lxml import etree as ET
from typing_extensions import Self

from ._combinators import (
    append_optional,
    append_text,
    as_unsigned_integer,
    find_child,
    format_bool,
    format_enum,
    format_uint,
    get_bool,
    get_enum,
    get_text,
    get_uint,
    iter_children,
    new_element,
    optional,
    optional_attribute,
    required,
    required_child_element,
    required_text,
)
from ._entity import SvdEntity
from .dim import DimElement
from .enums import Access, EnumUsage, ReadAction, WriteAction
from .errors import SvdEncodeError, SvdMalformedValueError, SvdMissingElementError

_BIT_RANGE_PATTERN = re.compile(r"\[\s*([^\s:\]]+)\s*:\s*([^\s:\]]+)\s*\]")


@enum.unique
class BitRangeStyle(enum.Enum):
    """Notation used to describe the bit range of a field."""

    # <bitOffset> and <bitWidth>
    OFFSET_WIDTH = enum.auto()
    # <lsb> and <msb>
    LSB_MSB = enum.auto()
    # <bitRange>[msb:lsb]</bitRange>
    PATTERN = enum.auto()


class BitRange(NamedTuple):
    """Bit range of a field."""

    # Bit offset of the field.
    offset: int

    # Bit width of the field.
    width: int

    # Notation the bit range is written with.
    style: BitRangeStyle = BitRangeStyle.OFFSET_WIDTH

    @property
    def lsb(self) -> int:
        return self.offset

    @property
    def msb(self) -> int:
        return self.offset + self.width - 1

    @classmethod
    def parse_group(cls, element: ET._Element) -> BitRange:
        """
        Read the bit range of a field element, in whichever of the three notations it uses.

        :raises SvdMissingElementError: If the field has no bit range, or an incomplete one.
        :raises SvdMalformedValueError: If the bit range is invalid.
        """
        if find_child(element, "lsb") is not None or find_child(element, "msb") is not None:
            lsb = required(element, "lsb", get_uint)
            msb = required(element, "msb", get_uint)
            return cls._from_lsb_msb(lsb, msb, BitRangeStyle.LSB_MSB, element)

        if find_child(element, "bitOffset") is not None:
            offset = required(element, "bitOffset", get_uint)
            width_element = required_child_element(element, "bitWidth")
            width = get_uint(width_element)
            if width < 1:
                raise SvdMalformedValueError(width_element.text, "bit range", width_element)
            return cls(offset=offset, width=width, style=BitRangeStyle.OFFSET_WIDTH)

        if find_child(element, "bitRange") is not None:
            text = required_text(element, "bitRange")
            match = _BIT_RANGE_PATTERN.fullmatch(text)
            if match is None:
                raise SvdMalformedValueError(text, "bit range", element)

            msb = as_unsigned_integer(match[1], element)
            lsb = as_unsigned_integer(match[2], element)
            return cls._from_lsb_msb(lsb, msb, BitRangeStyle.PATTERN, element)

        raise SvdMissingElementError("bitOffset", element)

    @classmethod
    def _from_lsb_msb(
        cls, lsb: int, msb: int, style: BitRangeStyle, element: ET._Element
    ) -> Self:
        if msb < lsb:
            raise SvdMalformedValueError(f"[{msb}:{lsb}]", "bit range", element)
        return cls(offset=lsb, width=msb - lsb + 1, style=style)

    def encode_into(self, parent: ET._Element) -> None:
        if self.width < 1:
            raise SvdEncodeError(
                f"bit range of <{parent.tag}>", f"width {self.width} is less than 1"
            )

        if self.style == BitRangeStyle.LSB_MSB:
            append_text(parent, "lsb", self.lsb, format_uint)
            append_text(parent, "msb", self.msb, format_uint)
        elif self.style == BitRangeStyle.PATTERN:
            append_text(parent, "bitRange", f"[{self.msb}:{self.lsb}]")
        else:
            append_text(parent, "bitOffset", self.offset, format_uint)
            append_text(parent, "bitWidth", self.width, format_uint)


@dataclass
class WriteConstraintRange(SvdEntity):
    """Range of values that can be written to a register or field."""

    TAG = "range"

    # Minimum permitted value
    minimum: int

    # Maximum permitted value
    maximum: int

    @classmethod
    def parse(cls, element: ET._Element) -> Self:
        return cls(
            minimum=required(element, "minimum", get_uint),
            maximum=required(element, "maximum", get_uint),
        )

    def encode(self) -> ET._Element:
        element = new_element(self.TAG)
        append_text(element, "minimum", self.minimum, format_uint)
        append_text(element, "maximum", self.maximum, format_uint)
        return element


@enum.unique
class WriteConstraintKind(enum.Enum):
    """Type of write constraint for a register or field."""

    # Only the last read value can be written.
    WRITE_AS_READ = enum.auto()
    # Only enumerated values can be written.
    USE_ENUMERATED_VALUES = enum.auto()
    # Only values within a given range can be written.
    RANGE = enum.auto()


@dataclass
class WriteConstraint(SvdEntity):
    """Constraint on the values that can be written to a register or field."""

    TAG = "writeConstraint"

    write_as_read: Optional[bool] = None
    use_enumerated_values: Optional[bool] = None
    value_range: Optional[WriteConstraintRange] = None

    @property
    def kind(self) -> Optional[WriteConstraintKind]:
        """Return the write constraint as an enum value."""
        if self.write_as_read:
            return WriteConstraintKind.WRITE_AS_READ
        if self.use_enumerated_values:
            return WriteConstraintKind.USE_ENUMERATED_VALUES
        if self.value_range is not None:
            return WriteConstraintKind.RANGE
        return None

    @classmethod
    def parse(cls, element: ET._Element) -> Self:
        constraint = cls(
            write_as_read=optional(element, "writeAsRead", get_bool),
            use_enumerated_values=optional(element, "useEnumeratedValues", get_bool),
            value_range=optional(element, "range", WriteConstraintRange.parse),
        )
        if (
            constraint.write_as_read is None
            and constraint.use_enumerated_values is None
            and constraint.value_range is None
        ):
            raise SvdMissingElementError("range", element)
        return constraint

    def encode(self) -> ET._Element:
        element = new_element(self.TAG)
        append_optional(element, "writeAsRead", self.write_as_read, format_bool)
        append_optional(
            element, "useEnumeratedValues", self.use_enumerated_values, format_bool
        )
        if self.value_range is not None:
            element.append(self.value_range.encode())
        return element


@dataclass
class EnumeratedValue(SvdEntity):
    """Named value of a field."""

    TAG = "enumeratedValue"

    # Name of the enumerated value.
    name: str

    # Description of the enumerated value.
    description: Optional[str] = None

    # Value of the enumerated value. Not set when the entry is the default.
    value: Optional[int] = None

    # True if the entry applies to all values not listed explicitly.
    is_default: Optional[bool] = None

    @classmethod
    def parse(cls, element: ET._Element) -> Self:
        enumerated_value = cls(
            name=required_text(element, "name"),
            description=optional(element, "description", get_text),
            value=optional(element, "value", get_uint),
            is_default=optional(element, "isDefault", get_bool),
        )
        if enumerated_value.value is None and enumerated_value.is_default is None:
            raise SvdMissingElementError("value", element)
        return enumerated_value

    def encode(self) -> ET._Element:
        element = new_element(self.TAG)
        append_text(element, "name", self.name)
        append_optional(element, "description", self.description)
        append_optional(element, "value", self.value, format_uint)
        append_optional(element, "isDefault", self.is_default, format_bool)
        return element


@dataclass
class EnumeratedValues(SvdEntity):
    """Container for the enumerated values of a field."""

    TAG = "enumeratedValues"

    # Name of the enumeration.
    name: Optional[str] = None

    # Identifier of the enumeration in the device header file.
    header_enum_name: Optional[str] = None

    # Operations the enumeration applies to.
    usage: Optional[EnumUsage] = None

    # Enumerated values, in document order.
    values: List[EnumeratedValue] = dc.field(default_factory=list)

    # Name of the enumeration this enumeration is derived from.
    derived_from: Optional[str] = None

    @classmethod
    def parse(cls, element: ET._Element) -> Self:
        return cls(
            derived_from=optional_attribute(element, "derivedFrom"),
            name=optional(element, "name", get_text),
            header_enum_name=optional(element, "headerEnumName", get_text),
            usage=optional(element, "usage", get_enum(EnumUsage)),
            values=[
                EnumeratedValue.parse(e)
                for e in iter_children(element, EnumeratedValue.TAG)
            ],
        )

    def encode(self) -> ET._Element:
        element = new_element(self.TAG)
        if self.derived_from is not None:
            element.set("derivedFrom", self.derived_from)

        append_optional(element, "name", self.name)
        append_optional(element, "headerEnumName", self.header_enum_name)
        append_optional(element, "usage", self.usage, format_enum)
        for value in self.values:
            element.append(value.encode())
        return element


@dataclass
class Field(SvdEntity):
    """SVD field element."""

    TAG = "field"

    # Name of the field.
    name: str

    # Bits of the register occupied by the field.
    bit_range: BitRange

    # Description of the field.
    description: Optional[str] = None

    # Access rights of the field.
    access: Optional[Access] = None

    # Side effect when writing to the field.
    modified_write_values: Optional[WriteAction] = None

    # Constraints on writing to the field.
    write_constraint: Optional[WriteConstraint] = None

    # Side effect when reading from the field.
    read_action: Optional[ReadAction] = None

    # Permitted values of the field (at most one set for reads and one for writes).
    enumerated_values: List[EnumeratedValues] = dc.field(default_factory=list)

    # Dimensions, if the field is repeated.
    dim: Optional[DimElement] = None

    # Name of the field this field is derived from.
    derived_from: Optional[str] = None

    @classmethod
    def parse(cls, element: ET._Element) -> Self:
        return cls(
            name=required_text(element, "name"),
            bit_range=BitRange.parse_group(element),
            derived_from=optional_attribute(element, "derivedFrom"),
            description=optional(element, "description", get_text),
            access=optional(element, "access", get_enum(Access)),
            modified_write_values=optional(
                element, "modifiedWriteValues", get_enum(WriteAction)
            ),
            write_constraint=optional(element, "writeConstraint", WriteConstraint.parse),
            read_action=optional(element, "readAction", get_enum(ReadAction)),
            dim=DimElement.parse_group(element),
            enumerated_values=[
                EnumeratedValues.parse(e)
                for e in iter_children(element, EnumeratedValues.TAG)
            ],
        )

    def encode(self) -> ET._Element:
        element = new_element(self.TAG)
        if self.derived_from is not None:
            element.set("derivedFrom", self.derived_from)

        if self.dim is not None:
            self.dim.encode_into(element)
        append_text(element, "name", self.name)
        append_optional(element, "description", self.description)
        self.bit_range.encode_into(element)
        append_optional(element, "access", self.access, format_enum)
        append_optional(
            element, "modifiedWriteValues", self.modified_write_values, format_enum
        )
        if self.write_constraint is not None:
            element.append(self.write_constraint.encode())
        append_optional(element, "readAction", self.read_action, format_enum)
        for enumerated_values in self.enumerated_values:
            element.append(enumerated_values.encode())
        return element
