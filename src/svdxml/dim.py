# Copyright (c) 2023 Nordic Semiconductor ASA
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from lxml import etree as ET

from ._combinators import (
    append_optional,
    append_text,
    format_hex,
    format_uint,
    get_text,
    get_uint,
    optional,
    required,
)


@dataclass
class DimElement:
    """
    Dimensions of a repeated SVD element ('dimElementGroup' in the SVD schema).
    Present on peripherals, clusters, registers and fields that describe arrays or lists.
    """

    # Number of times the element is repeated.
    dim: int

    # Address increment between two repetitions.
    dim_increment: int

    # Index values substituted for %s in the element name, e.g. "0-3" or "A,B,C".
    dim_index: Optional[str] = None

    # Name of the C type generated for the repeated element.
    dim_name: Optional[str] = None

    @classmethod
    def parse_group(cls, element: ET._Element) -> Optional[DimElement]:
        """
        Read the dimensions declared directly in the given element.

        :return: None if the element is not repeated (has no <dim> child).

        :raises SvdMissingElementError: If <dim> is given without <dimIncrement>.
        """
        dim = optional(element, "dim", get_uint)
        if dim is None:
            return None

        return cls(
            dim=dim,
            dim_increment=required(element, "dimIncrement", get_uint),
            dim_index=optional(element, "dimIndex", get_text),
            dim_name=optional(element, "dimName", get_text),
        )

    def encode_into(self, parent: ET._Element) -> None:
        append_text(parent, "dim", self.dim, format_uint)
        append_text(parent, "dimIncrement", self.dim_increment, format_hex)
        append_optional(parent, "dimIndex", self.dim_index)
        append_optional(parent, "dimName", self.dim_name)
