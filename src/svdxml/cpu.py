# Copyright (c) 2023 Nordic Semiconductor ASA
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import dataclasses as dc
from dataclasses import dataclass
from typing import List, Optional

from lxml import etree as ET
from typing_extensions import Self

from ._combinators import (
    append_optional,
    append_text,
    as_bool,
    as_enum,
    format_bool,
    format_enum,
    format_hex,
    format_uint,
    get_bool,
    get_enum,
    get_uint,
    iter_children,
    new_element,
    optional,
    optional_attribute,
    required,
    required_text,
)
from ._entity import SvdEntity
from .enums import CpuName, Endian, Protection, SauAccess


@dataclass
class SauRegion(SvdEntity):
    """Predefined Secure Attribution Unit (SAU) region."""

    TAG = "region"

    # Base address of the SAU region.
    base: int

    # Limit address of the SAU region.
    limit: int

    # Access permissions of the SAU region.
    access: SauAccess

    # If false, the region is disabled. Unset means enabled.
    enabled: Optional[bool] = None

    # Name of the SAU region.
    name: Optional[str] = None

    @classmethod
    def parse(cls, element: ET._Element) -> Self:
        enabled = optional_attribute(element, "enabled")
        return cls(
            base=required(element, "base", get_uint),
            limit=required(element, "limit", get_uint),
            access=required(element, "access", get_enum(SauAccess)),
            enabled=as_bool(enabled, element) if enabled is not None else None,
            name=optional_attribute(element, "name"),
        )

    def encode(self) -> ET._Element:
        element = new_element(self.TAG)
        if self.enabled is not None:
            element.set("enabled", format_bool(self.enabled))
        if self.name is not None:
            element.set("name", self.name)

        append_text(element, "base", self.base, format_hex)
        append_text(element, "limit", self.limit, format_hex)
        append_text(element, "access", self.access, format_enum)
        return element


@dataclass
class SauRegionsConfig(SvdEntity):
    """Container for predefined Secure Attribution Unit (SAU) regions."""

    TAG = "sauRegionsConfig"

    # If false, the SAU is disabled. Unset means enabled.
    enabled: Optional[bool] = None

    # Protection of the address ranges not covered by an enabled region.
    protection_when_disabled: Optional[Protection] = None

    # Predefined regions, in document order.
    regions: List[SauRegion] = dc.field(default_factory=list)

    @classmethod
    def parse(cls, element: ET._Element) -> Self:
        enabled = optional_attribute(element, "enabled")
        protection = optional_attribute(element, "protectionWhenDisabled")
        return cls(
            enabled=as_bool(enabled, element) if enabled is not None else None,
            protection_when_disabled=(
                as_enum(Protection, protection, element)
                if protection is not None
                else None
            ),
            regions=[SauRegion.parse(e) for e in iter_children(element, SauRegion.TAG)],
        )

    def encode(self) -> ET._Element:
        element = new_element(self.TAG)
        if self.enabled is not None:
            element.set("enabled", format_bool(self.enabled))
        if self.protection_when_disabled is not None:
            element.set(
                "protectionWhenDisabled", format_enum(self.protection_when_disabled)
            )

        for region in self.regions:
            element.append(region.encode())
        return element


@dataclass
class Cpu(SvdEntity):
    """Description of the device processor."""

    TAG = "cpu"

    # CPU name.
    name: CpuName

    # CPU hardware revision with the format "rNpM".
    revision: str

    # Default endianness of the CPU.
    endian: Endian

    # True if the CPU has a memory protection unit (MPU).
    mpu_present: bool

    # True if the CPU has a floating point unit (FPU).
    fpu_present: bool

    # Bit width of interrupt priority levels in the Nested Vectored Interrupt Controller (NVIC).
    nvic_prio_bits: int

    # True if the CPU has a vendor-specific SysTick Timer.
    vendor_systick_config: bool

    # True if the FPU is double precision.
    fpu_dp: Optional[bool] = None

    # True if the CPU implements the SIMD DSP extensions.
    dsp_present: Optional[bool] = None

    # True if the CPU has an instruction cache.
    icache_present: Optional[bool] = None

    # True if the CPU has a data cache.
    dcache_present: Optional[bool] = None

    # True if the CPU has an instruction tightly coupled memory (ITCM).
    itcm_present: Optional[bool] = None

    # True if the CPU has a data tightly coupled memory (DTCM).
    dtcm_present: Optional[bool] = None

    # True if the CPU has a Vector Table Offset Register (VTOR).
    vtor_present: Optional[bool] = None

    # Maximum interrupt number in the CPU plus one.
    device_num_interrupts: Optional[int] = None

    # Number of supported Secure Attribution Unit (SAU) regions.
    sau_num_regions: Optional[int] = None

    # Predefined Secure Attribution Unit (SAU) regions, if any.
    sau_regions_config: Optional[SauRegionsConfig] = None

    @classmethod
    def parse(cls, element: ET._Element) -> Self:
        return cls(
            name=required(element, "name", get_enum(CpuName)),
            revision=required_text(element, "revision"),
            endian=required(element, "endian", get_enum(Endian)),
            mpu_present=required(element, "mpuPresent", get_bool),
            fpu_present=required(element, "fpuPresent", get_bool),
            nvic_prio_bits=required(element, "nvicPrioBits", get_uint),
            vendor_systick_config=required(element, "vendorSystickConfig", get_bool),
            fpu_dp=optional(element, "fpuDP", get_bool),
            dsp_present=optional(element, "dspPresent", get_bool),
            icache_present=optional(element, "icachePresent", get_bool),
            dcache_present=optional(element, "dcachePresent", get_bool),
            itcm_present=optional(element, "itcmPresent", get_bool),
            dtcm_present=optional(element, "dtcmPresent", get_bool),
            vtor_present=optional(element, "vtorPresent", get_bool),
            device_num_interrupts=optional(element, "deviceNumInterrupts", get_uint),
            sau_num_regions=optional(element, "sauNumRegions", get_uint),
            sau_regions_config=optional(
                element, "sauRegionsConfig", SauRegionsConfig.parse
            ),
        )

    def encode(self) -> ET._Element:
        element = new_element(self.TAG)
        append_text(element, "name", self.name, format_enum)
        append_text(element, "revision", self.revision)
        append_text(element, "endian", self.endian, format_enum)
        append_text(element, "mpuPresent", self.mpu_present, format_bool)
        append_text(element, "fpuPresent", self.fpu_present, format_bool)
        append_optional(element, "fpuDP", self.fpu_dp, format_bool)
        append_optional(element, "dspPresent", self.dsp_present, format_bool)
        append_optional(element, "icachePresent", self.icache_present, format_bool)
        append_optional(element, "dcachePresent", self.dcache_present, format_bool)
        append_optional(element, "itcmPresent", self.itcm_present, format_bool)
        append_optional(element, "dtcmPresent", self.dtcm_present, format_bool)
        append_optional(element, "vtorPresent", self.vtor_present, format_bool)
        append_text(element, "nvicPrioBits", self.nvic_prio_bits, format_uint)
        append_text(
            element, "vendorSystickConfig", self.vendor_systick_config, format_bool
        )
        append_optional(
            element, "deviceNumInterrupts", self.device_num_interrupts, format_uint
        )
        append_optional(element, "sauNumRegions", self.sau_num_regions, format_uint)
        if self.sau_regions_config is not None:
            element.append(self.sau_regions_config.encode())
        return element
