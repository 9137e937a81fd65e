# Copyright (c) 2022 Nordic Semiconductor ASA
# SPDX-License-Identifier: Apache-2.0

from .enums import (
    Access,
    AddressBlockUsage,
    CpuName,
    DataType,
    Endian,
    EnumUsage,
    Protection,
    ReadAction,
    SauAccess,
    WriteAction,
)
from .errors import (
    SvdError,
    SvdParseError,
    SvdMissingElementError,
    SvdMissingAttributeError,
    SvdMalformedValueError,
    SvdEncodeError,
    SvdPathError,
    SvdKeyError,
)
from .defaults import Defaults, FullDefaults
from .dim import DimElement
from .field import (
    BitRange,
    BitRangeStyle,
    EnumeratedValue,
    EnumeratedValues,
    Field,
    WriteConstraint,
    WriteConstraintKind,
    WriteConstraintRange,
)
from .register import Cluster, Register, RegisterOrCluster
from .peripheral import AddressBlock, Interrupt, Peripheral
from .cpu import Cpu, SauRegion, SauRegionsConfig
from .device import Device
from .parsing import (
    Options,
    encode,
    parse,
    parse_element,
    parse_string,
    write,
)

import importlib.metadata
import logging

__version__ = importlib.metadata.version("svdxml")


def _init_logger() -> logging.Logger:
    formatter = logging.Formatter("{message}", style="{")
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    logger = logging.getLogger("svdxml")
    logger.setLevel(logging.ERROR)
    logger.addHandler(handler)

    return logger


# logging.Logger instance used for log output from svdxml
log = _init_logger()

__all__ = [
    # from enums
    "Access",
    "AddressBlockUsage",
    "CpuName",
    "DataType",
    "Endian",
    "EnumUsage",
    "Protection",
    "ReadAction",
    "SauAccess",
    "WriteAction",
    # from errors
    "SvdError",
    "SvdParseError",
    "SvdMissingElementError",
    "SvdMissingAttributeError",
    "SvdMalformedValueError",
    "SvdEncodeError",
    "SvdPathError",
    "SvdKeyError",
    # entities
    "Defaults",
    "FullDefaults",
    "DimElement",
    "BitRange",
    "BitRangeStyle",
    "EnumeratedValue",
    "EnumeratedValues",
    "Field",
    "WriteConstraint",
    "WriteConstraintKind",
    "WriteConstraintRange",
    "Cluster",
    "Register",
    "RegisterOrCluster",
    "AddressBlock",
    "Interrupt",
    "Peripheral",
    "Cpu",
    "SauRegion",
    "SauRegionsConfig",
    "Device",
    # from parsing
    "Options",
    "encode",
    "parse",
    "parse_element",
    "parse_string",
    "write",
    # other
    "log",
    "__version__",
]
