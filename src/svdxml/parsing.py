# Copyright (c) 2022 Nordic Semiconductor ASA
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from time import perf_counter_ns
from typing import Union

import lxml.etree as ET

from .device import Device
from .errors import SvdParseError

log = logging.getLogger("svdxml")


@dataclass(frozen=True)
class Options:
    """Options to configure reading and writing of SVD documents."""

    # Remove comments from the document before parsing.
    # Comments are never represented in the parsed device.
    remove_comments: bool = True

    # Remove whitespace-only text between elements.
    remove_blank_text: bool = True

    # Lift the lxml limits on tree depth and text size, for very large SVD files.
    huge_tree: bool = False

    # Indent the written document.
    pretty_print: bool = True

    # Start the written document with an XML declaration.
    xml_declaration: bool = True

    # Encoding of the written document.
    encoding: str = "utf-8"


def parse(svd_path: Union[str, Path], options: Options = Options()) -> Device:
    """
    Parse a device described by a SVD file.

    :param svd_path: Path to the SVD file.
    :param options: Parsing options.

    :raises FileNotFoundError: If the SVD file does not exist.
    :raises SvdParseError: If the file is not a well-formed SVD document.
    :raises SvdError: If the document does not describe a valid device.

    :return: Parsed `Device` representation of the SVD file.
    """
    svd_file = Path(svd_path)

    if not svd_file.is_file():
        raise FileNotFoundError(f"No such file: {svd_file.absolute()}")

    t_parse_start = perf_counter_ns()

    try:
        with open(svd_file, "rb") as f:
            xml_device = ET.parse(f, parser=_make_parser(options))
    except ET.XMLSyntaxError as e:
        raise SvdParseError(f"Error parsing SVD file {svd_file}") from e

    t_parse = (perf_counter_ns() - t_parse_start) / 1_000_000
    log.debug(f"Read {svd_file} in {t_parse:.2f} ms")

    return parse_element(xml_device.getroot())


def parse_string(text: Union[str, bytes], options: Options = Options()) -> Device:
    """
    Parse a device from the text of a SVD document.

    :raises SvdParseError: If the text is not a well-formed SVD document.
    :raises SvdError: If the document does not describe a valid device.
    """
    if isinstance(text, str):
        text = text.encode("utf-8")

    try:
        root = ET.fromstring(text, parser=_make_parser(options))
    except ET.XMLSyntaxError as e:
        raise SvdParseError("Error parsing SVD document") from e

    return parse_element(root)


def parse_element(root: ET._Element) -> Device:
    """
    Parse a device from the root element of an already loaded SVD document.

    :raises SvdParseError: If the root element is not a <device> element.
    :raises SvdError: If the element does not describe a valid device.
    """
    if root.tag != Device.TAG:
        raise SvdParseError(
            f"Root element of the document is <{root.tag}>, expected <{Device.TAG}>"
        )

    t_start = perf_counter_ns()
    device = Device.parse(root)
    t_device = (perf_counter_ns() - t_start) / 1_000_000

    log.debug(
        f"Parsed {device} with {len(device.peripherals)} peripherals in {t_device:.2f} ms"
    )

    return device


def encode(device: Device, options: Options = Options()) -> bytes:
    """
    Encode a device as the text of a SVD document.

    :raises SvdEncodeError: If the device holds a value that cannot be written.
    """
    root = device.encode()
    return ET.tostring(
        root,
        pretty_print=options.pretty_print,
        xml_declaration=options.xml_declaration,
        encoding=options.encoding,
    )


def write(
    device: Device, svd_path: Union[str, Path], options: Options = Options()
) -> None:
    """
    Write a device to a SVD file.
    Nothing is written if the device could not be encoded.

    :raises SvdEncodeError: If the device holds a value that cannot be written.
    """
    content = encode(device, options)

    svd_file = Path(svd_path)
    svd_file.write_bytes(content)

    log.debug(f"Wrote {device} to {svd_file}")


def _make_parser(options: Options) -> ET.XMLParser:
    return ET.XMLParser(
        remove_comments=options.remove_comments,
        remove_blank_text=options.remove_blank_text,
        huge_tree=options.huge_tree,
    )
