# Copyright (c) 2024 Nordic Semiconductor ASA
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from textwrap import dedent
from typing import List, Optional

import svdxml


def cli(argv: Optional[List[str]] = None) -> None:
    top = argparse.ArgumentParser(
        prog="svdxml",
        description=dedent(
            """\
            Read and write System View Description (SVD) files.
            """
        ),
        allow_abbrev=False,
    )
    top.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help=(
            "Output verbose logs. Can be given multiple times to increase the verbosity. "
            "By default only errors are output."
        ),
    )
    top.add_argument(
        "--options",
        type=json.loads,
        help=(
            "JSON object used to override fields in the Options object used when reading and "
            'writing SVD files, e.g. \'{"pretty_print": false}\'.'
        ),
    )

    sub = top.add_subparsers(title="subcommands")

    check = sub.add_parser(
        "check",
        help="Parse a SVD file and print a summary of the device.",
        allow_abbrev=False,
    )
    check.set_defaults(_command="check")
    check.add_argument("svd_file", type=Path, help="Path to the device SVD file.")

    roundtrip = sub.add_parser(
        "roundtrip",
        help="Parse a SVD file and write it back out.",
        description=dedent(
            """\
            Parse a SVD file and encode the parsed device as a new SVD document.
            Only the parts of the document that are represented in the parsed device are kept.
            """
        ),
        allow_abbrev=False,
    )
    roundtrip.set_defaults(_command="roundtrip")
    roundtrip.add_argument("svd_file", type=Path, help="Path to the device SVD file.")
    roundtrip.add_argument(
        "-o",
        "--output-file",
        type=Path,
        help="File to write the output to. If not given, output is written to stdout.",
    )

    args = top.parse_args(argv)

    log_level = {
        0: logging.ERROR,
        1: logging.WARNING,
        2: logging.INFO,
        3: logging.DEBUG,
    }.get(args.verbose, logging.DEBUG)
    svdxml.log.setLevel(log_level)

    if not hasattr(args, "_command"):
        top.print_usage()
        sys.exit(2)

    options = svdxml.Options()
    if args.options:
        try:
            options = dataclasses.replace(options, **args.options)
        except TypeError as e:
            svdxml.log.error(f"error: invalid --options: {e}")
            top.print_usage()
            sys.exit(2)

    try:
        if args._command == "check":
            cmd_check(args, options)
        elif args._command == "roundtrip":
            cmd_roundtrip(args, options)
        else:
            top.print_usage()
            sys.exit(2)
    except (svdxml.SvdError, FileNotFoundError) as e:
        svdxml.log.error(f"error: {e}")
        sys.exit(1)

    sys.exit(0)


def cmd_check(args: argparse.Namespace, options: svdxml.Options) -> None:
    device = svdxml.parse(args.svd_file, options=options)

    num_registers = sum(
        sum(1 for _ in peripheral.register_iter()) for peripheral in device.peripherals
    )
    cpu_str = device.cpu.name.value if device.cpu is not None else "-"

    print(f"name:        {device.name}")
    print(f"schema:      {device.schema_version}")
    print(f"cpu:         {cpu_str}")
    print(f"peripherals: {len(device.peripherals)}")
    print(f"registers:   {num_registers}")


def cmd_roundtrip(args: argparse.Namespace, options: svdxml.Options) -> None:
    device = svdxml.parse(args.svd_file, options=options)

    if args.output_file is not None:
        svdxml.write(device, args.output_file, options=options)
    else:
        sys.stdout.buffer.write(svdxml.encode(device, options=options))
        sys.stdout.flush()


# Entry point when running with python -m svdxml
if __name__ == "__main__":
    cli()
