"""Shared fixtures for svdxml tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
from lxml import etree as ET

import svdxml

FIXTURE_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_svd() -> Path:
    """A small but complete SVD file."""
    return FIXTURE_DIR / "sample.svd"


@pytest.fixture
def sample_device(sample_svd: Path) -> svdxml.Device:
    return svdxml.parse(sample_svd)


@pytest.fixture
def xml() -> Callable[[str], ET._Element]:
    """Build an element from XML text, ignoring indentation between elements."""

    def make(text: str) -> ET._Element:
        parser = ET.XMLParser(remove_blank_text=True)
        return ET.fromstring(text.strip(), parser=parser)

    return make
