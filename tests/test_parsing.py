"""Tests for reading and writing SVD documents."""

from __future__ import annotations

import logging

import pytest
from lxml import etree as ET

import svdxml
from svdxml import Options, SvdMissingElementError, SvdParseError

MINIMAL_XML = (
    '<device schemaVersion="1.1"><name>TINY</name>'
    "<peripherals><peripheral><name>P</name></peripheral></peripherals></device>"
)


class TestParse:
    def test_parse_file(self, sample_svd):
        device = svdxml.parse(sample_svd)
        assert device.name == "ACME32"
        assert len(device.peripherals) == 3

    def test_parse_str_path(self, sample_svd):
        assert svdxml.parse(str(sample_svd)).name == "ACME32"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            svdxml.parse(tmp_path / "nope.svd")

    def test_malformed_xml(self, tmp_path):
        svd_file = tmp_path / "broken.svd"
        svd_file.write_text("<device><name>X</name>")
        with pytest.raises(SvdParseError):
            svdxml.parse(svd_file)

    def test_invalid_device_is_not_wrapped(self, tmp_path):
        svd_file = tmp_path / "invalid.svd"
        svd_file.write_text('<device schemaVersion="1.3"><peripherals/></device>')
        with pytest.raises(SvdMissingElementError):
            svdxml.parse(svd_file)

    def test_debug_log(self, sample_svd, caplog):
        with caplog.at_level(logging.DEBUG, logger="svdxml"):
            svdxml.parse(sample_svd)
        assert any("ACME32" in r.getMessage() for r in caplog.records)


class TestParseString:
    @pytest.mark.parametrize("text", [MINIMAL_XML, MINIMAL_XML.encode()])
    def test_str_and_bytes(self, text):
        device = svdxml.parse_string(text)
        assert device.name == "TINY"
        assert device.schema_version == "1.1"

    def test_wrong_root(self):
        with pytest.raises(SvdParseError, match="peripheral"):
            svdxml.parse_string("<peripheral><name>P</name></peripheral>")

    def test_malformed(self):
        with pytest.raises(SvdParseError):
            svdxml.parse_string("<device>")

    def test_comments_are_ignored(self):
        text = MINIMAL_XML.replace("<name>TINY</name>", "<!-- c --><name>TINY</name><!-- d -->")
        device = svdxml.parse_string(text)
        assert device.name == "TINY"
        assert b"<!--" not in svdxml.encode(device)

    def test_comments_kept_by_parser_are_still_skipped(self):
        text = MINIMAL_XML.replace(
            "<peripheral>", "<!-- c --><peripheral>"
        )
        device = svdxml.parse_string(text, Options(remove_comments=False))
        assert [p.name for p in device.peripherals] == ["P"]


class TestParseElement:
    def test_parse_element(self):
        root = ET.fromstring(MINIMAL_XML)
        assert svdxml.parse_element(root).name == "TINY"

    def test_wrong_root(self):
        with pytest.raises(SvdParseError):
            svdxml.parse_element(ET.fromstring("<svd/>"))


class TestEncode:
    def test_declaration(self, sample_device):
        content = svdxml.encode(sample_device)
        assert content.startswith(b"<?xml")
        assert b"ACME32" in content

    def test_options(self, sample_device):
        content = svdxml.encode(
            sample_device, Options(pretty_print=False, xml_declaration=False)
        )
        assert content.startswith(b"<device")
        assert b"\n" not in content.strip()

    def test_schema_attributes(self, sample_device):
        root = ET.fromstring(svdxml.encode(sample_device))
        assert root.get("schemaVersion") == "1.3"
        assert (
            root.get("{http://www.w3.org/2001/XMLSchema-instance}noNamespaceSchemaLocation")
            == "CMSIS-SVD_Schema_1.3.xsd"
        )
        assert b'xmlns:xs="http://www.w3.org/2001/XMLSchema-instance"' in svdxml.encode(
            sample_device
        )

    def test_unmodelled_content_is_dropped(self, sample_device):
        content = svdxml.encode(sample_device)
        assert b"vendorExtensions" not in content
        assert b"<!--" not in content

    def test_string_round_trip(self, sample_device):
        assert svdxml.parse_string(svdxml.encode(sample_device)) == sample_device


class TestWrite:
    def test_write_and_reparse(self, sample_device, tmp_path):
        out = tmp_path / "out.svd"
        svdxml.write(sample_device, out)
        assert svdxml.parse(out) == sample_device

    def test_nothing_written_on_encode_error(self, sample_device, tmp_path):
        out = tmp_path / "out.svd"
        sample_device.peripherals[0].base_address = -1
        with pytest.raises(svdxml.SvdEncodeError):
            svdxml.write(sample_device, out)
        assert not out.exists()
