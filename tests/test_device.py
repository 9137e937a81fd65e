"""Tests for the device root: parsing, encoding and register property resolution."""

from __future__ import annotations

import pytest

from svdxml import (
    Access,
    CpuName,
    Defaults,
    Device,
    Peripheral,
    Protection,
    SvdEncodeError,
    SvdKeyError,
    SvdMalformedValueError,
    SvdMissingAttributeError,
    SvdMissingElementError,
)
from svdxml.device import XSI_NAMESPACE

MINIMAL_XML = (
    '<device schemaVersion="1.3"><name>ACME32</name>'
    "<peripherals><peripheral/></peripherals></device>"
)


class TestParseRequired:
    def test_missing_name(self, xml):
        with pytest.raises(SvdMissingElementError) as exc_info:
            Device.parse(xml('<device schemaVersion="1.3"><peripherals/></device>'))
        assert exc_info.value.name == "name"

    def test_missing_peripherals(self, xml):
        with pytest.raises(SvdMissingElementError) as exc_info:
            Device.parse(xml('<device schemaVersion="1.3"><name>X</name></device>'))
        assert exc_info.value.name == "peripherals"

    def test_missing_schema_version(self, xml):
        with pytest.raises(SvdMissingAttributeError) as exc_info:
            Device.parse(xml("<device><name>X</name><peripherals/></device>"))
        assert exc_info.value.name == "schemaVersion"

    def test_malformed_address_unit_bits(self, xml):
        with pytest.raises(SvdMalformedValueError):
            Device.parse(
                xml(
                    '<device schemaVersion="1.3"><name>X</name>'
                    "<addressUnitBits>eight</addressUnitBits><peripherals/></device>"
                )
            )

    def test_empty_peripherals(self, xml):
        device = Device.parse(xml('<device schemaVersion="1.3"><name>X</name><peripherals/></device>'))
        assert device.peripherals == []

    def test_peripheral_failure_fails_device(self, xml):
        with pytest.raises(SvdMalformedValueError) as exc_info:
            Device.parse(
                xml(
                    """
                    <device schemaVersion="1.3">
                      <name>X</name>
                      <peripherals>
                        <peripheral><name>A</name></peripheral>
                        <peripheral><name>B</name><baseAddress>nowhere</baseAddress></peripheral>
                      </peripherals>
                    </device>
                    """
                )
            )
        assert exc_info.value.location == "/device/peripherals/peripheral[2]/baseAddress"

    def test_malformed_cpu_fails_device(self, xml):
        with pytest.raises(SvdMissingElementError):
            Device.parse(
                xml(
                    '<device schemaVersion="1.3"><name>X</name>'
                    "<cpu><name>CM4</name></cpu><peripherals/></device>"
                )
            )


class TestMinimalDevice:
    def test_parse(self, xml):
        device = Device.parse(xml(MINIMAL_XML))
        assert device.name == "ACME32"
        assert device.schema_version == "1.3"
        assert device.cpu is None
        assert device.description is None
        assert device.version is None
        assert device.address_unit_bits is None
        assert device.width is None
        assert device.peripherals == [Peripheral()]
        assert device.defaults == Defaults()

    def test_encode(self, xml):
        element = Device.parse(xml(MINIMAL_XML)).encode()
        assert element.tag == "device"
        assert element.get("schemaVersion") == "1.3"
        assert element.findtext("name") == "ACME32"
        peripherals = element.find("peripherals")
        assert peripherals is not None
        assert [c.tag for c in peripherals] == ["peripheral"]
        assert [c.tag for c in element] == ["name", "peripherals"]

    def test_encode_schema_attributes(self, xml):
        element = Device.parse(xml(MINIMAL_XML)).encode()
        assert element.nsmap["xs"] == XSI_NAMESPACE
        assert (
            element.get(f"{{{XSI_NAMESPACE}}}noNamespaceSchemaLocation")
            == "CMSIS-SVD_Schema_1.3.xsd"
        )


class TestDescriptionAndAddressUnitBits:
    def test_description_does_not_become_address_unit_bits(self, xml):
        device = Device.parse(
            xml(
                '<device schemaVersion="1.3"><name>X</name>'
                "<description>Widget</description><peripherals/></device>"
            )
        )
        assert device.description == "Widget"

        element = device.encode()
        assert element.findtext("description") == "Widget"
        assert element.find("addressUnitBits") is None

    def test_address_unit_bits_comes_from_its_own_field(self):
        device = Device(name="X", schema_version="1.1", description="Widget", address_unit_bits=8)
        element = device.encode()
        assert element.findtext("addressUnitBits") == "8"
        assert element.findtext("description") == "Widget"

    def test_width_is_parsed_and_encoded(self, xml):
        device = Device.parse(
            xml('<device schemaVersion="1.3"><name>X</name><width>32</width><peripherals/></device>')
        )
        assert device.width == 32
        assert device.encode().findtext("width") == "32"

    def test_programmatic_width(self):
        element = Device(name="X", schema_version="1.3", width=64).encode()
        assert element.findtext("width") == "64"


class TestSampleDevice:
    def test_metadata(self, sample_device):
        assert sample_device.name == "ACME32"
        assert sample_device.schema_version == "1.3"
        assert sample_device.vendor == "Acme Semiconductor"
        assert sample_device.vendor_id == "ACME"
        assert sample_device.series == "ACME32F"
        assert sample_device.version == "1.2"
        assert sample_device.address_unit_bits == 8
        assert sample_device.width == 32

    def test_cpu(self, sample_device):
        assert sample_device.cpu is not None
        assert sample_device.cpu.name is CpuName.CM4
        assert sample_device.cpu.fpu_present is True

    def test_device_defaults(self, sample_device):
        assert sample_device.defaults == Defaults(
            size=32, access=Access.READ_WRITE, reset_value=0, reset_mask=0xFFFFFFFF
        )

    def test_peripheral_order(self, sample_device):
        assert [p.name for p in sample_device.peripherals] == ["TIMER0", "TIMER1", "GPIO"]

    def test_derived_peripheral_is_kept_as_declared(self, sample_device):
        timer1 = sample_device.get_peripheral("TIMER1")
        assert timer1.derived_from == "TIMER0"
        assert timer1.registers is None

    def test_round_trip(self, sample_device):
        assert Device.parse(sample_device.encode()) == sample_device

    def test_encoded_peripheral_order(self, sample_device):
        element = sample_device.encode()
        names = [p.findtext("name") for p in element.find("peripherals")]
        assert names == ["TIMER0", "TIMER1", "GPIO"]

    def test_encode_order(self, sample_device):
        element = sample_device.encode()
        assert [c.tag for c in element] == [
            "name",
            "version",
            "description",
            "vendor",
            "vendorID",
            "series",
            "addressUnitBits",
            "width",
            "size",
            "access",
            "resetValue",
            "resetMask",
            "cpu",
            "peripherals",
        ]

    def test_unmodelled_elements_are_dropped(self, sample_device):
        assert sample_device.encode().find("vendorExtensions") is None

    def test_encode_does_not_modify_device(self, sample_svd):
        import svdxml

        device = svdxml.parse(sample_svd)
        device.encode()
        assert device == svdxml.parse(sample_svd)

    def test_encode_failure_aborts(self, sample_device):
        sample_device.peripherals[1].base_address = -1
        with pytest.raises(SvdEncodeError, match="baseAddress"):
            sample_device.encode()


class TestEffectiveDefaults:
    def test_peripheral_level(self, sample_device):
        effective = sample_device.effective_defaults("TIMER0")
        assert effective.size == 16
        assert effective.access is Access.READ_WRITE
        assert effective.reset_mask == 0xFFFFFFFF

    def test_register_level(self, sample_device):
        effective = sample_device.effective_defaults("TIMER0", "SR")
        assert effective.access is Access.READ_ONLY
        assert effective.size == 16
        assert effective.reset_value == 0

    def test_through_cluster(self, sample_device):
        effective = sample_device.effective_defaults("TIMER0", "CC", "VAL")
        assert effective.size == 32
        assert effective.reset_value == 0xFFFF
        assert effective.access is Access.READ_WRITE

    def test_undeclared_everywhere(self, sample_device):
        assert sample_device.effective_defaults("TIMER0", "CR").protection is None
        assert sample_device.effective_defaults("GPIO").protection is Protection.SECURE

    def test_levels_keep_only_own_values(self, sample_device):
        sample_device.effective_defaults("TIMER0", "SR")
        register = sample_device.get_peripheral("TIMER0").get("SR")
        assert register is not None
        assert register.defaults == Defaults(access=Access.READ_ONLY)

    @pytest.mark.parametrize(
        "path",
        [
            ("UART0",),
            ("TIMER0", "NOPE"),
            ("TIMER0", "CR", "EN"),
            ("TIMER0", "CC", "NOPE"),
        ],
    )
    def test_unknown_path(self, sample_device, path):
        with pytest.raises(SvdKeyError):
            sample_device.effective_defaults(*path)
