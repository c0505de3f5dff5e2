"""Tests for the text report builder."""

import io
from dataclasses import replace

import pytest
from rich.console import Console

from edid_inspect.formats.edid.edid import (
    CEAExtension,
    ColorManagement,
    DetailedTiming,
    DisplayParameters,
    EstablishedTimings,
    ProductName,
    RangeLimits,
    SerialNumber,
    StandardTiming,
    TimingCodes,
    UnknownDataBlock,
    UnknownDescriptor,
    UnspecifiedText,
    WhitePoint,
)
from edid_inspect.formats.edid.edid_parser import parse_edid
from edid_inspect.reporting.text_reporter import (
    build_report_lines,
    format_report,
    render_report,
)


EXPECTED_DIGITAL_REPORT = """\
Header:
  Vendor: ACM
  Year: 2015
  Week: 10
  Product: 1234
  Serial: deadbeef
  Version: 1.4

Display:
  Size: 52x29 cm
  Type: Digital
  Bits depth: 8 bpp
  Video interface: DisplayPort
  YCrCb 4:4:4: Supported
  YCrCb 4:2:2: Unsupported
  Standby: Supported
  Suspend: Supported
  Active-off: Supported

Descriptors:
  Detailed timing:
    Resolution: 1920x1080
    Size: 527x296 mm
  Serial Number: SN0001
  RangeLimits
  ProductName: ACME LCD

Extension:
  Underscan: Supported
  Basic audio: Supported
  YCbCr 4:4:4: Supported
  YCbCr 4:2:2: Supported

Blocks:
  Supported audio formats:
    LPCM 2 channels 16 bit 20 bit 24 bit
    AC3 6 channels max bitrate 640 kbps
  Supported video formats:
    16 (native)
    4
    31
  Vendor specific: 03 0c 00
  Speaker allocation: FL FR LFE FC
  Data block (tag 7): 05 40

Detailed timing descriptors:
  Resolution: 1280x720"""


def _section(lines, title):
    """Lines belonging to a top-level section, without the title."""
    start = lines.index(title) + 1
    end = start
    while end < len(lines) and lines[end] != "":
        end += 1
    return lines[start:end]


class TestFullReport:
    """Tests for complete reports built from parsed bytes."""

    @pytest.fixture
    def edid(self, digital_edid_bytes):
        return parse_edid(digital_edid_bytes)

    def test_digital_report(self, edid):
        """Test the whole report text."""
        assert format_report(edid) == EXPECTED_DIGITAL_REPORT

    def test_raw_mode_adds_dumps(self, edid):
        """Test hex/binary dumps of the source bytes."""
        lines = build_report_lines(edid, raw=True)
        display = lines[lines.index("Display:"):lines.index("Descriptors:")]
        assert display[-4:] == [
            "",
            "  Video input: a5 (10100101)",
            "  Features: ea (11101010)",
            "",
        ]
        assert "  native_dtd: 11110001" in _section(lines, "Extension:")

    def test_raw_mode_only_adds_lines(self, edid):
        """Test that raw mode keeps every decoded line."""
        plain = build_report_lines(edid)
        raw = build_report_lines(edid, raw=True)
        dumps = {"", "  Video input: a5 (10100101)", "  Features: ea (11101010)",
                 "  native_dtd: 11110001"}
        assert [line for line in raw if line not in dumps] == [
            line for line in plain if line not in dumps
        ]

    def test_deterministic(self, edid):
        """Test that rendering twice gives identical output."""
        assert format_report(edid, raw=True) == format_report(edid, raw=True)
        assert format_report(edid) == format_report(edid)

    def test_record_not_modified(self, edid, digital_edid_bytes):
        """Test that rendering leaves the record untouched."""
        format_report(edid, raw=True)
        assert edid == parse_edid(digital_edid_bytes)

    def test_analog_report(self, analog_edid_bytes):
        """Test the analog display section and the descriptor variants."""
        lines = build_report_lines(parse_edid(analog_edid_bytes))
        assert _section(lines, "Display:") == [
            "  Size: 52x29 cm",
            "  Type: Analog",
            "  Video white and sync levels: +0.7/-0.3 V",
            "  Blank-to-black setup (pedestal): Not set",
            "  Separate sync: Supported",
            "  Composite sync: Supported",
            "  Sync on green: Supported",
            "  VSync pulse must be serrated: Yes",
            "  Display type: RGB color",
            "  Standby: Unsupported",
            "  Suspend: Unsupported",
            "  Active-off: Unsupported",
        ]
        assert _section(lines, "Descriptors:") == [
            "  Detailed timing:",
            "    Resolution: 1024x768",
            "    Size: 300x225 mm",
            "  Dummy",
            "  Text: Lab monitor",
            "  Unknown: 0b",
        ]
        assert "Extension:" not in lines
        assert "Blocks:" not in lines


class TestScenarios:
    """End-to-end scenarios on hand-built records."""

    def test_digital_8bpp_undefined_interface(self, minimal_record):
        """Test video_input 0xA0."""
        lines = build_report_lines(minimal_record)
        display = _section(lines, "Display:")
        assert "  Type: Digital" in display
        assert "  Bits depth: 8 bpp" in display
        assert "  Video interface: Undefined" in display

    def test_analog_levels(self, minimal_record):
        """Test video_input 0x00."""
        record = replace(
            minimal_record,
            display=DisplayParameters(video_input=0x00, width=40, height=30, features=0x00),
        )
        display = _section(build_report_lines(record), "Display:")
        assert "  Type: Analog" in display
        assert "  Video white and sync levels: +0.7/-0.3 V" in display
        assert "  Display type: Monochrome or grayscale" in display

    def test_unrecognized_fields_render_raw_value(self, minimal_record):
        """Test reserved depth and undefined interface codes."""
        record = replace(
            minimal_record,
            display=DisplayParameters(video_input=0xF1, width=40, height=30, features=0x00),
        )
        display = _section(build_report_lines(record), "Display:")
        assert "  Bits depth: Unknown (112)" in display
        assert "  Video interface: Unknown (1)" in display

    def test_product_name_position(self, minimal_record):
        """Test that a product name keeps its slot in the list."""
        record = replace(
            minimal_record,
            descriptors=[
                SerialNumber("X1"),
                ProductName("ACME LCD"),
                RangeLimits(),
                DetailedTiming(800, 600, 200, 150),
            ],
        )
        assert _section(build_report_lines(record), "Descriptors:") == [
            "  Serial Number: X1",
            "  ProductName: ACME LCD",
            "  RangeLimits",
            "  Detailed timing:",
            "    Resolution: 800x600",
            "    Size: 200x150 mm",
        ]

    def test_every_descriptor_variant(self, minimal_record):
        """Test one line per payload-free variant."""
        record = replace(
            minimal_record,
            descriptors=[
                WhitePoint(),
                StandardTiming(),
                ColorManagement(),
                TimingCodes(),
                EstablishedTimings(),
                UnspecifiedText("hello"),
                UnknownDescriptor(tag=0x02),
            ],
        )
        assert _section(build_report_lines(record), "Descriptors:") == [
            "  WhitePoint",
            "  StandardTiming",
            "  ColorManagement",
            "  TimingCodes",
            "  EstablishedTimings",
            "  Text: hello",
            "  Unknown: 02",
        ]

    def test_extension_flags(self, minimal_record):
        """Test native_dtd with underscan and basic audio only."""
        record = replace(minimal_record, extension=CEAExtension(revision=3, native_dtd=0xC0))
        lines = build_report_lines(record)
        assert _section(lines, "Extension:") == [
            "  Underscan: Supported",
            "  Basic audio: Supported",
            "  YCbCr 4:4:4: Unsupported",
            "  YCbCr 4:2:2: Unsupported",
        ]
        # An extension without blocks or DTDs renders no further sections
        assert lines[-1] == "  YCbCr 4:2:2: Unsupported"

    def test_unknown_block_is_kept(self, minimal_record):
        """Test generic rendering of an undecoded block."""
        ext = CEAExtension(revision=3, native_dtd=0, blocks=[UnknownDataBlock(6, b"\x01")])
        lines = build_report_lines(replace(minimal_record, extension=ext))
        assert _section(lines, "Blocks:") == ["  Data block (tag 6): 01"]

    def test_no_extension(self, minimal_record):
        """Test that a missing extension produces no extension output."""
        lines = build_report_lines(minimal_record)
        assert lines[-1] == "  Dummy"
        assert not any(line.startswith("Extension") for line in lines)


class TestRenderReport:
    """Tests for writing the report to a console."""

    def test_writes_lines_verbatim(self, digital_edid_bytes):
        """Test that rich output matches the formatted text."""
        buf = io.StringIO()
        console = Console(file=buf, width=20, color_system=None)
        edid = parse_edid(digital_edid_bytes)
        render_report(edid, raw=True, console=console)
        assert buf.getvalue() == format_report(edid, raw=True) + "\n"

    def test_markup_not_interpreted(self, minimal_record):
        """Test that bracketed text is printed as-is."""
        record = replace(
            minimal_record,
            descriptors=[ProductName("[bold]X[/bold]")] + minimal_record.descriptors[1:],
        )
        buf = io.StringIO()
        render_report(record, console=Console(file=buf, color_system=None))
        assert "  ProductName: [bold]X[/bold]\n" in buf.getvalue()
