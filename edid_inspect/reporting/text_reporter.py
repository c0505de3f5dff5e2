# edid_inspect/reporting/text_reporter.py
"""
Plain-text EDID report: one linear walk over the record, rendered line by line.
"""
from __future__ import annotations

from typing import Iterable, List, Optional

from rich.console import Console

from edid_inspect.decoding.blocks import (
    describe_audio_descriptors,
    describe_speaker_allocation,
    describe_unknown_block,
    describe_vendor_specific,
    describe_video_descriptor,
)
from edid_inspect.decoding.fields import Field, decode_display, decode_native_dtd
from edid_inspect.formats.edid.edid import (
    EDID,
    AudioBlock,
    CEAExtension,
    ColorManagement,
    DataBlock,
    Descriptor,
    DetailedTiming,
    DisplayParameters,
    DummyDescriptor,
    EstablishedTimings,
    Header,
    ProductName,
    RangeLimits,
    SerialNumber,
    SpeakerAllocationBlock,
    StandardTiming,
    TimingCodes,
    UnknownDescriptor,
    UnspecifiedText,
    VendorSpecificBlock,
    VideoBlock,
    WhitePoint,
)

INDENT = 2

# Payload-free descriptors are reported by name only.
_BARE_DESCRIPTORS = {
    DummyDescriptor: "Dummy",
    RangeLimits: "RangeLimits",
    WhitePoint: "WhitePoint",
    StandardTiming: "StandardTiming",
    ColorManagement: "ColorManagement",
    TimingCodes: "TimingCodes",
    EstablishedTimings: "EstablishedTimings",
}


class ReportBuilder:
    """Accumulates report lines with depth-based indentation."""

    def __init__(self, *, raw: bool = False):
        self.raw = raw
        self.lines: List[str] = []

    def line(self, depth: int, text: str) -> None:
        self.lines.append(f"{' ' * (INDENT * depth)}{text}")

    def fields(self, depth: int, fields: Iterable[Field]) -> None:
        for name, value in fields:
            self.line(depth, f"{name}: {value}")

    def blank(self) -> None:
        self.lines.append("")

    # -- sections ----------------------------------------------------------

    def header(self, h: Header) -> None:
        self.line(0, "Header:")
        self.line(1, f"Vendor: {h.vendor}")
        self.line(1, f"Year: {h.manufacture_year}")
        self.line(1, f"Week: {h.week}")
        self.line(1, f"Product: {h.product:04x}")
        self.line(1, f"Serial: {h.serial:08x}")
        self.line(1, f"Version: {h.version}.{h.revision}")

    def display(self, d: DisplayParameters) -> None:
        self.line(0, "Display:")
        self.line(1, f"Size: {d.width}x{d.height} cm")
        self.fields(1, decode_display(d.video_input, d.features))
        if self.raw:
            self.blank()
            self.line(1, f"Video input: {d.video_input:02x} ({d.video_input:08b})")
            self.line(1, f"Features: {d.features:02x} ({d.features:08b})")

    def detailed_timing(self, depth: int, dt: DetailedTiming) -> None:
        self.line(depth, "Detailed timing:")
        self.line(depth + 1, f"Resolution: {dt.horizontal_active_pixels}x{dt.vertical_active_lines}")
        self.line(depth + 1, f"Size: {dt.horizontal_size}x{dt.vertical_size} mm")

    def descriptor(self, depth: int, d: Descriptor) -> None:
        if isinstance(d, DetailedTiming):
            self.detailed_timing(depth, d)
        elif isinstance(d, SerialNumber):
            self.line(depth, f"Serial Number: {d.text}")
        elif isinstance(d, UnspecifiedText):
            self.line(depth, f"Text: {d.text}")
        elif isinstance(d, ProductName):
            self.line(depth, f"ProductName: {d.text}")
        elif isinstance(d, UnknownDescriptor):
            self.line(depth, f"Unknown: {d.tag:02x}")
        elif type(d) in _BARE_DESCRIPTORS:
            self.line(depth, _BARE_DESCRIPTORS[type(d)])
        else:
            self.line(depth, f"Unknown: {d!r}")

    def descriptors(self, descriptors: List[Descriptor]) -> None:
        self.line(0, "Descriptors:")
        for d in descriptors:
            self.descriptor(1, d)

    def data_block(self, depth: int, block: DataBlock) -> None:
        if isinstance(block, AudioBlock):
            self.line(depth, "Supported audio formats:")
            for text in describe_audio_descriptors(block.descriptors):
                self.line(depth + 1, text)
        elif isinstance(block, VideoBlock):
            self.line(depth, "Supported video formats:")
            for svd in block.descriptors:
                self.line(depth + 1, describe_video_descriptor(svd))
        elif isinstance(block, VendorSpecificBlock):
            self.line(depth, describe_vendor_specific(block))
        elif isinstance(block, SpeakerAllocationBlock):
            self.line(depth, describe_speaker_allocation(block))
        else:
            self.line(depth, describe_unknown_block(block))

    def extension(self, x: CEAExtension) -> None:
        self.line(0, "Extension:")
        self.fields(1, decode_native_dtd(x.native_dtd))
        if self.raw:
            self.line(1, f"native_dtd: {x.native_dtd:08b}")
        if x.blocks:
            self.blank()
            self.line(0, "Blocks:")
            for block in x.blocks:
                self.data_block(1, block)
        if x.descriptors:
            self.blank()
            self.line(0, "Detailed timing descriptors:")
            for dt in x.descriptors:
                self.line(1, f"Resolution: {dt.horizontal_active_pixels}x{dt.vertical_active_lines}")

    def build(self, edid: EDID) -> List[str]:
        self.header(edid.header)
        self.blank()
        self.display(edid.display)
        self.blank()
        self.descriptors(edid.descriptors)
        if edid.extension is not None:
            self.blank()
            self.extension(edid.extension)
        return self.lines


def build_report_lines(edid: EDID, raw: bool = False) -> List[str]:
    """Decode ``edid`` into report lines; the record is not modified."""
    return ReportBuilder(raw=raw).build(edid)


def format_report(edid: EDID, raw: bool = False) -> str:
    return "\n".join(build_report_lines(edid, raw=raw))


def render_report(edid: EDID, raw: bool = False, console: Optional[Console] = None) -> None:
    """Write the report for ``edid`` to ``console`` (stdout by default).

    Args:
        edid: Parsed EDID record.
        raw: Also dump the source bytes in hex and binary next to decoded fields.
        console: Output sink; markup, highlighting and wrapping are disabled
            per line so the text is emitted verbatim.
    """
    out = console or Console()
    for line in build_report_lines(edid, raw=raw):
        out.print(line, markup=False, highlight=False, emoji=False, soft_wrap=True)
