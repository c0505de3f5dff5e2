# edid_inspect/formats/edid/edid.py
"""
EDID record structures and exceptions.

The record is produced once by the byte-level parser and only read afterwards;
every sequence keeps the order in which it appeared in the source bytes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

EDID_BLOCK_SIZE = 128
DESCRIPTOR_SIZE = 18


class EDIDParseError(Exception):
    """Raised when an EDID buffer is malformed."""


@dataclass
class Header:
    vendor: str
    product: int
    serial: int
    week: int
    year: int  # offset from 1990
    version: int
    revision: int

    @property
    def manufacture_year(self) -> int:
        return 1990 + self.year


@dataclass
class DisplayParameters:
    video_input: int
    width: int  # cm
    height: int  # cm
    features: int
    gamma: int = 0xFF

    @property
    def is_digital(self) -> bool:
        return bool(self.video_input & 0x80)


# ============================================================================
# Descriptors (18-byte slots)
# ============================================================================


@dataclass
class DetailedTiming:
    horizontal_active_pixels: int
    vertical_active_lines: int
    horizontal_size: int  # mm
    vertical_size: int  # mm
    pixel_clock: int = 0  # 10 kHz units


@dataclass
class DummyDescriptor:
    """Filler slot (tag 0x10)."""


@dataclass
class SerialNumber:
    text: str


@dataclass
class UnspecifiedText:
    text: str


@dataclass
class ProductName:
    text: str


@dataclass
class RangeLimits:
    pass


@dataclass
class WhitePoint:
    pass


@dataclass
class StandardTiming:
    pass


@dataclass
class ColorManagement:
    pass


@dataclass
class TimingCodes:
    pass


@dataclass
class EstablishedTimings:
    pass


@dataclass
class UnknownDescriptor:
    """Display descriptor whose tag byte is not recognized."""

    tag: int
    payload: bytes = b""


Descriptor = Union[
    DummyDescriptor,
    DetailedTiming,
    SerialNumber,
    UnspecifiedText,
    RangeLimits,
    ProductName,
    WhitePoint,
    StandardTiming,
    ColorManagement,
    TimingCodes,
    EstablishedTimings,
    UnknownDescriptor,
]


# ============================================================================
# CEA-861 extension
# ============================================================================


@dataclass
class ShortAudioDescriptor:
    """Three-byte SAD: format code, channel count and a format-dependent byte."""

    format: int
    channels: int
    detail: int = 0

    LPCM = 1
    AC3 = 2
    MPEG1 = 3
    MP3 = 4
    MPEG2 = 5
    AAC = 6
    DTS = 7
    ATRAC = 8
    DSD = 9
    DDPLUS = 10
    DTSHD = 11
    TRUEHD = 12
    DSTAUDIO = 13
    WMAPRO = 14
    RESERVED = 15

    LPCM_16_BIT = 0x01
    LPCM_20_BIT = 0x02
    LPCM_24_BIT = 0x04

    @property
    def bit_depths(self) -> Optional[int]:
        """LPCM bit-depth mask; None for every other format."""
        if self.format != self.LPCM:
            return None
        return self.detail & 0x07

    @property
    def bitrate(self) -> Optional[int]:
        """Maximum bitrate in kbps for AC-3 through ATRAC; None otherwise."""
        if self.AC3 <= self.format <= self.ATRAC:
            return self.detail * 8
        return None


@dataclass
class ShortVideoDescriptor:
    cea861_index: int
    native: bool = False


@dataclass
class AudioBlock:
    descriptors: List[ShortAudioDescriptor] = field(default_factory=list)


@dataclass
class VideoBlock:
    descriptors: List[ShortVideoDescriptor] = field(default_factory=list)


@dataclass
class VendorSpecificBlock:
    identifier: bytes
    payload: bytes = b""


@dataclass
class SpeakerAllocationBlock:
    speakers: int

    FRONT_LEFT_RIGHT = 0x01
    LFE = 0x02
    FRONT_CENTER = 0x04
    REAR_LEFT_RIGHT = 0x08
    REAR_CENTER = 0x10
    FRONT_LEFT_RIGHT_CENTER = 0x20
    REAR_LEFT_RIGHT_CENTER = 0x40


@dataclass
class UnknownDataBlock:
    tag: int
    payload: bytes = b""


DataBlock = Union[
    AudioBlock, VideoBlock, VendorSpecificBlock, SpeakerAllocationBlock, UnknownDataBlock
]


@dataclass
class CEAExtension:
    revision: int
    native_dtd: int
    blocks: List[DataBlock] = field(default_factory=list)
    descriptors: List[DetailedTiming] = field(default_factory=list)

    DTD_UNDERSCAN = 0x80
    DTD_BASIC_AUDIO = 0x40
    DTD_YUV444 = 0x20
    DTD_YUV422 = 0x10


@dataclass
class EDID:
    header: Header
    display: DisplayParameters
    descriptors: List[Descriptor]
    extension: Optional[CEAExtension] = None
