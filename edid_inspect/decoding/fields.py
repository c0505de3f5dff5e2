# edid_inspect/decoding/fields.py
"""
Bitfield decoders for the EDID base block and the CEA-861 extension header.

Every decoder is a pure function over an 8-bit value. A sub-value missing from
its table is returned as :class:`Unrecognized` carrying the raw masked bits, so
the report can tell a known label apart from a code nobody has defined yet.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple, Union

from edid_inspect.formats.edid.edid import CEAExtension, ShortAudioDescriptor


@dataclass(frozen=True)
class Unrecognized:
    """A masked sub-value that has no entry in its table."""

    raw: int

    def __str__(self) -> str:
        return f"Unknown ({self.raw})"


Label = Union[str, Unrecognized]

DIGITAL_INPUT = 0x80

BIT_DEPTH_MASK = 0x70
VIDEO_INTERFACE_MASK = 0x0F
WHITE_SYNC_LEVELS_MASK = 0x60
ANALOG_DISPLAY_TYPE_MASK = 0x18

# 0x00 is the "undefined" depth; it is a known value, not an unrecognized one.
BITS_PER_PIXEL: Dict[int, int] = {
    0x00: 0,
    0x10: 6,
    0x20: 8,
    0x30: 10,
    0x40: 12,
    0x50: 14,
    0x60: 16,
}

VIDEO_INTERFACES: Dict[int, str] = {
    0x0: "Undefined",
    0x2: "HDMIa",
    0x3: "HDMIb",
    0x4: "MDDI",
    0x5: "DisplayPort",
}

WHITE_SYNC_LEVELS: Dict[int, str] = {
    0x00: "+0.7/-0.3 V",
    0x20: "+0.714/-0.286 V",
    0x40: "+1.0/-0.4 V",
    0x60: "+0.7/0 V",
}

ANALOG_DISPLAY_TYPES: Dict[int, str] = {
    0x00: "Monochrome or grayscale",
    0x08: "RGB color",
    0x10: "Non-RGB color",
    0x18: "Undefined",
}

AUDIO_FORMATS: Dict[int, str] = {
    ShortAudioDescriptor.LPCM: "LPCM",
    ShortAudioDescriptor.AC3: "AC3",
    ShortAudioDescriptor.MPEG1: "MPEG1",
    ShortAudioDescriptor.MP3: "MP3",
    ShortAudioDescriptor.MPEG2: "MPEG2",
    ShortAudioDescriptor.AAC: "AAC",
    ShortAudioDescriptor.DTS: "DTS",
    ShortAudioDescriptor.ATRAC: "ATRAC",
    ShortAudioDescriptor.DSD: "DSD",
    ShortAudioDescriptor.DDPLUS: "DD+",
    ShortAudioDescriptor.DTSHD: "DTS-HD",
    ShortAudioDescriptor.TRUEHD: "Dolby TrueHD",
    ShortAudioDescriptor.DSTAUDIO: "DST Audio",
    ShortAudioDescriptor.WMAPRO: "WMA Pro",
}

# Format codes treated as padding in an audio block.
SUPPRESSED_AUDIO_FORMATS = frozenset({0, ShortAudioDescriptor.RESERVED})

Field = Tuple[str, Label]


def supported(v: bool) -> str:
    return "Supported" if v else "Unsupported"


def yes_or_no(v: bool) -> str:
    return "Yes" if v else "No"


def is_digital(video_input: int) -> bool:
    return bool(video_input & DIGITAL_INPUT)


# ---------------------------------------------------------------------------
# video_input, digital branch
# ---------------------------------------------------------------------------


def bits_per_pixel(video_input: int) -> Union[int, Unrecognized]:
    """Colour bit depth in bits per primary; 0 means undefined."""
    bits = video_input & BIT_DEPTH_MASK
    if bits in BITS_PER_PIXEL:
        return BITS_PER_PIXEL[bits]
    return Unrecognized(bits)


def bit_depth_label(video_input: int) -> Label:
    depth = bits_per_pixel(video_input)
    if isinstance(depth, Unrecognized):
        return depth
    return "Undefined" if depth == 0 else f"{depth} bpp"


def video_interface(video_input: int) -> Label:
    code = video_input & VIDEO_INTERFACE_MASK
    return VIDEO_INTERFACES.get(code, Unrecognized(code))


# ---------------------------------------------------------------------------
# video_input, analog branch
# ---------------------------------------------------------------------------


def white_sync_levels(video_input: int) -> str:
    # The table covers all four values of the mask.
    return WHITE_SYNC_LEVELS[video_input & WHITE_SYNC_LEVELS_MASK]


def pedestal(video_input: int) -> str:
    return "Expected" if video_input & 0x10 else "Not set"


def analog_display_type(features: int) -> str:
    return ANALOG_DISPLAY_TYPES[features & ANALOG_DISPLAY_TYPE_MASK]


# ---------------------------------------------------------------------------
# Whole-byte decoders, one per branch
# ---------------------------------------------------------------------------


def decode_digital_input(video_input: int) -> List[Field]:
    return [
        ("Bits depth", bit_depth_label(video_input)),
        ("Video interface", video_interface(video_input)),
    ]


def decode_analog_input(video_input: int) -> List[Field]:
    return [
        ("Video white and sync levels", white_sync_levels(video_input)),
        ("Blank-to-black setup (pedestal)", pedestal(video_input)),
        ("Separate sync", supported(bool(video_input & 0x08))),
        ("Composite sync", supported(bool(video_input & 0x04))),
        ("Sync on green", supported(bool(video_input & 0x02))),
        ("VSync pulse must be serrated", yes_or_no(bool(video_input & 0x01))),
    ]


def decode_digital_features(features: int) -> List[Field]:
    """Bits 4-3 of ``features`` as digital colour encodings."""
    return [
        ("YCrCb 4:4:4", supported(bool(features & 0x08))),
        ("YCrCb 4:2:2", supported(bool(features & 0x10))),
    ]


def decode_analog_features(features: int) -> List[Field]:
    """Bits 4-3 of ``features`` as the analog display colour type."""
    return [("Display type", analog_display_type(features))]


def decode_power_management(features: int) -> List[Field]:
    return [
        ("Standby", supported(bool(features & 0x80))),
        ("Suspend", supported(bool(features & 0x40))),
        ("Active-off", supported(bool(features & 0x20))),
    ]


def decode_display(video_input: int, features: int) -> List[Field]:
    """Branch on bit 7 of ``video_input`` once, then apply that branch's tables."""
    if is_digital(video_input):
        fields = [("Type", "Digital")]
        fields += decode_digital_input(video_input)
        fields += decode_digital_features(features)
    else:
        fields = [("Type", "Analog")]
        fields += decode_analog_input(video_input)
        fields += decode_analog_features(features)
    return fields + decode_power_management(features)


# ---------------------------------------------------------------------------
# CEA-861 extension
# ---------------------------------------------------------------------------


def decode_native_dtd(native_dtd: int) -> List[Field]:
    return [
        ("Underscan", supported(bool(native_dtd & CEAExtension.DTD_UNDERSCAN))),
        ("Basic audio", supported(bool(native_dtd & CEAExtension.DTD_BASIC_AUDIO))),
        ("YCbCr 4:4:4", supported(bool(native_dtd & CEAExtension.DTD_YUV444))),
        ("YCbCr 4:2:2", supported(bool(native_dtd & CEAExtension.DTD_YUV422))),
    ]


def audio_format_name(code: int) -> Label:
    return AUDIO_FORMATS.get(code, Unrecognized(code))
