# edid_inspect/decoding/blocks.py
"""
CEA-861 data block decoders: audio, video, speaker allocation, vendor-specific.
"""
from __future__ import annotations

from typing import List, Optional, Tuple

from edid_inspect.decoding.fields import SUPPRESSED_AUDIO_FORMATS, audio_format_name
from edid_inspect.formats.edid.edid import (
    ShortAudioDescriptor,
    ShortVideoDescriptor,
    SpeakerAllocationBlock,
    UnknownDataBlock,
    VendorSpecificBlock,
)

# Canonical listing order, by position rather than by bit value.
SPEAKER_POSITIONS: Tuple[Tuple[int, str], ...] = (
    (SpeakerAllocationBlock.FRONT_LEFT_RIGHT, "FL FR"),
    (SpeakerAllocationBlock.LFE, "LFE"),
    (SpeakerAllocationBlock.FRONT_CENTER, "FC"),
    (SpeakerAllocationBlock.REAR_LEFT_RIGHT, "RL RR"),
    (SpeakerAllocationBlock.REAR_CENTER, "RC"),
    (SpeakerAllocationBlock.FRONT_LEFT_RIGHT_CENTER, "FLC FRC"),
    (SpeakerAllocationBlock.REAR_LEFT_RIGHT_CENTER, "RLC RRC"),
)

LPCM_BIT_DEPTHS: Tuple[Tuple[int, str], ...] = (
    (ShortAudioDescriptor.LPCM_16_BIT, "16 bit"),
    (ShortAudioDescriptor.LPCM_20_BIT, "20 bit"),
    (ShortAudioDescriptor.LPCM_24_BIT, "24 bit"),
)


def _hex(data: bytes) -> str:
    return " ".join(f"{b:02x}" for b in data)


def describe_audio_descriptor(sad: ShortAudioDescriptor) -> Optional[str]:
    """One report line for a SAD, or None for padding formats."""
    if sad.format in SUPPRESSED_AUDIO_FORMATS:
        return None
    parts = [f"{audio_format_name(sad.format)} {sad.channels} channels"]
    if sad.bitrate is not None:
        parts.append(f"max bitrate {sad.bitrate} kbps")
    depths = sad.bit_depths or 0
    parts.extend(label for bit, label in LPCM_BIT_DEPTHS if depths & bit)
    return " ".join(parts)


def describe_audio_descriptors(descriptors: List[ShortAudioDescriptor]) -> List[str]:
    lines = []
    for sad in descriptors:
        line = describe_audio_descriptor(sad)
        if line is not None:
            lines.append(line)
    return lines


def describe_video_descriptor(svd: ShortVideoDescriptor) -> str:
    return f"{svd.cea861_index}{' (native)' if svd.native else ''}"


def speaker_positions(speakers: int) -> List[str]:
    return [label for bit, label in SPEAKER_POSITIONS if speakers & bit]


def describe_speaker_allocation(block: SpeakerAllocationBlock) -> str:
    return " ".join(["Speaker allocation:"] + speaker_positions(block.speakers))


def describe_vendor_specific(block: VendorSpecificBlock) -> str:
    return f"Vendor specific: {_hex(block.identifier[:3])}"


def describe_unknown_block(block: UnknownDataBlock) -> str:
    dump = _hex(block.payload)
    return f"Data block (tag {block.tag}): {dump}" if dump else f"Data block (tag {block.tag})"
