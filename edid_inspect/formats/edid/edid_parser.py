# edid_inspect/formats/edid/edid_parser.py
"""
Byte-level EDID parser: base block (EDID 1.x) plus the first CEA-861 extension.
"""

from __future__ import annotations

import struct
from typing import List, Optional

from loguru import logger

from .edid import (
    DESCRIPTOR_SIZE,
    EDID,
    EDID_BLOCK_SIZE,
    AudioBlock,
    CEAExtension,
    ColorManagement,
    DataBlock,
    Descriptor,
    DetailedTiming,
    DisplayParameters,
    DummyDescriptor,
    EDIDParseError,
    EstablishedTimings,
    Header,
    ProductName,
    RangeLimits,
    SerialNumber,
    ShortAudioDescriptor,
    ShortVideoDescriptor,
    SpeakerAllocationBlock,
    StandardTiming,
    TimingCodes,
    UnknownDataBlock,
    UnknownDescriptor,
    UnspecifiedText,
    VendorSpecificBlock,
    VideoBlock,
    WhitePoint,
)

EDID_MAGIC = b"\x00\xff\xff\xff\xff\xff\xff\x00"
DESCRIPTOR_OFFSETS = (54, 72, 90, 108)
EXTENSION_COUNT_OFFSET = 126

CEA_EXTENSION_TAG = 0x02

# Display descriptor tags (byte 3 of a non-timing descriptor)
TAG_SERIAL_NUMBER = 0xFF
TAG_UNSPECIFIED_TEXT = 0xFE
TAG_RANGE_LIMITS = 0xFD
TAG_PRODUCT_NAME = 0xFC
TAG_WHITE_POINT = 0xFB
TAG_STANDARD_TIMING = 0xFA
TAG_COLOR_MANAGEMENT = 0xF9
TAG_TIMING_CODES = 0xF8
TAG_ESTABLISHED_TIMINGS = 0xF7
TAG_DUMMY = 0x10

# CEA data block tag codes (bits 7-5 of the block header)
BLOCK_AUDIO = 1
BLOCK_VIDEO = 2
BLOCK_VENDOR_SPECIFIC = 3
BLOCK_SPEAKER_ALLOCATION = 4

_TEXT_DESCRIPTORS = {
    TAG_SERIAL_NUMBER: SerialNumber,
    TAG_UNSPECIFIED_TEXT: UnspecifiedText,
    TAG_PRODUCT_NAME: ProductName,
}

_EMPTY_DESCRIPTORS = {
    TAG_RANGE_LIMITS: RangeLimits,
    TAG_WHITE_POINT: WhitePoint,
    TAG_STANDARD_TIMING: StandardTiming,
    TAG_COLOR_MANAGEMENT: ColorManagement,
    TAG_TIMING_CODES: TimingCodes,
    TAG_ESTABLISHED_TIMINGS: EstablishedTimings,
    TAG_DUMMY: DummyDescriptor,
}


def _unpack(buf: memoryview, off: int, fmt: str) -> tuple[tuple[int, ...], int]:
    vals = struct.unpack_from(fmt, buf, off)
    return vals, off + struct.calcsize(fmt)


def _checksum_ok(block: memoryview) -> bool:
    return sum(block) % 256 == 0


def _decode_vendor(code: int) -> str:
    """Three 5-bit letters, 'A' == 1, packed big-endian into bytes 8-9."""
    return "".join(chr(((code >> shift) & 0x1F) + ord("@")) for shift in (10, 5, 0))


def _decode_text(raw: bytes) -> str:
    return raw.split(b"\x0a", 1)[0].decode("cp437").rstrip()


def _parse_header(buf: memoryview) -> Header:
    (vendor_code,), off = _unpack(buf, 8, ">H")
    (product, serial, week, year, version, revision), _ = _unpack(buf, off, "<HIBBBB")
    return Header(
        vendor=_decode_vendor(vendor_code),
        product=product,
        serial=serial,
        week=week,
        year=year,
        version=version,
        revision=revision,
    )


def _parse_display(buf: memoryview) -> DisplayParameters:
    (video_input, width, height, gamma, features), _ = _unpack(buf, 20, "<BBBBB")
    return DisplayParameters(
        video_input=video_input, width=width, height=height, features=features, gamma=gamma
    )


def _parse_detailed_timing(d: memoryview) -> DetailedTiming:
    (pixel_clock,), _ = _unpack(d, 0, "<H")
    return DetailedTiming(
        horizontal_active_pixels=d[2] | ((d[4] & 0xF0) << 4),
        vertical_active_lines=d[5] | ((d[7] & 0xF0) << 4),
        horizontal_size=d[12] | ((d[14] & 0xF0) << 4),
        vertical_size=d[13] | ((d[14] & 0x0F) << 8),
        pixel_clock=pixel_clock,
    )


def _parse_descriptor(d: memoryview) -> Descriptor:
    if d[0] or d[1]:
        return _parse_detailed_timing(d)
    tag = d[3]
    if tag in _TEXT_DESCRIPTORS:
        return _TEXT_DESCRIPTORS[tag](_decode_text(bytes(d[5:DESCRIPTOR_SIZE])))
    if tag in _EMPTY_DESCRIPTORS:
        return _EMPTY_DESCRIPTORS[tag]()
    return UnknownDescriptor(tag=tag, payload=bytes(d[5:DESCRIPTOR_SIZE]))


def _parse_audio_block(payload: memoryview) -> AudioBlock:
    descriptors: List[ShortAudioDescriptor] = []
    for off in range(0, len(payload) - len(payload) % 3, 3):
        b0, _, b2 = payload[off], payload[off + 1], payload[off + 2]
        descriptors.append(
            ShortAudioDescriptor(format=(b0 >> 3) & 0x0F, channels=(b0 & 0x07) + 1, detail=b2)
        )
    return AudioBlock(descriptors=descriptors)


def _parse_video_block(payload: memoryview) -> VideoBlock:
    descriptors: List[ShortVideoDescriptor] = []
    for b in payload:
        # 129..192 carry the native flag in bit 7; higher codes are plain VICs
        if 129 <= b <= 192:
            descriptors.append(ShortVideoDescriptor(cea861_index=b & 0x7F, native=True))
        else:
            descriptors.append(ShortVideoDescriptor(cea861_index=b, native=False))
    return VideoBlock(descriptors=descriptors)


def _parse_data_block(tag: int, payload: memoryview) -> DataBlock:
    if tag == BLOCK_AUDIO:
        return _parse_audio_block(payload)
    if tag == BLOCK_VIDEO:
        return _parse_video_block(payload)
    if tag == BLOCK_VENDOR_SPECIFIC:
        if len(payload) < 3:
            raise EDIDParseError("Vendor-specific block shorter than its identifier")
        return VendorSpecificBlock(identifier=bytes(payload[:3]), payload=bytes(payload[3:]))
    if tag == BLOCK_SPEAKER_ALLOCATION:
        if len(payload) < 1:
            raise EDIDParseError("Empty speaker allocation block")
        return SpeakerAllocationBlock(speakers=payload[0])
    return UnknownDataBlock(tag=tag, payload=bytes(payload))


def _parse_cea_extension(block: memoryview) -> CEAExtension:
    if not _checksum_ok(block):
        raise EDIDParseError("CEA extension checksum mismatch")
    (_, revision, dtd_offset, native_dtd), _ = _unpack(block, 0, "<BBBB")
    if dtd_offset and not 4 <= dtd_offset < EDID_BLOCK_SIZE:
        raise EDIDParseError(f"CEA DTD offset {dtd_offset} out of range")

    blocks: List[DataBlock] = []
    off = 4
    while dtd_offset and off < dtd_offset:
        tag, length = block[off] >> 5, block[off] & 0x1F
        end = off + 1 + length
        if end > dtd_offset:
            raise EDIDParseError(f"Data block at offset {off} overruns the DTD area")
        blocks.append(_parse_data_block(tag, block[off + 1 : end]))
        off = end

    descriptors: List[DetailedTiming] = []
    off = dtd_offset
    while dtd_offset and off + DESCRIPTOR_SIZE <= EDID_BLOCK_SIZE - 1:
        d = block[off : off + DESCRIPTOR_SIZE]
        if not (d[0] or d[1]):
            break
        descriptors.append(_parse_detailed_timing(d))
        off += DESCRIPTOR_SIZE

    return CEAExtension(
        revision=revision, native_dtd=native_dtd, blocks=blocks, descriptors=descriptors
    )


def parse_edid(buf: memoryview | bytes) -> EDID:
    """Parse an EDID buffer into an :class:`EDID` record.

    Only the first extension block is inspected, and only when it is a CEA-861
    block; other extension kinds are skipped.
    """
    buf = memoryview(buf)
    if len(buf) < EDID_BLOCK_SIZE:
        raise EDIDParseError(f"Buffer too small for EDID base block ({len(buf)} bytes)")
    if bytes(buf[:8]) != EDID_MAGIC:
        raise EDIDParseError("Invalid header magic; not EDID")
    base = buf[:EDID_BLOCK_SIZE]
    if not _checksum_ok(base):
        raise EDIDParseError("Base block checksum mismatch")

    descriptors = [_parse_descriptor(base[o : o + DESCRIPTOR_SIZE]) for o in DESCRIPTOR_OFFSETS]

    extension: Optional[CEAExtension] = None
    if base[EXTENSION_COUNT_OFFSET] > 0:
        block = buf[EDID_BLOCK_SIZE : 2 * EDID_BLOCK_SIZE]
        if len(block) < EDID_BLOCK_SIZE:
            raise EDIDParseError("Extension block truncated")
        if block[0] == CEA_EXTENSION_TAG:
            extension = _parse_cea_extension(block)
        else:
            logger.debug("Skipping non-CEA extension block (tag 0x{tag:02x})", tag=block[0])

    return EDID(
        header=_parse_header(base),
        display=_parse_display(base),
        descriptors=descriptors,
        extension=extension,
    )
