"""Shared fixtures: synthetic EDID buffers and records."""

import pytest
from loguru import logger

from edid_inspect.formats.edid.edid import (
    EDID,
    DetailedTiming,
    DisplayParameters,
    DummyDescriptor,
    Header,
)
from edid_samples import (
    build_base,
    build_cea,
    dtd_bytes,
    empty_descriptor,
    sample_cea_blocks,
    text_descriptor,
)


@pytest.fixture(autouse=True)
def _detach_log_sinks():
    """Drop sinks bound to captured streams once a test finishes."""
    yield
    logger.remove()


@pytest.fixture
def digital_edid_bytes():
    """Base block plus a CEA extension with every kind of data block."""
    base = build_base(extensions=1)
    cea = build_cea(blocks=sample_cea_blocks(), dtds=[dtd_bytes(1280, 720, 527, 296, 7425)])
    return base + cea


@pytest.fixture
def analog_edid_bytes():
    return build_base(video_input=0x0F, features=0x08, descriptors=[
        dtd_bytes(1024, 768, 300, 225, 6500),
        empty_descriptor(0x10),
        text_descriptor(0xFE, "Lab monitor"),
        empty_descriptor(0x0B),
    ])


@pytest.fixture
def minimal_record():
    """Hand-built record with no extension."""
    return EDID(
        header=Header(
            vendor="ACM", product=0x00AB, serial=0x1, week=1, year=30, version=1, revision=3
        ),
        display=DisplayParameters(video_input=0xA0, width=60, height=34, features=0x00),
        descriptors=[
            DetailedTiming(3840, 2160, 600, 340),
            DummyDescriptor(),
            DummyDescriptor(),
            DummyDescriptor(),
        ],
    )
