# edid_inspect/analysis/analyzer.py
"""
EDID analyzer: loads a file and hands its bytes to the byte-level parser.
"""
from __future__ import annotations

from loguru import logger

from edid_inspect.formats.edid.edid import EDID
from edid_inspect.formats.edid.edid_parser import parse_edid
from edid_inspect.io.file_reader import MAX_EDID_SIZE, LocalFileSource
from edid_inspect.observability import Timer


class EDIDAnalyzer:
    """Loads one EDID file and returns the structured record."""

    def __init__(self, path: str, *, max_size: int = MAX_EDID_SIZE):
        self.path = path
        self.src = LocalFileSource(path, max_size=max_size)

    def run(self) -> EDID:
        """
        Read the file and parse it.

        Raises:
            OSError: The file could not be opened or mapped.
            EDIDParseError: The bytes are not a valid EDID record.
        """
        # The mapping is released before parsing starts.
        with self.src.open() as mf:
            data = bytes(mf.view)
        logger.debug("Loaded {size} bytes from {path}", size=len(data), path=self.path)

        with Timer("parse") as t_parse:
            edid = parse_edid(data)

        logger.debug(
            "EDID parsed in {ms:.2f}ms ({n} descriptors, extension={ext})",
            ms=t_parse.duration_ms,
            n=len(edid.descriptors),
            ext=edid.extension is not None,
        )
        return edid
