"""
JSON reporting utilities (optional).
"""

from __future__ import annotations

import json
from typing import Any, Dict

from edid_inspect.formats.edid.edid import EDID
from edid_inspect.observability import to_dict


def to_json_dict(edid: EDID) -> Dict[str, Any]:
    """Convert a parsed EDID record to a JSON-serializable dict."""
    return to_dict(edid)


def write_json(edid: EDID, path: str) -> None:
    """Write the record to a file as pretty JSON."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(to_json_dict(edid), f, indent=2)
