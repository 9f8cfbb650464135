"""The scalar value type table bundled with the package."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional, Union

from protoc_doc.models import ScalarValue
from protoc_doc.serialization import from_dict

_log = logging.getLogger(__name__)

SCALARS_PATH = Path(__file__).parent / "resources" / "scalars.json"


def load_scalars(path: Union[str, Path] = SCALARS_PATH) -> Optional[List[ScalarValue]]:
    """Load the scalar value table.

    Returns None (and logs a warning) if the file cannot be read or decoded.
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return [from_dict(ScalarValue, entry) for entry in data]
    except (OSError, ValueError, TypeError, AttributeError) as e:
        _log.warning("Could not load scalar value types from %s: %s", path, e)
        return None
