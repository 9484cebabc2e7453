"""Router id validation."""

from __future__ import annotations

import re
from typing import Any

# Router ids may contain alphanumeric characters, underscores and dashes only,
# so they can never carry a meaning for the filesystem or a URL.
ROUTER_ID_PATTERN = re.compile(r"[A-Za-z0-9_-]*")


def is_legal_router_id(router_id: Any) -> bool:
    """Return True if ``router_id`` is a legal router id.

    The empty string is legal and denotes the default router.
    """
    if not isinstance(router_id, str):
        return False
    return ROUTER_ID_PATTERN.fullmatch(router_id) is not None
