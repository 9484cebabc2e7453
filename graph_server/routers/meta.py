from __future__ import annotations

import toml
from pathlib import Path
from typing import Dict, Any

from fastapi import APIRouter, Depends

from ..graph.registry import GraphRegistry
from .routers import get_registry

router = APIRouter(tags=["Meta"])


def get_version() -> str:
    """Get version from pyproject.toml."""
    try:
        pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
        if pyproject_path.exists():
            data = toml.load(pyproject_path)
            return data.get("project", {}).get("version", "unknown")
    except (OSError, toml.TomlDecodeError):
        pass
    return "unknown"


@router.get("/info")
def get_info(registry: GraphRegistry = Depends(get_registry)) -> Dict[str, Any]:
    """Get server information and registry state."""
    return {
        "version": get_version(),
        "load_level": registry.load_level.value,
        "default_router_id": registry.default_router_id,
        "routers": len(registry),
    }


@router.get("/ok")
async def health_check() -> Dict[str, Any]:
    """Basic health check endpoint."""
    return {"ok": True, "status": "healthy"}
