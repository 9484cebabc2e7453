"""Router-related schemas for the graph server API."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from ..graph.loader import LoadLevel


class RouterInfo(BaseModel):
    """A registered router and the level its graph was loaded at."""

    router_id: str = Field(..., description="The router id")
    load_level: Optional[LoadLevel] = Field(
        None, description="Load level the graph was last loaded at"
    )


class RouterList(BaseModel):
    """All registered routers."""

    routers: List[RouterInfo] = Field(
        default_factory=list, description="Registered routers, sorted by id"
    )


class EvictAllResponse(BaseModel):
    """Result of evicting every router."""

    evicted: int = Field(..., description="Number of graphs evicted")


class ReloadResponse(BaseModel):
    """Result of reloading every router."""

    success: bool = Field(..., description="Whether every graph reloaded successfully")
    router_ids: List[str] = Field(
        default_factory=list, description="Router ids registered after the reload"
    )


class LoadLevelBody(BaseModel):
    """Current or requested load level."""

    load_level: LoadLevel = Field(..., description="Load level")
