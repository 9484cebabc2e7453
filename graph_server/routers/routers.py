"""Administrative API for registering, reloading and evicting router graphs.

Endpoints are plain functions so FastAPI runs the blocking registry calls in
its threadpool.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from ..graph.ids import is_legal_router_id
from ..graph.registry import GraphRegistry
from ..schemas import (
    ErrorResponse,
    EvictAllResponse,
    LoadLevelBody,
    ReloadResponse,
    RouterInfo,
    RouterList,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Routers"])


def get_registry(request: Request) -> GraphRegistry:
    """Return the graph registry attached to the application."""
    return request.app.state.graph_registry


def validate_router_id(router_id: str) -> None:
    """Raise HTTPException if router_id contains illegal characters."""
    if not is_legal_router_id(router_id):
        raise HTTPException(
            status_code=400,
            detail=f"routerId '{router_id}' may contain only alphanumeric characters, underscores, and dashes",
        )


@router.get("/routers", response_model=RouterList)
def list_routers(registry: GraphRegistry = Depends(get_registry)) -> RouterList:
    """List Registered Routers"""
    routers = [
        RouterInfo(router_id=router_id, load_level=registry.get_load_level(router_id))
        for router_id in sorted(registry.router_ids())
    ]
    return RouterList(routers=routers)


def _router_info(registry: GraphRegistry, router_id: str) -> RouterInfo:
    if router_id not in registry:
        raise HTTPException(status_code=404, detail=f"Router '{router_id}' not found")
    return RouterInfo(router_id=router_id, load_level=registry.get_load_level(router_id))


def _register(registry: GraphRegistry, router_id: str, pre_evict: bool) -> RouterInfo:
    if not registry.register(router_id, pre_evict=pre_evict):
        raise HTTPException(
            status_code=404,
            detail=f"Graph for router '{router_id}' could not be loaded",
        )
    logger.info(f"Registered router '{router_id}' via routers API")
    return RouterInfo(router_id=router_id, load_level=registry.get_load_level(router_id))


def _evict(registry: GraphRegistry, router_id: str) -> None:
    if not registry.evict(router_id):
        raise HTTPException(status_code=404, detail=f"Router '{router_id}' not found")
    logger.info(f"Evicted router '{router_id}' via routers API")


@router.get(
    "/routers/{router_id}",
    response_model=RouterInfo,
    responses={"404": {"model": ErrorResponse}},
)
def get_router(
    router_id: str, registry: GraphRegistry = Depends(get_registry)
) -> RouterInfo:
    """Get Router"""
    validate_router_id(router_id)
    return _router_info(registry, router_id)


@router.put(
    "/routers/{router_id}",
    response_model=RouterInfo,
    responses={"400": {"model": ErrorResponse}, "404": {"model": ErrorResponse}},
)
def register_router(
    router_id: str,
    pre_evict: bool = Query(True, description="Evict the existing graph before loading"),
    registry: GraphRegistry = Depends(get_registry),
) -> RouterInfo:
    """Register (Load) Router Graph"""
    validate_router_id(router_id)
    return _register(registry, router_id, pre_evict)


@router.delete(
    "/routers/{router_id}",
    response_model=None,
    status_code=204,
    responses={"404": {"model": ErrorResponse}},
)
def evict_router(router_id: str, registry: GraphRegistry = Depends(get_registry)) -> None:
    """Evict Router Graph"""
    validate_router_id(router_id)
    _evict(registry, router_id)


# The default router id may be "", which no "/routers/{router_id}" path can carry.
@router.get(
    "/default-router",
    response_model=RouterInfo,
    responses={"404": {"model": ErrorResponse}},
)
def get_default_router(registry: GraphRegistry = Depends(get_registry)) -> RouterInfo:
    """Get Default Router"""
    return _router_info(registry, registry.default_router_id)


@router.put(
    "/default-router",
    response_model=RouterInfo,
    responses={"404": {"model": ErrorResponse}},
)
def register_default_router(
    pre_evict: bool = Query(True, description="Evict the existing graph before loading"),
    registry: GraphRegistry = Depends(get_registry),
) -> RouterInfo:
    """Register (Load) Default Router Graph"""
    return _register(registry, registry.default_router_id, pre_evict)


@router.delete(
    "/default-router",
    response_model=None,
    status_code=204,
    responses={"404": {"model": ErrorResponse}},
)
def evict_default_router(registry: GraphRegistry = Depends(get_registry)) -> None:
    """Evict Default Router Graph"""
    _evict(registry, registry.default_router_id)


@router.delete("/routers", response_model=EvictAllResponse)
def evict_all_routers(registry: GraphRegistry = Depends(get_registry)) -> EvictAllResponse:
    """Evict All Router Graphs"""
    return EvictAllResponse(evicted=registry.evict_all())


@router.put("/routers", response_model=ReloadResponse)
def reload_all_routers(
    pre_evict: bool = Query(True, description="Evict each graph before reloading it"),
    registry: GraphRegistry = Depends(get_registry),
) -> ReloadResponse:
    """Reload All Router Graphs"""
    success = registry.reload_all(pre_evict=pre_evict)
    if not success:
        logger.warning("Reload finished with failures; see earlier log entries")
    return ReloadResponse(success=success, router_ids=sorted(registry.router_ids()))


@router.get("/load-level", response_model=LoadLevelBody)
def get_load_level(registry: GraphRegistry = Depends(get_registry)) -> LoadLevelBody:
    """Get Load Level"""
    return LoadLevelBody(load_level=registry.load_level)


@router.put("/load-level", response_model=LoadLevelBody)
def set_load_level(
    body: LoadLevelBody, registry: GraphRegistry = Depends(get_registry)
) -> LoadLevelBody:
    """Set Load Level

    Changing the level reloads every registered graph.
    """
    registry.set_load_level(body.load_level)
    return LoadLevelBody(load_level=registry.load_level)
