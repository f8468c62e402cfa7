"""
api/routes/transport.py
-----------------------
POST /v1/transport/search   ranked options between two cities
GET  /v1/transport/deals    discounted / cancellation-seat options
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from tripplanner.modules.planning.ranking import rank_transport
from tripplanner.modules.tool_usage.transport_tool import TransportTool

router = APIRouter()


class SearchRequest(BaseModel):
    origin: str = Field(..., min_length=1, alias="from")
    destination: str = Field(..., min_length=1, alias="to")
    depart_at: str = Field(..., description="ISO-8601 date YYYY-MM-DD")
    modes: Optional[list[str]] = Field(None, description="plane | train | bus")
    sort_by: str = Field("cost", description="cost | duration | transfers")


@router.post("/search", summary="Search and rank transport options")
def search_transport(req: SearchRequest) -> list[dict]:
    options = TransportTool().search(req.origin, req.destination, req.depart_at, req.modes)
    try:
        ranked = rank_transport(options, req.sort_by)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return [o.to_dict() for o in ranked]


@router.get("/deals", summary="Discounted and cancellation-seat options")
def transport_deals() -> list[dict]:
    return [o.to_dict() for o in TransportTool().deals()]
