"""
api/server.py
-------------
FastAPI application entry point.

Run dev server:
    uvicorn tripplanner.api.server:app --reload --port 8000

Endpoints:
    GET  /v1/health
    POST /v1/itinerary/generate
    GET  /v1/places
    POST /v1/transport/search
    GET  /v1/transport/deals
"""
from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tripplanner.api.routes import health, itinerary, places, transport
from tripplanner.modules.observability.logger import configure_logging

configure_logging()

app = FastAPI(
    title="Trip Planner API",
    version="1.0.0",
    description=(
        "Transport search, place catalog and greedy day-by-day itinerary "
        "builder for the trip planner frontend."
    ),
    docs_url="/docs",
    redoc_url="/redoc",
)

# Allow the frontend dev server (any origin during development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router,     prefix="/v1",           tags=["Health"])
app.include_router(itinerary.router,  prefix="/v1/itinerary", tags=["Itinerary"])
app.include_router(places.router,     prefix="/v1/places",    tags=["Places"])
app.include_router(transport.router,  prefix="/v1/transport", tags=["Transport"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("tripplanner.api.server:app", host="0.0.0.0", port=8000, reload=True)
