"""Health and readiness endpoints.

  /health (liveness): is the process alive?  Always 200; the body's
    status field says whether a dependency is impaired.  A 503 here
    would make the orchestrator restart a container that may only be
    waiting for its database.

  /ready (readiness): can this instance take traffic right now?  503
    when a configured database does not answer, which takes the
    instance out of rotation without restarting it.
"""

from __future__ import annotations

from fastapi import APIRouter, Response

from msusers.db import engine as db

router = APIRouter(tags=["health"])


def _store_status() -> str:
    if db.engine is None:
        return "in_memory"
    return "ok" if db.ping() else "degraded"


@router.get("/health")
def health() -> dict:
    store = _store_status()
    return {
        "status": "degraded" if store == "degraded" else "ok",
        "checks": {"user_store": store},
    }


@router.get("/ready")
def ready() -> Response:
    if _store_status() == "degraded":
        return Response(status_code=503)
    return Response(status_code=200)
