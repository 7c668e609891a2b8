"""Prometheus metrics endpoint.

Returns plain text in Prometheus exposition format (not JSON), e.g.:

  # TYPE login_attempts_total counter
  login_attempts_total{result="failure"} 3.0

Restrict access in production (Prometheus' IP only, or an internal
port): request rates and rejection reasons reveal a lot.
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter(tags=["observability"])


@router.get("/metrics", include_in_schema=False)
def metrics() -> Response:
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )
