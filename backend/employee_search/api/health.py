"""
Health check endpoints for monitoring and readiness probes.

- Liveness probe: /health (is the server running)
- Readiness probe: /health/ready (can the database be reached)
"""

import time
from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter, status, Response

from employee_search.schemas.health import (
    HealthResponse,
    ReadinessResponse,
    HealthCheckDetail,
)
from employee_search.core.probes import check_database


router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
    description="Basic health check to verify the service is running",
)
async def health_check() -> HealthResponse:
    """
    Basic liveness probe.

    Always returns 200 while the application is running.
    """
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc)
    )


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    description="Readiness check including database connectivity",
)
async def readiness_check(response: Response) -> ReadinessResponse:
    """
    Readiness probe with dependency checks.

    Returns 200 if every check passes, 503 otherwise. Individual check
    results are included in the response.

    Example response (unhealthy):
        {
            "status": "not_ready",
            "checks": {
                "db": {"healthy": false, "latency_ms": 2000.0, "error": "..."}
            },
            "timestamp": "2025-11-24T10:30:00.123456Z"
        }
    """
    db_start = time.perf_counter()
    db_healthy = await check_database()
    db_latency = (time.perf_counter() - db_start) * 1000

    checks: Dict[str, HealthCheckDetail] = {
        "db": HealthCheckDetail(
            healthy=db_healthy,
            latency_ms=round(db_latency, 2),
            error=None if db_healthy else "Database connection failed or timed out"
        ),
    }

    all_healthy = all(check.healthy for check in checks.values())
    if not all_healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return ReadinessResponse(
        status="ready" if all_healthy else "not_ready",
        checks=checks,
        timestamp=datetime.now(timezone.utc)
    )
