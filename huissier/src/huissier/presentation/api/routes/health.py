"""
Health check API routes.

Kubernetes-compatible liveness and readiness probes.
"""

from fastapi import APIRouter, Response, status

from huissier import __version__
from huissier.di.container import get_container

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("/live", status_code=status.HTTP_200_OK)
async def liveness_probe():
    """
    Liveness probe endpoint.

    Returns 200 as long as the process serves requests.
    """
    return {"status": "healthy", "version": __version__}


@router.get("/ready", status_code=status.HTTP_200_OK)
async def readiness_probe(response: Response):
    """
    Readiness probe endpoint.

    Authentication needs the metadata store on every request, so the
    service is only ready when the database answers.

    Returns:
        Health status dict with dependency checks
    """
    db_healthy = await get_container().database.health_check()

    if not db_healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return {
        "status": "healthy" if db_healthy else "unhealthy",
        "version": __version__,
        "components": {
            "database": "healthy" if db_healthy else "unhealthy",
        },
    }


@router.get("", status_code=status.HTTP_200_OK)
async def health_check_endpoint(response: Response):
    """
    General health check endpoint (alias for readiness).

    Returns:
        Health status dict
    """
    return await readiness_probe(response)
