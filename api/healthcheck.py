from fastapi import APIRouter
from utils.constants import DEFAULT_DAILY_TARGET, DEFAULT_MAX_RETRIES, TIER_DEFAULTS

router = APIRouter(prefix="/health", tags=["Health Check"])


@router.get("/check", summary="Health Check")
def healthcheck():
    """Liveness check; also reports the defaults applied to omitted request fields."""
    return {
        "status": "ok",
        "defaults": {
            "maxRetries": DEFAULT_MAX_RETRIES,
            "dailyTotalTarget": DEFAULT_DAILY_TARGET,
            "tiers": {str(tier): limits for tier, limits in TIER_DEFAULTS.items()},
        },
    }
