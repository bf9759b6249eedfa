from fastapi import Depends, FastAPI, HTTPException, Security
from fastapi.security.api_key import APIKeyHeader
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware
from dotenv import load_dotenv
from api.schedule import router as schedule_router
from api.workspace import router as workspace_router
from api.healthcheck import router as healthcheck_router
from utils.logger import logger
import os
import secrets

load_dotenv()

api_key_header = APIKeyHeader(name="x-api-key", auto_error=False)


def require_api_key(client_key: str = Security(api_key_header)):
    """
    Guard for every route that runs the engine or touches the stored workspace.

    API_KEY is read per request; when it is unset, auth is disabled (dev mode).
    The health check is mounted without this dependency so liveness checks never need a key.
    """
    api_key = os.getenv("API_KEY")
    if not api_key:
        logger.debug("API_KEY not set; API key auth is DISABLED (dev mode).")
        return
    if not client_key or not secrets.compare_digest(str(client_key), str(api_key)):
        raise HTTPException(status_code=401, detail="Unauthorized")


app = FastAPI(title="Duty Roster API", description="Monthly nurse duty roster API")

# middlewares
if os.getenv("ENABLE_CORS") == "true":
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o for o in os.getenv("CORS_ALLOW_ORIGINS", "").split(",") if o],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# allowed hosts
app.add_middleware(
    TrustedHostMiddleware,
    allowed_hosts=[h for h in os.getenv("ALLOWED_HOSTS", "").split(",") if h] or ["*"],
)

# Register routers
protected = [Depends(require_api_key)]
app.include_router(schedule_router, prefix="/api", dependencies=protected)
app.include_router(workspace_router, prefix="/api", dependencies=protected)
app.include_router(healthcheck_router, prefix="/api")
