import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from .config import CORS_ORIGINS, LOG_LEVEL, POSTCODES_IO_URL, W3W_API_KEY
from .limiter import limiter
from .routers import geodesy, locations, postcodes

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Postcode lookups via %s", POSTCODES_IO_URL)
    if not W3W_API_KEY:
        logger.info("No W3W_API_KEY configured; what3words input needs a key per request")
    yield


app = FastAPI(
    title="Pinpoint Location API",
    description="Resolve postcodes, OS grid references, what3words, DMS and decimal coordinates to WGS84.",
    version="1.0.0",
    lifespan=lifespan,
)
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(status_code=429, content={"detail": f"Rate limit exceeded: {exc.detail}"})


app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

for module in (locations, postcodes, geodesy):
    app.include_router(module.router, prefix="/api/v1")


@app.get("/health")
@limiter.exempt
def health_check():
    """Liveness only; resolution is stateless and upstream geocoders are not probed."""
    return {"status": "ok", "version": app.version}


@app.get("/")
def root():
    return {"message": "Pinpoint Location API", "docs": "/docs"}
