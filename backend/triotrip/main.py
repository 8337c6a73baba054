import logging
import os
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from triotrip.config import settings

# ─── Logging setup (file + console) ───
_LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
_LOG_DIR.mkdir(exist_ok=True)

_log_level = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)

logging.basicConfig(
    level=_log_level,
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    handlers=[
        logging.StreamHandler(),
        RotatingFileHandler(
            _LOG_DIR / "triotrip.log",
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding="utf-8",
        ),
    ],
)

# Quiet noisy libraries
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

from triotrip.routers import ai, booking, search
from triotrip.services.amadeus_client import amadeus_client
from triotrip.services.duffel_client import duffel_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not settings.ai_enabled:
        logger.info("AI features disabled (AI_ENABLED is not set)")
    elif not (settings.openai_api_key or settings.anthropic_api_key):
        logger.warning("AI enabled but neither OPENAI_API_KEY nor ANTHROPIC_API_KEY is set")
    if not settings.amadeus_client_id:
        logger.warning("Missing AMADEUS_CLIENT_ID; live flight offers unavailable")

    yield

    # Shutdown
    await amadeus_client.close()
    await duffel_client.close()


app = FastAPI(
    title="TrioTrip",
    description="Flight + hotel search, AI trip planning and checkout",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are client errors: 400 with a readable message."""
    messages = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{field}: {err.get('msg')}" if field else err.get("msg", "invalid request"))
    return JSONResponse(status_code=400, content={"detail": "; ".join(messages)})


app.include_router(search.router, prefix="/api", tags=["search"])
app.include_router(ai.router, prefix="/api/ai", tags=["ai"])
app.include_router(booking.router, prefix="/api/duffel", tags=["booking"])


@app.get("/api/health")
async def health_check():
    return {"status": "ok", "service": "triotrip"}
