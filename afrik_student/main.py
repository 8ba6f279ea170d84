from afrik_student.core.env import load_env
load_env()
# Initialize structured logging early
from afrik_student.core.logging import configure_logging
configure_logging()

import time
import datetime

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

import afrik_student.models  # noqa: F401  (register all mappers)
from afrik_student.api import api_router
from afrik_student.core.config import settings
from afrik_student.core.logging import get_logger
from afrik_student.db.deps import get_db
from afrik_student.middleware.logging import logging_middleware
from afrik_student.modules.attachments.routes import files_router

logger = get_logger(__name__)

app = FastAPI(title="Afrik Student API")
# Record process start time for uptime reporting
_START_TIME = time.time()

if settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
app.middleware("http")(logging_middleware)

app.include_router(api_router, prefix="/api/v1")
if settings.USE_LOCAL_STORAGE:
    app.include_router(files_router, prefix=settings.STORAGE_PUBLIC_URL.rstrip("/"))


@app.get("/health")
async def health():
    """Simple health endpoint returning status, uptime, and timestamp."""
    uptime = time.time() - _START_TIME
    payload = {
        "status": "ok",
        "uptime_seconds": round(uptime, 2),
        "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
    }
    return JSONResponse(content=payload)


@app.get("/db/health")
def db_health_sa(db: Session = Depends(get_db)):
    db.execute(text("SELECT 1"))
    return {"db": "ok"}


logger.info("fastapi process started")
