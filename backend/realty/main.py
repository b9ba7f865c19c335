from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from realty.core.config import settings
from realty.core.errors import register_exception_handlers
from realty.core.logging import get_logger, setup_logging
from realty.db.base import Base
from realty.db import models  # noqa: F401  registers tables on Base.metadata
from realty.db.session import engine
from realty.api.routers import (
    admin as admin_router,
    auth as auth_router,
    contact as contact_router,
    enquiries as enquiries_router,
    events as events_router,
    investments as investments_router,
    projects as projects_router,
    properties as properties_router,
    rentals as rentals_router,
    upload as upload_router,
)

setup_logging()
logger = get_logger("realty")

app = FastAPI(title=settings.PROJECT_NAME)

register_exception_handlers(app)

# ---------------------------
# CORS
# ---------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------
# Static files (uploaded media lives under /static/<UPLOAD_SUBDIR>)
# ---------------------------
STATIC_DIR = Path(settings.STATIC_DIR)
STATIC_DIR.mkdir(parents=True, exist_ok=True)

app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")


# ---------------------------
# Startup
# ---------------------------
@app.on_event("startup")
async def on_startup():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("%s started (%s)", settings.PROJECT_NAME, settings.ENVIRONMENT)


# ---------------------------
# Routers
# ---------------------------
app.include_router(auth_router.router, prefix="/api/auth", tags=["auth"])
app.include_router(properties_router.router, prefix="/api/properties", tags=["properties"])
app.include_router(rentals_router.router, prefix="/api/rentals", tags=["rentals"])
app.include_router(projects_router.router, prefix="/api/projects", tags=["projects"])
app.include_router(events_router.router, prefix="/api/events", tags=["events"])
app.include_router(investments_router.router, prefix="/api/investments", tags=["investments"])
app.include_router(contact_router.router, prefix="/api/contact", tags=["contact"])
app.include_router(enquiries_router.router, prefix="/api/enquiries", tags=["enquiries"])
app.include_router(admin_router.router, prefix="/api/admin", tags=["admin"])
app.include_router(upload_router.router, prefix="/api/upload", tags=["upload"])


# ---------------------------
# Health check
# ---------------------------
@app.get("/health")
async def health():
    return {"status": "ok", "environment": settings.ENVIRONMENT}


if __name__ == "__main__":
    uvicorn.run("realty.main:app", host="0.0.0.0", port=8000, reload=not settings.is_production)
