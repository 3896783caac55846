import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from ridealert import __version__
from ridealert.config import settings
from ridealert.db.database import cleanup_db
from ridealert.exceptions import register_exception_handlers
from ridealert.routers import schedules_router, umo_routes_router
from ridealert.services.debug_logger import configure_logging

configure_logging("DEBUG" if settings.DEBUG else settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="RideAlert API",
    description="Ride schedules and Unitrans arrival predictions (UmoIQ)",
    version=__version__
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(schedules_router)
app.include_router(umo_routes_router)

@app.get("/", response_class=PlainTextResponse)
async def root():
    return "API running"

# basic healthcheck
@app.get("/health")
def health_check():
    return {"ok": True}

# simple test endpoint for quick verification
@app.get("/test")
def test_endpoint():
    return {"message": "Test OK"}

@app.on_event("startup")
async def startup_event():
    logger.info(f"RideAlert API {__version__} starting (agency={settings.AGENCY})")
    if not settings.UMO_API_KEY:
        logger.warning("UMO_API_KEY is not set; UmoIQ requests will be rejected upstream")

@app.on_event("shutdown")
async def shutdown_event():
    cleanup_db()
    logger.info("RideAlert API stopped; database connections released")


def run():
    uvicorn.run("ridealert.main:app", host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    run()
