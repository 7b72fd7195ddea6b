"""
Wellness tracker API: per-user journal, mood, task, goal, chat,
meditation, breathing, sleep, stress and activity logs.
"""

import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from config.settings import settings
from models.db import init_db
from routers import chat_router, dashboard_router, dhyaan_router, journal_router
from routers import planner_router, tracking_router
from utils.errors import ApiError, api_error_handler
from utils.helpers import create_timestamp


logger.remove()
logger.add(sys.stderr, level="DEBUG" if settings.debug else settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("🌿 Wellness tracker API started")
    yield
    logger.info("Wellness tracker API stopped")


app = FastAPI(title="Wellness Tracker API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_exception_handler(ApiError, api_error_handler)

app.include_router(journal_router.router)
app.include_router(tracking_router.mood_router)
app.include_router(tracking_router.sleep_router)
app.include_router(tracking_router.stress_router)
app.include_router(tracking_router.activity_router)
app.include_router(planner_router.task_router)
app.include_router(planner_router.goal_router)
app.include_router(chat_router.router)
app.include_router(chat_router.companion_router)
app.include_router(dhyaan_router.meditation_router)
app.include_router(dhyaan_router.breathing_router)
app.include_router(dhyaan_router.options_router)
app.include_router(dashboard_router.router)


@app.get("/")
async def read_root():
    return {"message": "Wellness Tracker API running"}


@app.get("/health")
async def health_check():
    """Health check endpoint, no authentication required."""
    return {"status": "healthy", "service": "wellness-tracker", "timestamp": create_timestamp()}


if __name__ == "__main__":
    uvicorn.run("main:app", host=settings.api_host, port=settings.api_port, reload=settings.debug)
