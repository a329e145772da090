import logging

from fastapi import FastAPI, Depends
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from habit_progress.core.config import settings
from habit_progress.routers import calendar as calendar_router
from habit_progress.routers import habits as habits_router
from habit_progress.routers import stats as stats_router
from habit_progress.store import HabitStore, get_store
from habit_progress.core.errors import (
    HabitProgressException,
    habit_progress_exception_handler,
    validation_exception_handler,
    unhandled_exception_handler,
)

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(
    title="Habit Progress API",
    description=(
        "**Habit check-ins, weekly quotas, streaks and calendar heatmaps.**\n\n"
        "Every request is scoped to the user in the `X-User-Id` header. "
        "Day and week boundaries follow the `tz` query parameter.\n\n"
        "All error responses follow the `{code, message, details}` envelope."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Exception handlers (most specific first) ---
app.add_exception_handler(HabitProgressException, habit_progress_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# --- Routers ---
app.include_router(habits_router.router)
app.include_router(stats_router.router)
app.include_router(calendar_router.router)


@app.get("/health", tags=["health"], summary="Health check")
def health(store: HabitStore = Depends(get_store)):
    """
    Returns `{"status": "ok", "store": "ok"}` when both the API and the data
    store are reachable. Returns HTTP 503 if the store is down.
    """
    if not store.ping():
        return JSONResponse(
            status_code=503,
            content={"status": "error", "store": "unreachable"},
        )
    return {"status": "ok", "store": "ok", "env": settings.APP_ENV}
