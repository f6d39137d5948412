"""Main FastAPI application for the exercise tracker."""

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import BackgroundTasks, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from api import exercise_routes, user_routes
from config.settings import settings
from models.database import (
    Database,
    close_mongo_connection,
    get_database,
    init_mongo,
    sync_all_indexes,
)
from utils.logger import setup_logger

logger = setup_logger(__name__)

BASE_DIR = Path(__file__).resolve().parent.parent
VIEWS_DIR = BASE_DIR / "views"
PUBLIC_DIR = BASE_DIR / "public"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown events."""
    # Startup
    logger.info("Starting application...")
    app.state.database = await init_mongo()
    logger.info("Application started successfully")
    
    yield
    
    # Shutdown
    logger.info("Shutting down application...")
    close_mongo_connection(app.state.database)
    logger.info("Application shut down")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Log exercises against user accounts and query their history",
    lifespan=lifespan
)

logger.info(f"CORS configured with origins: {settings.cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def strip_trailing_slash(request: Request, call_next):
    """Route '/api/users/' like '/api/users' so the static mount does not swallow it."""
    path = request.scope["path"]
    if len(path) > 1 and path.endswith("/"):
        request.scope["path"] = path.rstrip("/") or "/"
    return await call_next(request)


async def sync_indexes_in_background(database: Database):
    """Synchronize indexes after the landing page has been sent."""
    try:
        await sync_all_indexes(database)
    except Exception as e:
        logger.error(f"Index synchronization failed: {e}", exc_info=True)


@app.get("/", include_in_schema=False)
async def root(request: Request, background_tasks: BackgroundTasks):
    """Landing page."""
    background_tasks.add_task(sync_indexes_in_background, get_database(request))
    return FileResponse(VIEWS_DIR / "index.html", media_type="text/html")


# Include API routes
app.include_router(user_routes.router)
app.include_router(exercise_routes.router)

# Static assets are matched only after every route above
app.mount("/", StaticFiles(directory=PUBLIC_DIR), name="public")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
