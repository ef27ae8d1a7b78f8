from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI

from app.api.routes_api import router as api_router
from app.services.tmdb import close_session

load_dotenv()


@asynccontextmanager
async def app_lifespan(app: FastAPI):
    """Application lifespan context manager."""
    try:
        yield
    finally:
        # Teardown the shared TMDB session
        close_session()


app = FastAPI(
    title="Reelscout",
    description="Filterable movie and TV discovery backed by TMDB",
    version="0.1.0",
    lifespan=app_lifespan,
)

app.include_router(api_router, prefix="/api")
