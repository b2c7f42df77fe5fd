import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from zoba.api.main import api_router
from zoba.core.config import settings
from zoba.core.db import init_db

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        init_db()
        logger.info("Application startup completed")
    except Exception as e:
        logger.error("Startup failed: %s", e)
        raise

    yield

    logger.info("Application shutdown completed")


app = FastAPI(
    title=f"{settings.PROJECT_NAME} Diagram API",
    description="Mermaid diagram storage, templates and an AI diagram assistant",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=settings.API_V1_STR)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("zoba.main:app", host="0.0.0.0", port=8000, reload=settings.ENVIRONMENT == "local")
