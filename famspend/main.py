import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from .api.routes import router
from .backend.client import BackendClient
from .core.config import settings

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # one transport client for the whole process
    app.state.backend = BackendClient.from_settings(settings)
    logger.info(f"Backend client ready for {settings.BACKEND_URL}")
    try:
        yield
    finally:
        await app.state.backend.aclose()


app = FastAPI(title="famspend", version="0.1.0", lifespan=lifespan)
app.include_router(router)
