from contextlib import asynccontextmanager
import logging
from fastapi import FastAPI
from plate_reader.api.routers import router, release_models
from plate_reader.core.config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    release_models()


app = FastAPI(title="Plate Reader Service", version="1.0.0", lifespan=lifespan)
app.include_router(router)
