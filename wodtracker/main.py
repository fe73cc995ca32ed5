# wodtracker/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from wodtracker.api import api_router
from wodtracker.auth import models as auth_models  # noqa
from wodtracker.config import settings
from wodtracker.exceptions import register_exception_handlers
from wodtracker.logging_config import setup_logging
from wodtracker.scores import models as score_models  # noqa
from wodtracker.wods import models as wod_models  # noqa

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.PROJECT_NAME)

register_exception_handlers(app)

Instrumentator().instrument(app).expose(
    app,
    endpoint="/metrics",
    include_in_schema=False,
)

app.include_router(api_router)

origins = settings.CORS_ORIGINS.split(",")

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["*"],
)

logger.info("%s started in %s mode", settings.PROJECT_NAME, settings.ENVIRONMENT)


@app.get("/")
async def read_root():
    return {"msg": f"Welcome to {settings.PROJECT_NAME}!"}


@app.get("/health-check")
async def health_check():
    return {"status": "healthy"}
