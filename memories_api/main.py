from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from memories_api.api.router import api_router
from memories_api.core.config import settings
from memories_api.core.errors import register_exception_handlers
from memories_api.core.logging import configure_logging
from memories_api.core.security import get_token_service
from memories_api.db.init_db import init_db

configure_logging(settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(_: FastAPI):
    get_token_service()
    init_db()
    logger.info('app.started', env=settings.ENV, api_prefix=settings.API_PREFIX or '/')
    yield

app = FastAPI(title=settings.PROJECT_NAME, debug=settings.DEBUG, lifespan=lifespan)

allow_origins = settings.CORS_ORIGINS
allow_credentials = '*' not in allow_origins

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=allow_credentials,
    allow_methods=['*'],
    allow_headers=['*'],
)

register_exception_handlers(app)

app.include_router(api_router)
