from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.v1.api import api_router
from core.config import settings
from core.database import create_tables
from core.exception.exception_handlers import (
    custom_exception_handler,
    http_exception_handler,
    system_exception_handler,
    validation_exception_handler,
)
from core.exception.exceptions import BaseCustomException
from core.logger import setup_logging

setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.DB_AUTO_CREATE:
        await create_tables()
    yield


app = FastAPI(title="Recipe Box API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(BaseCustomException, custom_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, system_exception_handler)

app.include_router(api_router, prefix="/api/v1")


@app.get("/health")
async def health():
    return {"status": "OK"}
