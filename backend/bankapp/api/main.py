import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from bankapp.db import init_db
from bankapp.logging_config import configure_logging
from bankapp.settings import get_settings

from bankapp.api.error_handlers import register_error_handlers
from bankapp.api.routes.health import router as health_router
from bankapp.api.routes.auth import router as auth_router
from bankapp.api.routes.users import router as users_router
from bankapp.api.routes.accounts import router as accounts_router
from bankapp.api.routes.cards import router as cards_router
from bankapp.api.routes.transactions import router as transactions_router

settings = get_settings()
configure_logging(settings.log_level)

logger = logging.getLogger("bankapp.api.requests")


@asynccontextmanager
async def lifespan(_app: FastAPI):
    # fail fast if the database is unreachable, and make sure tables exist
    init_db()
    yield


app = FastAPI(title="bankapp API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info("%s %s -> %s (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
    return response


register_error_handlers(app)

app.include_router(health_router)
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(accounts_router)
app.include_router(cards_router)
app.include_router(transactions_router)
