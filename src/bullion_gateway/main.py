"""Main module for the auth and quote gateway service."""
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine

from bullion_gateway.config import Settings, get_settings
from bullion_gateway.db import create_db_engine, init_db
from bullion_gateway.exceptions import AppError
from bullion_gateway.providers import FinnhubProvider, QuoteProviderABC
from bullion_gateway.routers import auth_router, quotes_router, users_router
from bullion_gateway.security import PasswordHasher, TokenService
from bullion_gateway.services import QuoteCache, create_quotes_service

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Send application logs to stderr in one format."""
    logging.basicConfig(level=level, format=LOG_FORMAT)


def create_app(
    settings: Settings | None = None,
    *,
    quote_provider: QuoteProviderABC | None = None,
    engine: Engine | None = None,
) -> FastAPI:
    """Build the application.

    Args:
        settings: Configuration; defaults to values read from the environment.
        quote_provider: Upstream provider; defaults to FinnhubProvider.
        engine: Database engine; defaults to one built from settings.database_url.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(fastapi_app: FastAPI):
        """Create shared services at startup; close them on shutdown."""
        db_engine = engine or create_db_engine(settings.database_url, echo=settings.sql_echo)
        init_db(db_engine)

        provider = quote_provider or FinnhubProvider(
            api_key=settings.finnhub_api_key,
            base_url=settings.finnhub_base_url,
            timeout=settings.upstream_timeout_seconds,
        )
        cache = QuoteCache(
            ttl_seconds=settings.quote_cache_ttl_seconds,
            min_interval_seconds=settings.quote_min_interval_seconds,
            max_entries=settings.quote_cache_max_entries,
        )

        fastapi_app.state.settings = settings
        fastapi_app.state.engine = db_engine
        fastapi_app.state.password_hasher = PasswordHasher(rounds=settings.password_hash_rounds)
        fastapi_app.state.token_service = TokenService(
            settings.jwt_secret,
            settings.jwt_expiration_seconds,
            algorithm=settings.jwt_algorithm,
        )
        fastapi_app.state.quotes_service = create_quotes_service(provider, cache)

        yield

        try:
            await fastapi_app.state.quotes_service.close()
        except Exception as exc:  # pylint: disable=broad-except
            logger.warning("Error closing quote provider %s: %s", type(provider).__name__, exc)
        if engine is None:
            db_engine.dispose()

    fastapi_app = FastAPI(
        title="Bullion Gateway",
        description="User auth and cached stock quotes",
        version="0.1.0",
        lifespan=lifespan,
    )

    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @fastapi_app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.warning("%s %s -> %s: %s", request.method, request.url.path,
                           exc.status_code, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message},
            headers=exc.headers,
        )

    @fastapi_app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        # Echoed input is dropped so a rejected password never appears in a response.
        errors = [
            {key: value for key, value in err.items() if key != "input"}
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content={"error": "Validation failed", "detail": jsonable_encoder(errors)},
        )

    fastapi_app.include_router(auth_router)
    fastapi_app.include_router(users_router)
    fastapi_app.include_router(quotes_router)

    @fastapi_app.get("/")
    def health():
        """Return health check status."""
        return {"status": "ok"}

    return fastapi_app


app = create_app()


def run():
    """Run the server (uvicorn). Use for `bullion-gateway`."""
    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(
        "bullion_gateway.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
