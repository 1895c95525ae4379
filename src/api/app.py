import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from .error import ClientError, ServerError

logger = logging.getLogger(__name__)

INTERNAL_SERVER_ERROR = "Internal Server Error"


async def handle_client_error(request: Request, exc: ClientError):
    logger.warning(f"Client error: {exc.base_error.code} {exc.base_error.message}")
    return JSONResponse(
        status_code=exc.status_code, content={"message": exc.base_error.message}
    )


async def handle_server_error(request: Request, exc: ServerError):
    logger.error(f"Server error: {exc.base_error.code} {exc.base_error.message}")
    message = exc.base_error.message if exc.expose else INTERNAL_SERVER_ERROR
    return JSONResponse(status_code=exc.status_code, content={"message": message})


async def handle_validation_error(request: Request, exc: RequestValidationError):
    logger.warning(f"Invalid request body on {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid request body"},
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": INTERNAL_SERVER_ERROR},
    )


async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)"
    )
    return response


def create_app(ApplicationConfig) -> FastAPI:
    logging.basicConfig(
        level=ApplicationConfig.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if ApplicationConfig.CREATE_TABLES:
            from src.depends import init_db

            await init_db()
        yield

    app = FastAPI(title="Fitness Auth API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    if ApplicationConfig.ENABLE_LOGGING_MIDDLEWARE:
        app.middleware("http")(log_requests)

    from src.api.routes import auth, health_check, user

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, prefix=ApplicationConfig.API_PREFIX)
    app.include_router(user.router, prefix=ApplicationConfig.API_PREFIX)

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    return app
