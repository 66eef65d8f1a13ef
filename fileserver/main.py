"""Entry point for the file server."""

import logging
import time
import uuid

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from common.logging_config import setup_logging
from fileserver import config
from fileserver.database import init_database
from fileserver.exceptions import (
    UpzloadError,
    InvalidInputError,
    UserAlreadyExistsError,
    UserNotFoundError,
    ResourceNotFoundError,
    WrongSecretError,
    InvalidAPIKeyError,
    ForbiddenError,
    EmptyBatchError,
    AllocationExhaustedError,
    StorageError,
)
from fileserver.routes.auth_routes import router as auth_router
from fileserver.routes.file_routes import router as file_router
from fileserver.storage.namespace import NamespaceManager

logger = setup_logging('fileserver')

app = FastAPI(
    title="upzload",
    description="Multi-tenant file upload and share-link service",
    version="1.0.0"
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Middleware to log all HTTP requests and responses.
    """
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    start_time = time.time()

    logger.info(f"Request started: {request.method} {request.url.path} [request_id={request_id}]")

    response = await call_next(request)

    duration = time.time() - start_time
    user_id = getattr(request.state, 'user_id', None)

    logger.info(
        f"Request completed: {request.method} {request.url.path} "
        f"status={response.status_code} duration={duration:.3f}s "
        f"[request_id={request_id}] [user_id={user_id or 'anonymous'}]"
    )

    response.headers["X-Request-ID"] = request_id

    return response


@app.on_event("startup")
async def startup_event():
    """
    Initialize the identity database and the storage root.
    """
    logger.info("File server starting up...")

    init_database()
    logger.info(f"Database initialized at {config.DATABASE_PATH}")

    NamespaceManager().staging_root()
    logger.info(f"Storage root ready at {config.STORAGE_ROOT}")


def _error_response(
    request: Request,
    exc: Exception,
    status_code: int,
    code: str,
    level: int = logging.WARNING,
) -> JSONResponse:
    request_id = getattr(request.state, 'request_id', 'unknown')
    user_id = getattr(request.state, 'user_id', 'anonymous')
    logger.log(
        level,
        f"{type(exc).__name__}: {exc} [request_id={request_id}] [user_id={user_id}] path={request.url.path}",
        exc_info=level >= logging.ERROR,
    )
    return JSONResponse(status_code=status_code, content={"detail": str(exc), "code": code})


@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError):
    return _error_response(request, exc, status.HTTP_400_BAD_REQUEST, "INVALID_INPUT")


@app.exception_handler(UserAlreadyExistsError)
async def user_already_exists_handler(request: Request, exc: UserAlreadyExistsError):
    return _error_response(request, exc, status.HTTP_409_CONFLICT, "USER_ALREADY_EXISTS")


@app.exception_handler(UserNotFoundError)
async def user_not_found_handler(request: Request, exc: UserNotFoundError):
    return _error_response(request, exc, status.HTTP_404_NOT_FOUND, "USER_NOT_FOUND")


@app.exception_handler(ResourceNotFoundError)
async def resource_not_found_handler(request: Request, exc: ResourceNotFoundError):
    return _error_response(request, exc, status.HTTP_404_NOT_FOUND, "RESOURCE_NOT_FOUND")


@app.exception_handler(WrongSecretError)
async def wrong_secret_handler(request: Request, exc: WrongSecretError):
    return _error_response(request, exc, status.HTTP_401_UNAUTHORIZED, "WRONG_SECRET")


@app.exception_handler(InvalidAPIKeyError)
async def invalid_api_key_handler(request: Request, exc: InvalidAPIKeyError):
    return _error_response(request, exc, status.HTTP_401_UNAUTHORIZED, "INVALID_API_KEY")


@app.exception_handler(ForbiddenError)
async def forbidden_handler(request: Request, exc: ForbiddenError):
    return _error_response(request, exc, status.HTTP_403_FORBIDDEN, "FORBIDDEN")


@app.exception_handler(EmptyBatchError)
async def empty_batch_handler(request: Request, exc: EmptyBatchError):
    return _error_response(request, exc, status.HTTP_400_BAD_REQUEST, "EMPTY_BATCH")


@app.exception_handler(AllocationExhaustedError)
async def allocation_exhausted_handler(request: Request, exc: AllocationExhaustedError):
    return _error_response(
        request, exc, status.HTTP_500_INTERNAL_SERVER_ERROR, "ALLOCATION_EXHAUSTED", logging.ERROR
    )


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    return _error_response(
        request, exc, status.HTTP_500_INTERNAL_SERVER_ERROR, "STORAGE_ERROR", logging.ERROR
    )


@app.exception_handler(UpzloadError)
async def upzload_error_handler(request: Request, exc: UpzloadError):
    return _error_response(
        request, exc, status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR", logging.ERROR
    )


app.include_router(auth_router)
app.include_router(file_router)


@app.get("/")
async def root():
    """
    Root endpoint for health check.
    """
    return {"message": "upzload file server", "status": "running"}


@app.get("/health")
async def health_check():
    """
    Liveness probe. Returns 200 if the process is up.
    """
    return {"status": "healthy", "service": "fileserver"}


@app.get("/ready")
async def ready_check():
    """
    Readiness check endpoint.
    Verifies the identity database and the storage root.
    """
    from pathlib import Path
    from fileserver.repositories.user_repository import UserRepository

    try:
        UserRepository.count_users()
        db_status = "ok"
    except Exception as e:
        db_status = f"error: {str(e)}"

    storage_root = Path(config.STORAGE_ROOT)
    storage_status = "ok" if storage_root.is_dir() else "error: storage root missing"

    ready = db_status == "ok" and storage_status == "ok"
    status_code = status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE

    return JSONResponse(
        status_code=status_code,
        content={
            "ready": ready,
            "database": db_status,
            "storage": storage_status
        }
    )


def main() -> None:
    """
    Start the FastAPI server with uvicorn.
    """
    uvicorn.run(
        "fileserver.main:app",
        host=config.SERVER_HOST,
        port=config.SERVER_PORT,
    )


if __name__ == "__main__":
    main()
