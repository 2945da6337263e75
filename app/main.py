import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.config import settings
from app.database import create_db_and_tables
from app.exceptions import CatalogError, UnexpectedError
from app.middleware.trace_id import TRACE_HEADER, TraceIdMiddleware
from app.routes import books, health, ratings, reviews
from app.schemas.error_schemas import ErrorResponse

logger = logging.getLogger(__name__)


def configure_logging():
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    # Run DB creation ONLY in local
    if settings.ENV == "local":
        create_db_and_tables()
    yield


app = FastAPI(title="Book Catalog API", lifespan=lifespan)
app.add_middleware(TraceIdMiddleware)


def _error_response(request: Request, exc: CatalogError) -> JSONResponse:
    body = ErrorResponse(
        timestamp=datetime.now(timezone.utc),
        status=exc.status_code,
        error=exc.error,
        message=exc.message,
        trace_id=getattr(request.state, "trace_id", None),
    )
    # errors that escape the middleware stack still carry the trace header
    headers = {TRACE_HEADER: body.trace_id} if body.trace_id else None
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(mode="json"),
        headers=headers,
    )


@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError):
    if isinstance(exc, UnexpectedError):
        logger.error(f"Unexpected error on {request.url.path}: {exc.__cause__!r}")
    else:
        logger.warning(f"{exc.error} on {request.url.path}: {exc.message}")
    return _error_response(request, exc)


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Store failure on {request.url.path}", exc_info=exc)
    return _error_response(request, UnexpectedError())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.url.path}", exc_info=exc)
    return _error_response(request, UnexpectedError())


app.include_router(books.router, prefix="/api/v1/books", tags=["Books"])
app.include_router(reviews.router, prefix="/api/v1/books", tags=["Reviews"])
app.include_router(ratings.router, prefix="/api/v1", tags=["Ratings"])
app.include_router(health.router, tags=["Health"])


@app.get("/")
def root():
    return {
        "book_endpoints": [
            "/api/v1/books", "/api/v1/books/{book_id}", "/api/v1/books/search"
        ],
        "rating_endpoints": [
            "/api/v1/books/rating/{book_id}", "/api/v1/genres/top-rated/{genre}"
        ],
        "review_endpoints": [
            "/api/v1/books/reviews/{book_id}"
        ],
        "health": ["/health"],
    }
