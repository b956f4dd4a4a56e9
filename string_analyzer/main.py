from contextlib import asynccontextmanager
from typing import Optional
import logging
import time

from fastapi import FastAPI, Request, status, HTTPException
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError

from string_analyzer import __version__, config
from string_analyzer.api.routes import router
from string_analyzer.service import StringAnalyzerService
from string_analyzer.store import StringStore

# Configure logging
logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)
access_logger = logging.getLogger("string_analyzer.access")


def create_app(data_file: Optional[str] = None) -> FastAPI:
    """Build the application around a store at ``data_file``.

    The store is loaded on startup; a corrupt file aborts startup.
    """
    store = StringStore(data_file or config.DATA_FILE)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Loading string store...")
        store.initialize()
        logger.info(f"String store ready with {len(store)} strings")
        yield

    app = FastAPI(
        title=config.APP_TITLE,
        description=config.APP_DESCRIPTION,
        version=__version__,
        lifespan=lifespan,
    )
    app.state.service = StringAnalyzerService(store)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request logging
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - start) * 1000, 2)

        message = f"{request.method} {request.url.path} -> {response.status_code} ({duration_ms}ms)"
        if response.status_code >= 500:
            access_logger.error(message)
        elif response.status_code >= 400:
            access_logger.warning(message)
        else:
            access_logger.info(message)
        return response

    app.include_router(router, tags=["strings"])

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "message": config.APP_TITLE,
            "version": __version__,
            "endpoints": {
                "POST /strings": "Analyze and store a string",
                "GET /strings/all": "Get all strings",
                "GET /strings": "Look up by ?value= or filter by properties",
                "GET /strings/{string_value}": "Get specific string analysis",
                "GET /strings/filter-by-natural-language": "Filter using a supported phrase",
                "DELETE /strings/{string_value}": "Delete a string",
            },
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "total_strings": len(store)}

    # Validation error handler
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = {}
        status_code = status.HTTP_400_BAD_REQUEST
        for error in exc.errors():
            field = error["loc"][-1]
            errors[field] = error["msg"]
            # a body value of the wrong type is 422, a missing one is 400
            if error["loc"][0] == "body" and error["type"].endswith("_type") and error.get("input") is not None:
                status_code = status.HTTP_422_UNPROCESSABLE_ENTITY

        return JSONResponse(
            status_code=status_code,
            content={
                "error": "Validation failed",
                "details": errors,
            },
        )

    # HTTPException handler
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        # If detail is already a dict with 'error' key, return as is
        if isinstance(exc.detail, dict) and "error" in exc.detail:
            return JSONResponse(status_code=exc.status_code, content=exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    # Generic error handler
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {str(exc)}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("string_analyzer.main:app", host="0.0.0.0", port=config.PORT, reload=True)
