from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Optional
import logging
import os

from string_analyzer.api.routes import router
from string_analyzer.crud.base import StringStore
from string_analyzer.crud.memory import InMemoryStringStore
from string_analyzer.crud.string_record import SqlStringStore
from string_analyzer.database import init_db, make_engine, make_session_factory

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Body errors that mean "nothing usable was sent" rather than "wrong type"
MISSING_INPUT_ERRORS = {"missing", "json_invalid"}


def build_store() -> StringStore:
    """Create the record store selected by STORE_BACKEND (sql or memory)."""
    backend = os.getenv("STORE_BACKEND", "sql").lower()

    if backend == "memory":
        logger.info("Using in-memory string store")
        return InMemoryStringStore()

    if backend != "sql":
        raise ValueError(f"Unknown STORE_BACKEND '{backend}', expected 'sql' or 'memory'")

    logger.info("Initializing database...")
    engine = make_engine()
    init_db(engine)
    logger.info("Database initialized successfully")
    return SqlStringStore(make_session_factory(engine))


def create_app(store: Optional[StringStore] = None) -> FastAPI:
    app = FastAPI(
        title="String Analyzer Service",
        description="Analyze, store and filter strings by their computed properties",
        version="1.0.0"
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.store = store

    @app.on_event("startup")
    def on_startup():
        if app.state.store is None:
            app.state.store = build_store()

    app.include_router(router, tags=["strings"])

    @app.get("/")
    def root():
        return {
            "message": "String Analyzer Service",
            "version": "1.0.0",
            "endpoints": {
                "POST /strings": "Analyze and store a string",
                "GET /strings/{string_value}": "Get specific string analysis",
                "GET /strings": "Get all strings with optional filters",
                "GET /strings/filter-by-natural-language": "Filter using natural language",
                "DELETE /strings/{string_value}": "Delete a string",
                "GET /docs": "API documentation"
            }
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        return {"status": "healthy"}

    # Validation error handler
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = {}
        wrong_type = False
        for error in exc.errors():
            loc = error.get("loc", ())
            field = loc[-1] if loc else "request"
            errors[str(field)] = error["msg"]
            if loc and loc[0] == "body" and error["type"] not in MISSING_INPUT_ERRORS:
                wrong_type = True

        if wrong_type:
            return JSONResponse(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                content={"error": "Invalid \"value\" (must be a valid string)", "details": errors}
            )

        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request body or query parameters", "details": errors}
        )

    # HTTPException handler (base class, so routing 404/405 errors are covered too)
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # If detail is already a dict with 'error' key, return as is
        if isinstance(exc.detail, dict) and 'error' in exc.detail:
            return JSONResponse(
                status_code=exc.status_code,
                headers=getattr(exc, "headers", None),
                content=exc.detail
            )
        # Otherwise wrap it
        return JSONResponse(
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
            content={"error": str(exc.detail)}
        )

    # Generic error handler
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal server error"
            }
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run("string_analyzer.main:app", host="0.0.0.0", port=port, reload=True)
