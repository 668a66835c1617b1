# student_registry/main.py
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from .app_logger import setup_logging
from .config import settings
from .routers import groups, students, transfer_requests
from .services.record_store import RecordStore


def create_app(database_url: Optional[str] = None) -> FastAPI:
    logger = setup_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # One store per process, opened on startup and closed on shutdown
        store = RecordStore(database_url or settings.DATABASE_URL)
        store.open()
        app.state.store = store
        try:
            yield
        finally:
            store.close()

    app = FastAPI(
        title="Student Registry",
        description="Student records, cohort groups and school transfer requests",
        version="1.0.0",
        lifespan=lifespan,
    )

    # CORS middleware for the web client (cookies included)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError):
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.orig}")
        return JSONResponse(status_code=409, content={"detail": str(exc.orig)})

    app.include_router(students.router)
    app.include_router(groups.router)
    app.include_router(transfer_requests.router)

    @app.get("/")
    def root():
        return {
            "status": "ok",
            "service": "Student Registry API",
            "version": "1.0.0"
        }

    @app.get("/health")
    def health_check(request: Request):
        store = request.app.state.store
        return {
            "status": "healthy",
            "database": "connected" if store.is_open else "closed",
        }

    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run("student_registry.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
