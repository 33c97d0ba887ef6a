from typing import Annotated
from fastapi import APIRouter, Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.orm import Session
from library_api.core.config import settings
from library_api.core.middleware_correlation import CorrelationIdMiddleware
from library_api.core.logging import setup_logging
from library_api.core.errors import register_exception_handlers
from library_api.db.session import get_db

# Routers
from library_api.api.routes.authors import router as authors_router
from library_api.api.routes.books import router as books_router


setup_logging(settings.LOG_LEVEL)

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Library API - manage authors, books and their publication status.",
    version="1.0.0",
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
)

# CORS middleware - allow docs UI to make API requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(CorrelationIdMiddleware)

# Root endpoint
@app.get("/")
async def root():
    """API root endpoint with basic information."""
    return {
        "message": f"Welcome to {settings.PROJECT_NAME}",
        "version": "1.0.0",
        "docs_url": "/docs",
        "redoc_url": "/redoc",
        "api_prefix": settings.API_PREFIX,
        "endpoints": {
            "authors": f"{settings.API_PREFIX}/authors",
            "books": f"{settings.API_PREFIX}/books",
        },
    }


@app.get("/health")
def health(db: Annotated[Session, Depends(get_db)]):
    """Liveness plus a database round trip."""
    _ = db.execute(text("SELECT 1"))
    return {"status": "ok", "database": "ok"}


register_exception_handlers(app)

# Mount routers
api = APIRouter(prefix=settings.API_PREFIX)
api.include_router(authors_router)
api.include_router(books_router)
app.include_router(api)
