"""
Study Portal Server - Quiz Service

FastAPI server with:
- Quiz CRUD, search and share codes
- Self-graded quiz attempts and attempt analytics
- SQLite persistence (apsw)
- Domain error translation to JSON responses
"""

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

load_dotenv()

import app_state  # noqa: E402
from config import get_config  # noqa: E402
from quiz.exceptions import QuizError, StoreError  # noqa: E402
from quiz.router import router as quiz_router  # noqa: E402

# =============================================================================
# CONFIGURATION
# =============================================================================

config = get_config()

logging.basicConfig(
    level=config.log_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("server")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage app lifecycle."""
    logger.info("Starting Study Portal quiz service...")
    app_state.get_store()
    yield
    app_state.reset_state()
    logger.info("Quiz service stopped")


app = FastAPI(
    title="Study Portal",
    description="Quiz service for the study portal",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# ERROR HANDLERS
# =============================================================================


async def quiz_error_handler(request: Request, exc: QuizError) -> JSONResponse:
    """Traduz erros de domínio para respostas JSON."""
    if isinstance(exc, StoreError):
        logger.exception(
            f"Erro de persistência em {request.method} {request.url.path}: {exc.details}",
            exc_info=exc,
        )
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Erros de schema do request viram 400 com mensagem legível."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()) if item != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else error.get("msg", ""))
    message = "Validation error: " + "; ".join(parts) if parts else "Validation error"
    return JSONResponse(status_code=400, content={"message": message})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Erro inesperado vira 500 no mesmo formato ``{"message": ...}``."""
    logger.exception(
        f"Erro inesperado em {request.method} {request.url.path}: {exc}", exc_info=exc
    )
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


app.add_exception_handler(QuizError, quiz_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)
app.add_exception_handler(Exception, unhandled_error_handler)

app.include_router(quiz_router)


# =============================================================================
# HEALTH
# =============================================================================


@app.get("/")
async def root():
    """Health check."""
    return {"status": "ok", "service": "study-portal-quiz"}


@app.get("/health")
async def health_check():
    """Status detalhado do serviço."""
    database_ok = app_state.get_store().ping()
    return {
        "status": "healthy" if database_ok else "degraded",
        "database": "ok" if database_ok else "unavailable",
        "config": get_config().to_dict(),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server:app", host="0.0.0.0", port=8001, reload=False)
