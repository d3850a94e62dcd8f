import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exception_handlers import http_exception_handler, request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from core.actor import Actor
from core.config import settings
from core.database import is_database_initialized
from core.errors import VocabError, describe_validation_errors
from core.logging_config import configure_logging
from routers import (
    api as api_router,
    auth as auth_router,
    learner as learner_router,
    submissions as submissions_router,
    users as users_router,
    vocabulary as vocabulary_router,
)
from routers.auth import security
from routers.deps import current_actor

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    if not is_database_initialized():
        logger.warning("Database tables are missing; run migrations or POST /api/init-database")
    yield


app = FastAPI(title="VocabMaster", lifespan=lifespan)
security.handle_errors(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router.router)
app.include_router(api_router.router)
app.include_router(vocabulary_router.router)
app.include_router(users_router.router)
app.include_router(learner_router.router)
app.include_router(submissions_router.router)


@app.exception_handler(VocabError)
async def vocab_error_handler(request: Request, exc: VocabError):
    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"success": False, "error": exc.message})


@app.exception_handler(StarletteHTTPException)
async def api_http_error_handler(request: Request, exc: StarletteHTTPException):
    # the /api endpoints always answer with the success/error envelope
    if request.url.path.startswith("/api/"):
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )
    return await http_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def api_validation_error_handler(request: Request, exc: RequestValidationError):
    # a missing or non-object body never reaches the /api handlers' own checks
    if request.url.path.startswith("/api/"):
        messages = describe_validation_errors(exc.errors())
        return JSONResponse(status_code=400, content={"success": False, "error": messages or "Invalid request body"})
    return await request_validation_exception_handler(request, exc)


@app.get("/dashboard")
async def dashboard(actor: Actor = Depends(current_actor)):
    return {"role": actor.role.value, "redirect": actor.home}


@app.get("/status")
async def status():
    return {"status": "ok", "database_initialized": is_database_initialized()}


if __name__ == "__main__":
    uvicorn.run("main:app", reload=True, host="127.0.0.1", port=8000)
