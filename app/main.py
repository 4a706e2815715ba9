import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from app.database import db_state, init_db
from app.log import setup_logging
from app.middleware import SessionGuardMiddleware
from app.routers.tasks import router as tasks_router
from app.routers.users import router as users_router
from app.routers.auth import router as auth_router
from app.routers.dashboard import router as dashboard_router

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    logger.info("Database ready")

    yield

    await db_state.dispose()


app = FastAPI(
    lifespan=lifespan,
    title="Task Tracker API",
    description="Personal task tracking with session authentication",
    version="1.0.0",
)

app.add_middleware(SessionGuardMiddleware)

# Enable CORS for the frontend
app.add_middleware(
    CORSMiddleware,
    allow_origin_regex="https?://.*",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _field_name(loc) -> str:
    # ("body", "priority") -> "priority"; ("query", "page") -> "page"
    parts = [str(p) for p in loc if p not in ("body", "query", "path", "form", "cookie", "header")]
    return ".".join(parts) or "body"


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"field": _field_name(err.get("loc", ())), "message": err.get("msg", "Invalid value")}
        for err in exc.errors()
    ]
    logger.warning("Validation error on %s %s: %s", request.method, request.url.path, errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Validation failed", "errors": errors},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal Server Error"},
    )


app.include_router(auth_router)
app.include_router(users_router)
app.include_router(tasks_router)
app.include_router(dashboard_router)


@app.get("/")
def root():
    return {"message": "Task Tracker API running"}
