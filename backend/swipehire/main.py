import logging
import os

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from . import database
from .api import auth as auth_api
from .api import candidate as candidate_api
from .api import chat as chat_api
from .api import job as job_api
from .api import screening as screening_api
from .config import LOG_LEVEL, SEED_DEMO_DATA, SWIPE_THRESHOLD
from .services.applications import ApplicationStore
from .services.demo_data import seed_demo_data
from .services.screening_sessions import ScreeningSessionRegistry
from .utils.error_handlers import AppError, create_error_response, get_error_message

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
)
logger = logging.getLogger(__name__)

DEV_ORIGINS = ["http://localhost:5173", "http://127.0.0.1:5173", "http://localhost:8080"]


def _frontend_origins() -> list[str]:
    extra = [o.strip() for o in os.getenv("FRONTEND_ORIGINS", "").split(",") if o.strip()]
    return [*DEV_ORIGINS, *extra]


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    return [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def on_app_error(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return create_error_response(exc.status_code, exc.message, exc.details)

    @app.exception_handler(HTTPException)
    async def on_http_exception(request: Request, exc: HTTPException):
        return create_error_response(exc.status_code, exc.detail)

    @app.exception_handler(RequestValidationError)
    async def on_invalid_request(request: Request, exc: RequestValidationError):
        return create_error_response(422, get_error_message("validation_error"), jsonable_errors(exc))

    @app.exception_handler(OperationalError)
    async def on_db_unavailable(request: Request, exc: OperationalError):
        logger.exception("Database unavailable during %s %s", request.method, request.url.path)
        return create_error_response(503, get_error_message("database_error"))

    @app.exception_handler(SQLAlchemyError)
    async def on_db_error(request: Request, exc: SQLAlchemyError):
        logger.exception("Database error during %s %s", request.method, request.url.path)
        return create_error_response(500, get_error_message("database_error"))

    @app.exception_handler(ValueError)
    async def on_value_error(request: Request, exc: ValueError):
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
        return create_error_response(400, str(exc) or get_error_message("validation_error"))

    @app.exception_handler(Exception)
    async def on_unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error during %s %s", request.method, request.url.path)
        return create_error_response(500, get_error_message("server_error"))


def create_app(*, seed_demo_data_on_startup: bool = SEED_DEMO_DATA) -> FastAPI:
    app = FastAPI(title="SwipeHire")

    for module in (auth_api, job_api, candidate_api, screening_api, chat_api):
        app.include_router(module.router)

    # Screening sessions live as long as this app instance.
    app.state.screening_sessions = ScreeningSessionRegistry(
        ApplicationStore(database.SessionLocal),
        threshold=SWIPE_THRESHOLD,
    )
    app.state.db_init_error = None

    _register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_frontend_origins(),
        allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.on_event("startup")
    def prepare_store() -> None:
        try:
            database.init_db()
            if seed_demo_data_on_startup:
                with database.SessionLocal() as db:
                    seed_demo_data(db)
        except Exception as e:
            logger.exception("Could not prepare the data store")
            app.state.db_init_error = str(e)

    @app.get("/health")
    def health_check():
        return {"status": "Backend running", "service": "SwipeHire"}

    @app.get("/db/health")
    def db_health():
        if app.state.db_init_error:
            raise HTTPException(status_code=503, detail=f"DB init failed: {app.state.db_init_error}")
        try:
            with database.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise HTTPException(status_code=503, detail=f"DB connection failed: {e}")
        return {"status": "ok"}

    return app


app = create_app()
