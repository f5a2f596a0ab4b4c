from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from schoolquiz.config import Settings, settings as default_settings
from schoolquiz.database import open_database
from schoolquiz.errors import AppError
from schoolquiz.routes import quizzes, users
import logging

logger = logging.getLogger(__name__)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    error = errors[0]
    location = ".".join(str(part) for part in error.get("loc", ())[1:])
    return f"{location}: {error['msg']}" if location else error["msg"]


async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)}, headers=exc.headers)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"message": _validation_message(exc)})


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


def create_app(settings: Settings = default_settings) -> FastAPI:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.db = open_database(settings)
        try:
            yield
        finally:
            app.state.db.close()

    app = FastAPI(
        title=settings.app_name,
        version=settings.version,
        description="API for teachers to author quizzes and students to take them",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # CORS middleware for the browser client
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(quizzes.router, prefix="/api/quizzes", tags=["Quizzes"])
    app.include_router(users.router, prefix="/api/users", tags=["Users"])

    @app.get("/")
    async def root():
        return {"message": f"Welcome to {settings.app_name}", "version": app.version}

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("schoolquiz.main:app", host="0.0.0.0", port=8000, reload=default_settings.debug)
