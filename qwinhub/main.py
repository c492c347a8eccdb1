from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from qwinhub.core.config import Settings, get_settings
from qwinhub.core.database import Database
from qwinhub.core.errors import register_exception_handlers
from qwinhub.core.logging_config import configure_logging
from qwinhub.routes.admin.admin_quiz_routers import admin_quiz_router
from qwinhub.routes.admin.draft_routers import draft_router
from qwinhub.routes.auth.auth_routers import auth_router
from qwinhub.routes.quiz.quiz_routers import quiz_router


def create_app(settings: Settings = None, database: Database = None) -> FastAPI:
    settings = settings or get_settings()
    logger = configure_logging(settings.LOG_LEVEL)
    database = database or Database.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("%s started", settings.APP_NAME)
        yield
        database.dispose()
        logger.info("%s stopped", settings.APP_NAME)

    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(quiz_router)
    app.include_router(admin_quiz_router)
    app.include_router(draft_router)

    @app.get("/", response_class=HTMLResponse)
    async def read_root():
        return f"""
        <html>
            <head>
                <title>{settings.APP_NAME}</title>
            </head>
            <body>
                <h1>{settings.APP_NAME} API</h1>
                <p>See the API documentation <a href="/docs">here</a>.</p>
            </body>
        </html>
        """

    return app
