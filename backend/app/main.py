"""
FastAPI entrypoint for the budget server.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import Depends, FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from app.api.dependencies import get_session, get_settings, issue_session_cookie
from app.api.error_handlers import register_error_handlers
from app.api.router import api_router
from app.core.config import Settings
from app.core.sessions import Session, SessionStore
from app.db.session import create_identity_engine, create_session_factory
from app.db.store import StoreProvisioner

logger = logging.getLogger(__name__)


def create_app(settings: Settings) -> FastAPI:
    """Build the application around an explicit settings object."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        app.state.provisioner.dispose()
        app.state.identity_engine.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Personal budget tracking API",
        version="0.1.0",
        lifespan=lifespan,
    )

    identity_engine = create_identity_engine(settings.DATABASE_PATH, echo=settings.DB_ECHO)
    app.state.settings = settings
    app.state.identity_engine = identity_engine
    app.state.identity_sessionmaker = create_session_factory(identity_engine)
    app.state.provisioner = StoreProvisioner(settings.DATABASE_PATH, echo=settings.DB_ECHO)
    app.state.session_store = SessionStore(settings.SESSION_EXPIRY_DAYS * 24 * 60 * 60)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Accept", "Cookie"],
    )

    register_error_handlers(app)
    app.include_router(api_router)

    @app.get("/")
    def root(
        response: Response,
        session: Session = Depends(get_session),
        settings: Settings = Depends(get_settings),
    ):
        """Landing endpoint counting visits in the session."""
        visit_count = session.get("visitor_count", 0) + 1
        session.set("visitor_count", visit_count)
        issue_session_cookie(response, session, settings)
        return {"message": f"{settings.APP_NAME} API ready", "visit_count": visit_count}

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


def run(settings: Optional[Settings] = None) -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn
    from app.core.config import get_settings as load_settings

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = settings or load_settings()
    logger.info(f"Server running on http://{settings.bind_address}")
    uvicorn.run(create_app(settings), host=settings.SERVER_HOST, port=settings.SERVER_PORT)


if __name__ == "__main__":
    run()
