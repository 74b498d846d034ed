import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from backend.auth.jwt_handler import JwtTokenIssuer, TokenIssuer
from backend.core import config
from backend.core.logging_config import setup_logging
from backend.database import build_engine, build_session_factory, create_tables
from backend.routes import auth_routes, dashboard_routes, kanban_routes, session_routes, user_routes
from backend.storage.database_store import DatabaseEntityStore
from backend.storage.errors import ConflictError
from backend.storage.seed import seed_demo_data
from backend.storage.storage import Storage
from backend.storage.store import EntityStore, MemoryEntityStore

logger = logging.getLogger(__name__)


def build_entity_store(backend: str = config.STORAGE_BACKEND) -> EntityStore:
    if backend == 'memory':
        return MemoryEntityStore()

    engine = build_engine(config.DATABASE_URL)
    try:
        create_tables(engine)
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL and database credentials.')
    return DatabaseEntityStore(build_session_factory(engine))


def create_app(
    storage: Storage | None = None,
    token_issuer: TokenIssuer | None = None,
    seed_demo: bool = config.SEED_DEMO_DATA,
) -> FastAPI:
    setup_logging(config.LOG_LEVEL)
    config.validate_runtime_config()

    app = FastAPI(title='MentorConnect API')

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    app.state.storage = storage or Storage(
        build_entity_store(),
        average_rating=config.DASHBOARD_AVERAGE_RATING,
    )
    app.state.token_issuer = token_issuer or JwtTokenIssuer()

    @app.on_event('startup')
    def load_demo_data() -> None:
        if not seed_demo:
            return
        try:
            seed_demo_data(app.state.storage)
        except ConflictError as exc:
            logger.warning('Skipped demo data, it clashes with existing records: %s', exc)
        except SQLAlchemyError:
            logger.exception('Could not seed demo data.')

    @app.exception_handler(SQLAlchemyError)
    async def storage_unavailable(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.error('Storage failure on %s %s: %s', request.method, request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={'detail': 'Storage unavailable.'},
        )

    @app.get('/')
    def root():
        return {'status': 'MentorConnect API Running'}

    app.include_router(auth_routes.router, prefix='/api/auth')
    app.include_router(user_routes.router, prefix='/api/users')
    app.include_router(session_routes.router, prefix='/api/sessions')
    app.include_router(kanban_routes.router, prefix='/api/kanban')
    app.include_router(dashboard_routes.router, prefix='/api/dashboard')

    return app


app = create_app()
