from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from worktracker.api.routes import health
from worktracker.core.config import settings
from worktracker.core.errors import register_error_handlers
from worktracker.core.logging import configure_logging, get_logger
from worktracker.core.monitoring import configure_error_monitoring
from worktracker.core.observability import configure_observability
from worktracker.db.session import create_schema, session_scope
from worktracker.domains.settings.router import router as settings_router
from worktracker.domains.work_logs.router import router as work_logs_router
from worktracker.seed.seed_data import seed

configure_logging(settings.log_level)
configure_observability()
configure_error_monitoring()
logger = get_logger(__name__)

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_error_handlers(app)

app.include_router(health.router)
app.include_router(work_logs_router, prefix=settings.api_prefix)
app.include_router(settings_router, prefix=settings.api_prefix)


@app.on_event("startup")
def startup_event() -> None:
    if settings.auto_create_schema:
        create_schema()
    if settings.seed_demo_data:
        with session_scope() as session:
            seed(session)
    logger.info("startup_complete", env=settings.env)


@app.get("/")
def root() -> dict[str, str]:
    return {"message": "Work hours tracker API running", "environment": settings.env}
