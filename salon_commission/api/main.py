from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from salon_commission.api.routes import commission, health, hours, reports, therapists, transactions
from salon_commission.core.config import settings
from salon_commission.core.logging import configure_logging, get_logger
from salon_commission.core.monitoring import configure_error_monitoring
from salon_commission.core.observability import configure_observability
from salon_commission.db.session import init_db

configure_logging(settings.log_level)
configure_observability()
configure_error_monitoring()
logger = get_logger(__name__)

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(therapists.router)
app.include_router(hours.router)
app.include_router(transactions.router)
app.include_router(commission.router)
app.include_router(reports.router)


@app.on_event("startup")
def startup_event() -> None:
    init_db()
    logger.info("startup_complete", env=settings.env)


@app.get("/")
def root() -> dict[str, str]:
    return {"message": "Salon commission API running", "environment": settings.env}
