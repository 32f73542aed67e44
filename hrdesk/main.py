# hrdesk/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from hrdesk.config import BUNDLED_ASSETS_DIR, DEFAULT_JWT_SECRET, get_settings
from hrdesk import database
from hrdesk.errors import register_exception_handlers
from hrdesk.offer_letter.pipeline import LetterheadAssets

# Routers
from hrdesk.auth.login import router as auth_router
from hrdesk.employees.router import router as employee_router
from hrdesk.employees.profile import router as profile_router
from hrdesk.attendance.router import router as attendance_router
from hrdesk.salary.router import router as salary_router
from hrdesk.offer_letter.router import router as offer_letter_router

logger = logging.getLogger(__name__)

settings = get_settings()


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# --- LIFESPAN (startup/shutdown) ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    cfg = get_settings()
    configure_logging(cfg.log_level)
    logger.info("Starting hrdesk (db=%s)", database.engine.url.render_as_string(hide_password=True))
    logger.info("Mail account configured: %s", "yes" if cfg.mail_configured else "no")
    if cfg.jwt_secret == DEFAULT_JWT_SECRET:
        logger.warning("JWT_SECRET is not set; using the development secret")
    if cfg.assets_dir == BUNDLED_ASSETS_DIR:
        logger.warning("ASSETS_DIR is not set; offer letters use the placeholder logo and signature")

    # startup failures are fatal: the server must not come up half-initialized
    try:
        app.state.letterhead = LetterheadAssets.load(cfg.assets_dir)
        cfg.upload_dir.mkdir(parents=True, exist_ok=True)
        database.ping()
        if cfg.auto_init_db:
            database.init_db()
    except Exception:
        logger.exception("Startup failed")
        raise
    logger.info("Successfully connected to database")

    yield

    logger.info("Shutting down, disposing connection pool")
    database.engine.dispose()


app = FastAPI(title="hrdesk", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

register_exception_handlers(app)


# Health check (no auth)
@app.get("/api/health")
def health():
    try:
        database.ping()
    except SQLAlchemyError:
        logger.exception("Health check: database ping failed")
        return JSONResponse(status_code=503, content={"status": "error", "message": "Database connection failed"})
    return {"status": "ok", "message": "Database connected"}


# ------------------- ROUTERS -------------------
app.include_router(auth_router)
app.include_router(profile_router)
app.include_router(employee_router)
app.include_router(attendance_router)
app.include_router(salary_router)
app.include_router(offer_letter_router)


def run():
    import uvicorn

    cfg = get_settings()
    configure_logging(cfg.log_level)
    uvicorn.run("hrdesk.main:app", host="0.0.0.0", port=cfg.port)


if __name__ == "__main__":
    run()
