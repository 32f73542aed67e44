# hrdesk/config.py
import os
import pathlib
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv, find_dotenv

PACKAGE_DIR = pathlib.Path(__file__).resolve().parent
ROOT = PACKAGE_DIR.parent

# .env next to the project root wins, otherwise search upwards from cwd
_env_path = ROOT / ".env"
if not _env_path.exists():
    _env_path = find_dotenv(usecwd=True)
load_dotenv(_env_path)

DEFAULT_JWT_SECRET = "devsecret123"
# 1x1 placeholder letterhead images; production sets ASSETS_DIR
BUNDLED_ASSETS_DIR = PACKAGE_DIR / "offer_letter" / "assets"


def _flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw in (None, ""):
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}")


@dataclass
class Settings:
    database_url: str
    db_ssl_ca: Optional[str] = None
    db_echo: bool = False
    auto_init_db: bool = False

    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_expire_minutes: int = 60

    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    email_user: Optional[str] = None
    email_pass: Optional[str] = None
    from_name: str = ""
    smtp_timeout: int = 30

    upload_dir: pathlib.Path = field(default_factory=lambda: pathlib.Path("uploads"))
    assets_dir: pathlib.Path = field(default_factory=lambda: BUNDLED_ASSETS_DIR)
    pdf_render_timeout_ms: int = 30000

    expose_created_password: bool = False
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    port: int = 5000
    log_level: str = "INFO"

    @property
    def mail_configured(self) -> bool:
        return bool(self.email_user and self.email_pass)

    @classmethod
    def from_env(cls) -> "Settings":
        database_url = os.getenv("DATABASE_URL") or _mysql_url()
        origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
        return cls(
            database_url=database_url,
            db_ssl_ca=os.getenv("DB_SSL_CA") or None,
            db_echo=_flag("DB_ECHO"),
            auto_init_db=_flag("AUTO_INIT_DB", "1" if database_url.startswith("sqlite") else "0"),
            jwt_secret=os.getenv("JWT_SECRET") or DEFAULT_JWT_SECRET,
            jwt_expire_minutes=_int("JWT_EXPIRE_MINUTES", 60),
            smtp_host=os.getenv("SMTP_HOST") or "smtp.gmail.com",
            smtp_port=_int("SMTP_PORT", 587),
            email_user=os.getenv("EMAIL_USER") or None,
            email_pass=os.getenv("EMAIL_PASS") or None,
            from_name=os.getenv("FROM_NAME", ""),
            smtp_timeout=_int("SMTP_TIMEOUT", 30),
            upload_dir=pathlib.Path(os.getenv("UPLOAD_DIR") or "uploads"),
            assets_dir=pathlib.Path(os.getenv("ASSETS_DIR") or BUNDLED_ASSETS_DIR),
            pdf_render_timeout_ms=_int("PDF_RENDER_TIMEOUT_MS", 30000),
            expose_created_password=_flag("EXPOSE_CREATED_PASSWORD"),
            cors_origins=origins or ["*"],
            port=_int("PORT", 5000),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


def _mysql_url() -> str:
    from sqlalchemy.engine import URL

    return URL.create(
        "mysql+mysqlconnector",
        username=os.getenv("DB_USER", "root"),
        password=os.getenv("DB_PASSWORD", ""),
        host=os.getenv("DB_HOST", "localhost"),
        port=_int("DB_PORT", 3306),
        database=os.getenv("DB_NAME", "hrdesk"),
    ).render_as_string(hide_password=False)


def get_settings() -> Settings:
    """Read settings from the environment at call time (fresh values)."""
    return Settings.from_env()
