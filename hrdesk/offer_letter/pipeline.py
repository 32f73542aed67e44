# hrdesk/offer_letter/pipeline.py
"""
Offer letter workflow: render the letter for one employee, turn it into a
PDF, mail it, then store the join date and salary.

The database update is staged (flushed, not committed) before the mail goes
out and committed only after the SMTP server accepted it. Anything failing
before that point rolls the update back, so a row is never changed without
the letter having been sent. The temporary PDF is removed on every path.
"""
import base64
import logging
import mimetypes
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Callable, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session

from hrdesk.config import Settings
from hrdesk.employees.models import Employee
from hrdesk.errors import is_unreachable
from hrdesk.utils.email_service import send_email
from hrdesk.utils.pdf_renderer import render_html_to_pdf

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
LOGO_FILE = "logo.jpeg"
SIGNATURE_FILE = "signature.png"

DEFAULT_SALARY_DISPLAY = "₹16,000 (default)"
ATTACHMENT_NAME = "offer_letter.pdf"
MAIL_SUBJECT = "Offer Letter from Motion View Ventures Pvt. Ltd."
MAIL_BODY = """Dear {first_name},

I hope you are doing well.

I am pleased to extend a warm welcome to you as the newest member of Motion View Ventures Pvt. Ltd. We are excited to have you join our team and look forward to seeing the great contributions you will make.

Please find attached your offer letter outlining the details of your role, compensation, and other important information. Kindly review the document and confirm your acceptance by replying to this mail or signing and returning a copy.

If you have any questions, feel free to reach out. We are here to support you as you embark on this new journey with us.

Once again, welcome aboard! We look forward to working with you.

Best regards,
Priya Gupta
HR
Motion View Ventures Pvt. Ltd.

Address: Near Medi Mercy Emergency Hospital, B.H Colony, Vijay Nagar, Kankarbagh, Patna, Bihar - 800026
Email: contact@motionviewventures.in
Phone No.: +91 7079367125
Website: motionviewventures.in"""

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
)


class OfferLetterError(Exception):
    """Request-level rejection (bad input, missing config, unknown employee)."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class OfferLetterStepError(Exception):
    """A pipeline step failed after validation."""

    def __init__(self, step: str, cause: Exception):
        super().__init__(str(cause))
        self.step = step
        self.cause = cause


# -------------------- letterhead assets --------------------
def data_uri(path: Path) -> str:
    mime = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    encoded = base64.b64encode(path.read_bytes()).decode("ascii")
    return f"data:{mime};base64,{encoded}"


@dataclass(frozen=True)
class LetterheadAssets:
    logo_src: str
    signature_src: str

    @classmethod
    def load(cls, assets_dir: Path) -> "LetterheadAssets":
        """Read logo and signature once; a missing file raises FileNotFoundError."""
        assets_dir = Path(assets_dir)
        return cls(
            logo_src=data_uri(assets_dir / LOGO_FILE),
            signature_src=data_uri(assets_dir / SIGNATURE_FILE),
        )


# -------------------- rendering helpers --------------------
def format_amount(amount) -> str:
    value = Decimal(str(amount))
    if value == value.to_integral_value():
        return f"{int(value):,}"
    return f"{value:,.2f}"


def salary_display(override: Optional[Decimal], stored: Optional[Decimal]) -> str:
    if override:
        return f"₹{format_amount(override)}"
    if stored:
        return f"₹{format_amount(stored)}"
    return DEFAULT_SALARY_DISPLAY


def _letter_date(d: date) -> str:
    return d.strftime("%d-%m-%Y")


def first_name(name: str) -> str:
    parts = (name or "").split()
    return parts[0] if parts else ""


def render_offer_letter(employee, join_date: date, salary_text: str,
                        assets: LetterheadAssets, today: Optional[date] = None) -> str:
    address_parts = [employee.address, employee.city, employee.state, employee.country]
    return _env.get_template("offer_letter.html").render(
        logo_src=assets.logo_src,
        signature_src=assets.signature_src,
        letter_date=_letter_date(today or date.today()),
        join_date=_letter_date(join_date),
        name=employee.name,
        first_name=first_name(employee.name),
        salary_display=salary_text,
        full_address=", ".join(p for p in address_parts if p),
    )


def pdf_path_for(upload_dir: Path, employee_id: int) -> Path:
    return Path(upload_dir) / f"offer_letter_{employee_id}.pdf"


# -------------------- pipeline --------------------
class OfferLetterPipeline:
    """
    rasterize: callable(html, out_path, timeout_ms) -> path
    send: callable(settings, to_email, subject, body, attachment_path=..., attachment_name=...)
    """

    def __init__(self, settings: Settings, assets: LetterheadAssets,
                 rasterize: Callable = render_html_to_pdf,
                 send: Callable = send_email):
        self.settings = settings
        self.assets = assets
        self.rasterize = rasterize
        self.send = send

    def _failure(self, name: str, e: Exception) -> Exception:
        # an unreachable database keeps its own type so it maps to 503 upstream
        if isinstance(e, DBAPIError) and is_unreachable(e):
            return e
        logger.error("Offer letter step '%s' failed: %s", name, e)
        return OfferLetterStepError(name, e)

    def _step(self, name: str, fn: Callable, *args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except Exception as e:
            failure = self._failure(name, e)
            if failure is e:
                raise
            raise failure from e

    def run(self, db: Session, employee_id: int, doj: Optional[date],
            salary_amount: Optional[Decimal] = None) -> Employee:
        # 1. validate
        if not doj:
            raise OfferLetterError(400, "Date of Joining is required")
        if not self.settings.mail_configured:
            raise OfferLetterError(500, "Email configuration is missing")

        # 2. fetch
        employee = db.query(Employee).filter(Employee.id == employee_id).first()
        if not employee:
            raise OfferLetterError(404, "Employee not found")

        # 3. render
        text = salary_display(salary_amount, employee.salary_amount)
        html = self._step("render", render_offer_letter, employee, doj, text, self.assets)

        pdf_path = pdf_path_for(self.settings.upload_dir, employee_id)
        try:
            # 4. rasterize
            self._step("rasterize", self.rasterize, html, pdf_path, self.settings.pdf_render_timeout_ms)

            # 5. stage the update so a broken row fails before anything is mailed
            employee.doj = doj
            employee.salary_amount = salary_amount if salary_amount else employee.salary_amount
            self._step("persist", db.flush)

            # 6. dispatch
            self._step(
                "dispatch", self.send, self.settings, employee.email, MAIL_SUBJECT,
                MAIL_BODY.format(first_name=first_name(employee.name)),
                attachment_path=str(pdf_path), attachment_name=ATTACHMENT_NAME,
            )
        except Exception:
            db.rollback()
            raise
        else:
            # 7. commit; the mail is already out, so a failure here can only be reported
            try:
                self._step("commit", db.commit)
            except Exception:
                db.rollback()
                logger.error(
                    "Offer letter for employee %s was emailed but doj/salary were not saved; "
                    "set doj=%s manually", employee_id, doj,
                )
                raise
        finally:
            # 8. cleanup
            try:
                pdf_path.unlink(missing_ok=True)
            except OSError:
                logger.exception("Could not delete temporary offer letter %s", pdf_path)

        logger.info("Offer letter sent to employee %s (doj=%s)", employee_id, doj)
        return employee
