# hrdesk/utils/pdf_renderer.py
import logging
from pathlib import Path

from playwright.sync_api import sync_playwright, Error as PlaywrightError

log = logging.getLogger(__name__)

PAGE_MARGIN = "40px"
LAUNCH_ARGS = ["--no-sandbox", "--disable-setuid-sandbox", "--disable-dev-shm-usage"]


class PdfRenderError(RuntimeError):
    pass


def render_html_to_pdf(html_content: str, out_path: Path, timeout_ms: int = 30000) -> Path:
    """
    Render HTML to an A4 PDF at out_path using a headless Chromium.
    A browser is launched for this call only and always closed.
    """
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with sync_playwright() as p:
            browser = p.chromium.launch(headless=True, args=LAUNCH_ARGS)
            try:
                page = browser.new_page()
                page.set_default_timeout(timeout_ms)
                page.set_content(html_content, wait_until="load")
                page.pdf(
                    path=str(out_path),
                    format="A4",
                    print_background=True,
                    margin={"top": PAGE_MARGIN, "right": PAGE_MARGIN, "bottom": PAGE_MARGIN, "left": PAGE_MARGIN},
                )
            finally:
                browser.close()
    except PlaywrightError as e:
        log.exception("Headless browser failed while rendering %s", out_path.name)
        raise PdfRenderError(f"PDF rendering failed: {e}") from e

    log.info("Saved PDF -> %s", out_path)
    return out_path
