# hrdesk/utils/uploads.py
import logging
import shutil
import uuid
from pathlib import Path
from typing import Iterable, Optional

from fastapi import UploadFile

log = logging.getLogger(__name__)


def has_file(upload: Optional[UploadFile]) -> bool:
    return upload is not None and bool(getattr(upload, "filename", None))


def save_upload(upload: UploadFile, upload_dir: Path) -> str:
    """
    Store an uploaded file under upload_dir with a generated name.
    Returns the stored filename (not the full path).
    """
    upload_dir.mkdir(parents=True, exist_ok=True)
    suffix = Path(upload.filename or "").suffix.lower()
    if not suffix[1:].isalnum():
        suffix = ""
    filename = f"{uuid.uuid4().hex}{suffix}"
    with open(upload_dir / filename, "wb") as out:
        shutil.copyfileobj(upload.file, out)
    log.info("Saved upload %r as %s", upload.filename, filename)
    return filename


def remove_uploads(filenames: Iterable[Optional[str]], upload_dir: Path) -> None:
    """Delete stored files; missing ones are ignored, IO errors are logged."""
    for filename in filenames:
        if not filename:
            continue
        # stored names are flat; never follow a path out of upload_dir
        path = upload_dir / Path(filename).name
        try:
            path.unlink(missing_ok=True)
        except OSError:
            log.exception("Could not delete stored file %s", path)
