import time
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

from .config import settings
from .utils.logger import app_logger


logger = app_logger.bind(component="uploads")

UPLOAD_URL_PREFIX = "/uploads"
DEFAULT_EXTENSION = "png"


def avatar_filename(filename: Optional[str], now_ms: Optional[int] = None) -> str:
    """Name a stored avatar ``avatar_<epoch-ms>.<ext>``."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    name = filename or ""
    ext = name.rsplit(".", 1)[1].lower() if "." in name else ""
    if not ext.isalnum():
        ext = DEFAULT_EXTENSION
    return f"avatar_{now_ms}.{ext}"


def save_avatar(file: UploadFile, upload_dir: Optional[Path] = None) -> str:
    """Save an uploaded avatar image and return the URL it is served from."""
    upload_dir = Path(upload_dir) if upload_dir is not None else settings.upload_path
    upload_dir.mkdir(parents=True, exist_ok=True)

    filename = avatar_filename(file.filename)
    with open(upload_dir / filename, "wb") as f:
        f.write(file.file.read())

    logger.info(f"Stored avatar {filename}")
    return f"{UPLOAD_URL_PREFIX}/{filename}"
