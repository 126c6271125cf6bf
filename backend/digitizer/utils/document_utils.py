"""
Document utility functions for ids, upload file names and public paths.
"""
import re
import threading
import time
from datetime import datetime, timezone
from pathlib import PurePath

from ..core.config import UPLOAD_URL_PREFIX
from ..core.logging_config import get_logger

logger = get_logger(__name__)

_id_lock = threading.Lock()
_last_id = 0

_UNSAFE_FILENAME_CHARS = re.compile(r"[\\/:*?\"<>|\x00-\x1f]")


def generate_document_id() -> str:
    """
    Millisecond-timestamp id, strictly increasing within the process.

    Two uploads landing in the same millisecond get consecutive ids instead
    of colliding.
    """
    global _last_id
    with _id_lock:
        candidate = int(time.time() * 1000)
        if candidate <= _last_id:
            candidate = _last_id + 1
        _last_id = candidate
        return str(candidate)


def safe_original_name(original_name: str) -> str:
    """Strip any client-supplied directories and unsafe characters."""
    name = PurePath(original_name.replace("\\", "/")).name
    name = _UNSAFE_FILENAME_CHARS.sub("_", name).strip()
    return name or "upload"


def build_upload_filename(doc_id: str, original_name: str) -> str:
    """Stored name for an upload: '<document id>-<original name>'."""
    return f"{doc_id}-{safe_original_name(original_name)}"


def public_upload_path(filename: str) -> str:
    """URL path under which a stored upload is served."""
    return f"{UPLOAD_URL_PREFIX}/{filename}"


def utc_now_iso() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a 'Z' suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
