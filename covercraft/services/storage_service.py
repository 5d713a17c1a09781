"""
Uploaded resume storage (the ``cv-files`` bucket).

Blobs live on local disk under CV_STORAGE_DIR, keyed by
``<user_id>/<epoch_ms>_<filename>``.
"""
import logging
import os
import time
from pathlib import Path

from covercraft.core import config

logger = logging.getLogger(__name__)


def _bucket_root() -> Path:
    return Path(config.CV_STORAGE_DIR)


def build_cv_key(user_id: int, filename: str) -> str:
    safe_name = os.path.basename((filename or "resume").replace("\\", "/")) or "resume"
    return f"{user_id}/{int(time.time() * 1000)}_{safe_name}"


def upload_cv(user_id: int, filename: str, data: bytes) -> str:
    """
    Store an uploaded resume file.

    Returns:
        Storage key of the written blob
    """
    key = build_cv_key(user_id, filename)
    path = _bucket_root() / key
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "wb") as f:
        f.write(data)

    logger.info(f"CV stored: user_id={user_id}, key={key}, bytes={len(data)}")
    return key


def read_cv(key: str) -> bytes:
    root = _bucket_root().resolve()
    path = (root / key).resolve()
    if root not in path.parents:
        raise ValueError("Invalid storage key")
    with open(path, "rb") as f:
        return f.read()
