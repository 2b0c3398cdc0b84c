import os
import uuid
from typing import Optional
from werkzeug.utils import secure_filename
from flask import current_app


def build_filename(original_name: str) -> str:
    """Random filename that keeps the original (sanitized) extension."""
    filename = secure_filename(original_name or "")
    ext = filename.rsplit('.', 1)[1].lower() if '.' in filename else ""
    unique = uuid.uuid4().hex
    return f"{unique}.{ext}" if ext else unique


def tenant_path(tenant_id: str, filename: str) -> str:
    return f"uploads/{tenant_id}/{filename}"


def public_url(relative_path: Optional[str]) -> Optional[str]:
    if not relative_path:
        return None
    return f"/{relative_path.lstrip('/')}"


class LocalBlobStorage:
    """
    Write-once file placement under a root directory.

    Callers only ever deal in relative paths (``uploads/<tenant>/<file>``);
    the root stays a deployment detail.
    """

    def __init__(self, root: str):
        self.root = os.path.abspath(root)

    def absolute_path(self, relative_path: str) -> str:
        path = os.path.abspath(os.path.join(self.root, relative_path.lstrip('/')))
        if os.path.commonpath([self.root, path]) != self.root:
            raise ValueError(f"Path escapes storage root: {relative_path}")
        return path

    def save(self, relative_path: str, data: bytes) -> str:
        path = self.absolute_path(relative_path)
        os.makedirs(os.path.dirname(path), exist_ok=True)

        # "xb" refuses to overwrite an existing blob
        with open(path, "xb") as fh:
            fh.write(data)
        return relative_path

    def delete(self, relative_path: Optional[str]) -> bool:
        if not relative_path:
            return False

        path = self.absolute_path(relative_path)
        if os.path.exists(path):
            try:
                os.remove(path)
                return True
            except OSError as e:
                current_app.logger.error(f"Failed to delete file {path}: {e}")
                return False
        return False


def get_storage() -> LocalBlobStorage:
    return current_app.extensions["blob_storage"]
