from __future__ import annotations
import uuid


def new_id() -> str:
    return str(uuid.uuid4())


def upload_key(user_id: str, extension: str) -> str:
    """
    Build the S3 object key for an uploaded image.
    """
    ext = extension.lower().lstrip(".")
    return f"uploads/{user_id}/{uuid.uuid4().hex}.{ext}"
