"""
Tinte Upload Handling
Validates uploaded wallpapers and stages them on disk for the samplers.
"""
import os
import tempfile
from pathlib import Path

from fastapi import HTTPException, UploadFile

from ..config import config


def validate_file_upload(file: UploadFile) -> None:
    """
    Validate uploaded file for security and format compliance.

    Args:
        file: FastAPI UploadFile object

    Raises:
        HTTPException: 400 for invalid files, 415 for unsupported formats
    """
    # file.size might be None for some clients
    if file.size and file.size > config.MAX_FILE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum size: {config.MAX_FILE_MB}MB"
        )

    if file.content_type not in config.SUPPORTED_MIME_TYPES:
        raise HTTPException(
            status_code=415,
            detail=f"Unsupported media type. Supported: {', '.join(config.SUPPORTED_MIME_TYPES)}"
        )

    if file.filename:
        ext = file.filename.lower().split('.')[-1] if '.' in file.filename else ''
        if f".{ext}" not in config.SUPPORTED_EXTENSIONS:
            raise HTTPException(
                status_code=415,
                detail=f"Unsupported file extension. Supported: {', '.join(sorted(config.SUPPORTED_EXTENSIONS))}"
            )


def validate_magic_bytes(file_bytes: bytes) -> str:
    """
    Check file magic bytes against the supported image formats.

    Returns:
        Detected MIME type

    Raises:
        HTTPException: 400 for invalid/corrupt files
    """
    if len(file_bytes) < 12:
        raise HTTPException(status_code=400, detail="File too small or corrupt")

    if file_bytes.startswith(b'\xff\xd8\xff'):
        return "image/jpeg"
    if file_bytes.startswith(b'\x89PNG\r\n\x1a\n'):
        return "image/png"
    if file_bytes[:4] == b'RIFF' and file_bytes[8:12] == b'WEBP':
        return "image/webp"

    raise HTTPException(
        status_code=400,
        detail="Invalid image file. Magic bytes don't match supported formats."
    )


async def stage_upload(file: UploadFile) -> Path:
    """
    Validate an upload and write it to a temporary file.

    The caller owns the returned path and must delete it.

    Raises:
        HTTPException: 400 for unreadable, oversized or non-image uploads
    """
    validate_file_upload(file)

    try:
        file_bytes = await file.read()
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Failed to read file: {str(e)}")

    if len(file_bytes) > config.MAX_FILE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum size: {config.MAX_FILE_MB}MB"
        )

    mime_type = validate_magic_bytes(file_bytes)
    suffix = {"image/jpeg": ".jpg", "image/png": ".png", "image/webp": ".webp"}[mime_type]

    fd, name = tempfile.mkstemp(prefix="tinte-", suffix=suffix)
    with os.fdopen(fd, "wb") as f:
        f.write(file_bytes)
    return Path(name)
