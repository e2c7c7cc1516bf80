"""
CreativeGroups Payroll - FastAPI Dependencies

Shared request dependencies:
1. Uploaded spreadsheet content with size and type checks
"""

import logging

from fastapi import File, UploadFile

from app.config import settings
from app.utils.error_handling import InvalidFileException

logger = logging.getLogger(__name__)


SPREADSHEET_EXTENSIONS = (".xlsx", ".xlsm")


async def get_upload_content(file: UploadFile = File(...)) -> bytes:
    """
    Read an uploaded spreadsheet into memory.

    Raises:
        InvalidFileException: Empty file, wrong extension, or over the size limit
    """
    filename = (file.filename or "").lower()
    if filename and not filename.endswith(SPREADSHEET_EXTENSIONS):
        raise InvalidFileException()

    content = await file.read()
    if not content:
        raise InvalidFileException("No file uploaded.")
    if len(content) > settings.max_upload_size_bytes:
        logger.warning(f"Rejected upload '{file.filename}' of {len(content)} bytes")
        raise InvalidFileException(
            f"File exceeds the {settings.max_upload_size_mb} MB upload limit."
        )
    return content
