import os
from typing import Any, Optional
from config import config
from components.errors import UploadValidationError


def validate_upload(file: Any, content_length: Optional[int]) -> None:
    """
    Validate file upload based on extension and size.

    Args:
        file: The uploaded file object (werkzeug FileStorage)
        content_length: Content length from request headers

    Raises:
        UploadValidationError: If validation fails with specific error message
    """
    if not file or not file.filename:
        raise UploadValidationError('No file provided')

    ext = os.path.splitext(file.filename)[1].lower()
    if ext not in config.ALLOWED_EXT:
        allowed = ", ".join(sorted(config.ALLOWED_EXT))
        raise UploadValidationError(f'Invalid file type: {ext or "(none)"}. Allowed types: {allowed}')

    if content_length and content_length > config.MAX_UPLOAD_SIZE:
        raise UploadValidationError(f'File too large. Maximum size: {config.MAX_UPLOAD_SIZE / (1024 * 1024):.1f} MB')
