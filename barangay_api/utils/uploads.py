import os
import random
import time
from flask import current_app
from werkzeug.utils import secure_filename
from barangay_api.exceptions import ValidationError


def upload_dir(*parts) -> str:
    path = os.path.join(current_app.config["UPLOAD_ROOT"], *parts)
    os.makedirs(path, exist_ok=True)
    return path


def validate_photo(file_storage):
    allowed = current_app.config["ALLOWED_IMAGE_MIME_TYPES"]
    if file_storage.mimetype not in allowed:
        raise ValidationError(
            f"Invalid file type. Allowed types: {', '.join(allowed)}"
        )


def save_photo(file_storage) -> str:
    """Validate an uploaded registrant photo and store it under UPLOAD_ROOT/photos."""
    validate_photo(file_storage)

    _, ext = os.path.splitext(secure_filename(file_storage.filename or ""))
    filename = f"photo-{int(time.time() * 1000)}-{random.randint(0, 10**9)}{ext.lower()}"
    file_path = os.path.join(upload_dir("photos"), filename)
    file_storage.save(file_path)

    current_app.logger.info(f"Stored registrant photo at {file_path}")
    return file_path


def discard_upload(file_path):
    if file_path and os.path.isfile(file_path):
        os.remove(file_path)
        current_app.logger.info(f"Removed orphaned upload {file_path}")
