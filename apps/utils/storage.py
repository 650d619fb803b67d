"""Credential-file intake: persist an uploaded file and return where it went.

Two backends share the same ``save(uploaded_file)`` and ``delete(path)``
calls. ``save(None)`` returns an empty string so callers can store the
result unconditionally.
"""

import os
import re
import time
import logging
from urllib.parse import urlparse

import cloudinary
import cloudinary.uploader
from django.conf import settings
from django.core.files.storage import FileSystemStorage

logger = logging.getLogger(__name__)


def timestamped_name(filename, now=None):
    """<epoch milliseconds>-<original name>"""
    millis = int((now if now is not None else time.time()) * 1000)
    return f"{millis}-{os.path.basename(filename)}"


def cloudinary_asset(url):
    """(resource_type, public_id) from a Cloudinary delivery URL"""
    parts = urlparse(url).path.strip("/").split("/")
    if len(parts) < 4 or parts[2] != "upload":
        raise ValueError(f"Not a Cloudinary upload URL: {url}")
    resource_type, rest = parts[1], parts[3:]
    if rest and re.fullmatch(r"v\d+", rest[0]):
        rest = rest[1:]
    public_id = "/".join(rest)
    if resource_type != "raw":
        public_id, _ = os.path.splitext(public_id)
    return resource_type, public_id


class LocalCredentialStorage:
    """Writes uploads into a directory on local disk."""

    def __init__(self, upload_dir):
        self.upload_dir = str(upload_dir)
        self.storage = FileSystemStorage(location=self.upload_dir)

    def save(self, uploaded_file):
        if uploaded_file is None:
            return ""

        name = self.storage.generate_filename(timestamped_name(uploaded_file.name))
        saved_name = self.storage.save(name, uploaded_file)
        path = self.storage.path(saved_name)
        logger.info(f"Stored credentials file at {path}")
        return path

    def delete(self, path):
        name = os.path.relpath(path, self.upload_dir)
        if name.startswith(os.pardir):
            raise ValueError(f"{path} is outside {self.upload_dir}")
        self.storage.delete(name)
        logger.info(f"Removed credentials file {path}")


class CloudinaryCredentialStorage:
    """Uploads into a Cloudinary folder and returns the secure URL."""

    def __init__(self, folder="credentials", cloud_name=None, api_key=None, api_secret=None):
        self.folder = folder
        cloudinary.config(
            cloud_name=cloud_name,
            api_key=api_key,
            api_secret=api_secret,
            secure=True
        )

    def save(self, uploaded_file):
        if uploaded_file is None:
            return ""

        base_name, _ = os.path.splitext(timestamped_name(uploaded_file.name))
        public_id = f"{self.folder}/{base_name}"
        try:
            response = cloudinary.uploader.upload(
                uploaded_file,
                public_id=public_id,
                resource_type="auto",
                overwrite=False
            )
        except Exception as e:
            logger.error(f"Error uploading to Cloudinary: {str(e)}")
            raise

        logger.info(f"Uploaded credentials file to Cloudinary: {response.get('public_id')}")
        return response["secure_url"]

    def delete(self, url):
        resource_type, public_id = cloudinary_asset(url)
        try:
            response = cloudinary.uploader.destroy(public_id, resource_type=resource_type)
        except Exception as e:
            logger.error(f"Error deleting from Cloudinary: {str(e)}")
            raise
        logger.info(f"Deleted file from Cloudinary: {public_id}, Result: {response}")
        return response.get("result") == "ok"


def get_credential_storage():
    """Build the file intake backend named by CREDENTIALS_STORAGE"""
    backend = getattr(settings, "CREDENTIALS_STORAGE", "local")

    if backend == "local":
        return LocalCredentialStorage(settings.THERAPIST_UPLOADS_DIR)
    if backend == "cloudinary":
        return CloudinaryCredentialStorage(
            folder=settings.CLOUDINARY_FOLDER,
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
        )
    raise ValueError(f"Unknown CREDENTIALS_STORAGE backend: {backend}")
