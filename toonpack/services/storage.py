"""
Storage Service

S3-compatible object storage client for MinIO.
"""

import io
import logging
import re
import secrets

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import Request

from ..config import Settings, get_settings

logger = logging.getLogger(__name__)

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def random_suffix() -> str:
    """Short random token that keeps object keys unique."""
    return secrets.token_hex(6)


def safe_key_part(value: str) -> str:
    """Collapse anything that is not safe in an object key to '_'."""
    return _UNSAFE_KEY_CHARS.sub("_", value).strip("_") or "file"


class StorageService:
    """
    S3-compatible storage service.

    Objects are written under user-scoped keys and served from a public
    URL, which is what gets stored on photo and sticker rows.
    """

    def __init__(self, settings: Settings | None = None):
        """Initialize S3 client."""
        settings = settings or get_settings()
        self.endpoint_url = f"{'https' if settings.minio_secure else 'http'}://{settings.minio_endpoint}"

        self.client = boto3.client(
            "s3",
            endpoint_url=self.endpoint_url,
            aws_access_key_id=settings.minio_access_key,
            aws_secret_access_key=settings.minio_secret_key,
            config=Config(signature_version="s3v4"),
            region_name="us-east-1",  # Required for MinIO
        )
        self.bucket = settings.minio_bucket
        self.public_url = (
            settings.storage_public_url or f"{self.endpoint_url}/{self.bucket}"
        ).rstrip("/")
        self._ensure_bucket()

    def _ensure_bucket(self):
        """Create bucket if it doesn't exist."""
        try:
            self.client.head_bucket(Bucket=self.bucket)
            logger.info(f"Bucket '{self.bucket}' exists")
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code")
            if error_code == "404":
                logger.info(f"Creating bucket '{self.bucket}'")
                self.client.create_bucket(Bucket=self.bucket)
            else:
                logger.error(f"Error checking bucket: {e}")
                raise

    def upload_bytes(
        self,
        data: bytes,
        key: str,
        content_type: str = "application/octet-stream",
    ) -> str:
        """
        Upload bytes to S3.

        Args:
            data: Bytes to upload
            key: S3 object key (path)
            content_type: MIME type

        Returns:
            The S3 key of the uploaded file
        """
        try:
            self.client.upload_fileobj(
                io.BytesIO(data),
                self.bucket,
                key,
                ExtraArgs={"ContentType": content_type},
            )
            logger.info(f"Uploaded file to s3://{self.bucket}/{key}")
            return key
        except ClientError as e:
            logger.error(f"Failed to upload file: {e}")
            raise

    def get_public_url(self, key: str) -> str:
        """Public URL an object is readable at."""
        return f"{self.public_url}/{key}"

    def put(self, key: str, data: bytes, content_type: str) -> str:
        """
        Upload bytes and return their public URL.

        Args:
            key: S3 object key
            data: Bytes to upload
            content_type: MIME type

        Returns:
            Public URL of the stored object
        """
        self.upload_bytes(data, key, content_type)
        return self.get_public_url(key)

    def delete_file(self, key: str) -> bool:
        """
        Delete a file from S3.

        Args:
            key: S3 object key

        Returns:
            True if deleted successfully
        """
        try:
            self.client.delete_object(Bucket=self.bucket, Key=key)
            logger.info(f"Deleted s3://{self.bucket}/{key}")
            return True
        except ClientError as e:
            logger.error(f"Failed to delete file: {e}")
            return False

    def health_check(self) -> bool:
        """Check that the bucket is reachable."""
        try:
            self.client.head_bucket(Bucket=self.bucket)
            return True
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Storage health check failed: {e}")
            return False


def get_storage_service(request: Request) -> StorageService:
    """Storage service created at startup."""
    return request.app.state.storage
