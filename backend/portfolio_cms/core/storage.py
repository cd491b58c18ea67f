"""Asset storage: upload, remove and replace files in S3 buckets.

Each asset category maps to its own bucket, type allow-list and size
ceiling. Public URLs have the form ``{s3_public_url}/{bucket}/{key}``;
``remove`` parses the key back out of that URL.

Uploading is a primary operation and raises on failure. Removal is
best-effort: it reports a ``CleanupResult`` and never raises, so a flaky
storage provider can not block the content edit that triggered it.
"""

import time
import uuid
from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlparse

import boto3
from botocore.config import Config
from fastapi import UploadFile

from portfolio_cms.config import Settings, settings as default_settings
from portfolio_cms.core.exceptions import (
    FileTooLargeError,
    InvalidFileTypeError,
    UploadFailedError,
)
from portfolio_cms.core.logging import get_logger

logger = get_logger(__name__)


class AssetCategory(str, Enum):
    """Kinds of uploaded assets."""

    PROJECTS = "projects"
    CONTENT = "content"
    RESUMES = "resumes"


IMAGE_TYPES: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}

DOCUMENT_TYPES: dict[str, str] = {
    "application/pdf": "pdf",
    "application/msword": "doc",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
}


@dataclass(frozen=True)
class CategoryPolicy:
    """Storage rules for one asset category."""

    bucket: str
    allowed_types: dict[str, str]
    max_size: int


@dataclass(frozen=True)
class CleanupResult:
    """Outcome of a best-effort removal.

    ``ok`` is False when the URL could not be parsed or the provider
    refused the delete; callers may log it but must not fail on it.
    """

    ok: bool
    key: str | None = None
    reason: str | None = None


def build_policies(config: Settings) -> dict[AssetCategory, CategoryPolicy]:
    """Build the per-category policies from settings."""
    return {
        AssetCategory.PROJECTS: CategoryPolicy(
            bucket=config.s3_projects_bucket,
            allowed_types=IMAGE_TYPES,
            max_size=config.max_project_image_size,
        ),
        AssetCategory.CONTENT: CategoryPolicy(
            bucket=config.s3_content_bucket,
            allowed_types=IMAGE_TYPES,
            max_size=config.max_content_image_size,
        ),
        AssetCategory.RESUMES: CategoryPolicy(
            bucket=config.s3_resumes_bucket,
            allowed_types=DOCUMENT_TYPES,
            max_size=config.max_resume_size,
        ),
    }


class AssetManager:
    """Upload, remove and replace assets in object storage."""

    def __init__(self, config: Settings | None = None, client=None) -> None:
        self.config = config or default_settings
        self.policies = build_policies(self.config)
        self._client = client

    @property
    def is_configured(self) -> bool:
        """Check if S3 credentials are configured."""
        return bool(self.config.s3_access_key and self.config.s3_secret_key)

    @property
    def client(self):
        """Get or create the S3 client.

        Raises:
            UploadFailedError: If S3 credentials are not configured.
        """
        if self._client is None:
            if not self.is_configured:
                raise UploadFailedError(
                    "storage is not configured. Set S3_ACCESS_KEY and S3_SECRET_KEY."
                )
            self._client = boto3.client(
                "s3",
                endpoint_url=self.config.s3_endpoint_url or None,
                aws_access_key_id=self.config.s3_access_key,
                aws_secret_access_key=self.config.s3_secret_key,
                region_name=self.config.s3_region,
                config=Config(signature_version="s3v4"),
            )
        return self._client

    # ------------------------------------------------------------------
    # Validation and naming
    # ------------------------------------------------------------------

    def validate(self, file: UploadFile, category: AssetCategory) -> None:
        """Check the declared content type and size of ``file``.

        Runs before any storage call.

        Raises:
            InvalidFileTypeError: If the type is not allowed.
            FileTooLargeError: If the declared size exceeds the ceiling.
        """
        policy = self.policies[category]

        if file.content_type not in policy.allowed_types:
            raise InvalidFileTypeError(file.content_type, sorted(policy.allowed_types))

        if file.size is not None and file.size > policy.max_size:
            raise FileTooLargeError(file.size, policy.max_size)

    def generate_key(self, filename: str | None, content_type: str, category: AssetCategory) -> str:
        """Generate a collision-resistant object key.

        Format: ``{category}/{epoch_ms}-{uuid4}.{ext}``. The extension comes
        from the original filename, falling back to the content type.
        """
        ext = ""
        if filename and "." in filename:
            ext = filename.rsplit(".", 1)[-1].lower()
        if not ext:
            ext = self.policies[category].allowed_types.get(content_type, "bin")

        timestamp = int(time.time() * 1000)
        return f"{category.value}/{timestamp}-{uuid.uuid4()}.{ext}"

    def public_url(self, bucket: str, key: str) -> str:
        """Build the public URL of an object.

        Raises:
            UploadFailedError: If no public base URL is configured.
        """
        base = (self.config.s3_public_url or self.config.s3_endpoint_url).rstrip("/")
        if not base:
            raise UploadFailedError("failed to get public URL after upload")
        return f"{base}/{bucket}/{key}"

    def extract_key(
        self, url: str, category: AssetCategory | None = None
    ) -> tuple[str, str] | None:
        """Extract ``(bucket, key)`` from a public URL.

        Locates the bucket name among the URL path segments and joins what
        follows it. Without a category every known bucket is tried.

        Example:
            https://cdn.example.com/storage/v1/object/public/projects/a/b.png
            -> ("projects", "a/b.png")
        """
        if not url:
            return None

        try:
            segments = urlparse(url).path.split("/")
        except ValueError:
            return None

        if category is not None:
            buckets = [self.policies[category].bucket]
        else:
            buckets = [policy.bucket for policy in self.policies.values()]

        for bucket in buckets:
            if bucket not in segments:
                continue
            index = segments.index(bucket)
            key = "/".join(segments[index + 1:])
            if key:
                return bucket, key

        return None

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def upload(self, file: UploadFile, category: AssetCategory) -> str:
        """Validate and store ``file``; return its public URL.

        Raises:
            InvalidFileTypeError, FileTooLargeError: On validation failure.
            UploadFailedError: If the provider rejects the upload.
        """
        self.validate(file, category)
        policy = self.policies[category]

        content = await file.read()
        if len(content) > policy.max_size:
            raise FileTooLargeError(len(content), policy.max_size)

        content_type = file.content_type or "application/octet-stream"
        key = self.generate_key(file.filename, content_type, category)
        url = self.public_url(policy.bucket, key)

        try:
            self.client.put_object(
                Bucket=policy.bucket,
                Key=key,
                Body=content,
                ContentType=content_type,
                CacheControl="max-age=3600",
            )
        except UploadFailedError:
            raise
        except Exception as e:
            logger.exception(
                "asset_upload_failed",
                error=str(e),
                bucket=policy.bucket,
                key=key,
            )
            raise UploadFailedError(str(e))

        logger.info(
            "asset_uploaded",
            category=category.value,
            bucket=policy.bucket,
            key=key,
            size=len(content),
        )
        return url

    async def remove(
        self, url: str, category: AssetCategory | None = None
    ) -> CleanupResult:
        """Delete the object behind ``url``. Best-effort, never raises."""
        location = self.extract_key(url, category)
        if location is None:
            logger.warning("asset_url_unparsable", url=url)
            return CleanupResult(ok=False, reason="unparsable_url")

        bucket, key = location
        try:
            self.client.delete_object(Bucket=bucket, Key=key)
        except Exception as e:
            logger.warning("asset_remove_failed", error=str(e), bucket=bucket, key=key)
            return CleanupResult(ok=False, key=key, reason=str(e))

        logger.info("asset_removed", bucket=bucket, key=key)
        return CleanupResult(ok=True, key=key)

    async def replace(
        self,
        old_url: str | None,
        file: UploadFile,
        category: AssetCategory,
    ) -> str:
        """Upload ``file`` and then remove ``old_url``.

        The new object is stored before the old one is touched; if the
        upload raises, nothing is removed.
        """
        new_url = await self.upload(file, category)

        if old_url and old_url != new_url:
            await self.remove(old_url, category)

        return new_url


def get_asset_manager() -> AssetManager:
    """FastAPI dependency returning the shared asset manager."""
    return asset_manager


# Shared instance; the boto3 client is created lazily on first use
asset_manager = AssetManager()
