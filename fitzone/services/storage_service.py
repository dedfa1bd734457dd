"""
Object storage on Cloudflare R2 (S3 compatible API via boto3)
Store images are public and served from R2_PUBLIC_URL.
"""

import logging
import uuid

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..config import (
    R2_ACCESS_KEY_ID,
    R2_ACCOUNT_ID,
    R2_BUCKET_NAME,
    R2_PUBLIC_URL,
    R2_SECRET_ACCESS_KEY,
)

logger = logging.getLogger(__name__)

STORE_FOLDER = "fitzone-store"

EXTENSIONS = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/webp": ".webp",
    "image/gif": ".gif",
    "image/svg+xml": ".svg",
    "image/avif": ".avif",
}


class StorageError(Exception):
    """Raised when the object store rejects a request"""


def get_r2_client():
    """Create and return an R2 client."""
    return boto3.client(
        "s3",
        endpoint_url=f"https://{R2_ACCOUNT_ID}.r2.cloudflarestorage.com",
        aws_access_key_id=R2_ACCESS_KEY_ID,
        aws_secret_access_key=R2_SECRET_ACCESS_KEY,
        config=Config(signature_version="s3v4"),
    )


def public_url(key: str) -> str:
    base = R2_PUBLIC_URL.rstrip("/")
    if base:
        return f"{base}/{key}"
    return f"https://{R2_BUCKET_NAME}.{R2_ACCOUNT_ID}.r2.cloudflarestorage.com/{key}"


def object_key(public_id: str) -> str:
    """Bare ids live under the store folder; ids containing a path are used as-is"""
    return public_id if "/" in public_id else f"{STORE_FOLDER}/{public_id}"


def upload_image(contents: bytes, content_type: str) -> dict:
    """
    Upload an image and return its public location

    Returns:
        {"url": ..., "public_id": ...} where public_id is the object key
    """
    key = f"{STORE_FOLDER}/{uuid.uuid4().hex}{EXTENSIONS.get(content_type, '')}"
    try:
        get_r2_client().put_object(
            Bucket=R2_BUCKET_NAME,
            Key=key,
            Body=contents,
            ContentType=content_type,
            CacheControl="public, max-age=31536000",
        )
    except (BotoCoreError, ClientError) as e:
        logger.error(f"❌ Failed to upload {key} to R2: {e}")
        raise StorageError(str(e)) from e

    logger.info(f"✅ Uploaded {key} ({len(contents)} bytes)")
    return {"url": public_url(key), "public_id": key}


def delete_image(public_id: str) -> None:
    key = object_key(public_id)
    try:
        get_r2_client().delete_object(Bucket=R2_BUCKET_NAME, Key=key)
    except (BotoCoreError, ClientError) as e:
        logger.error(f"❌ Failed to delete {key} from R2: {e}")
        raise StorageError(str(e)) from e
    logger.info(f"🗑️ Deleted {key}")
