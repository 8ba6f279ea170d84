"""Main storage client - switches between local filesystem and AWS S3."""

from typing import BinaryIO, Optional

from afrik_student.core.config import settings
from afrik_student.core.logging import get_logger

logger = get_logger(__name__)


class StorageClient:
    """
    Unified blob client that works with both local storage and real AWS S3.
    Selects the implementation from USE_LOCAL_STORAGE unless a backend is given.
    """

    def __init__(self, backend=None):
        if backend is not None:
            self._client = backend
            self._mode = "local"
        elif settings.USE_LOCAL_STORAGE:
            from .local_storage import LocalStorageClient
            self._client = LocalStorageClient(settings.STORAGE_PATH, settings.STORAGE_PUBLIC_URL)
            self._mode = "local"
            logger.info("StorageClient initialized in LOCAL mode")
        else:
            import boto3
            kwargs = {"region_name": settings.AWS_REGION}
            if settings.AWS_S3_ENDPOINT_URL:
                kwargs["endpoint_url"] = settings.AWS_S3_ENDPOINT_URL
            if settings.AWS_ACCESS_KEY_ID and settings.AWS_SECRET_ACCESS_KEY:
                kwargs["aws_access_key_id"] = settings.AWS_ACCESS_KEY_ID
                kwargs["aws_secret_access_key"] = settings.AWS_SECRET_ACCESS_KEY
            self._client = boto3.client("s3", **kwargs)
            self._bucket = settings.AWS_S3_BUCKET
            self._mode = "s3"
            logger.info("StorageClient initialized in S3 mode", bucket=self._bucket)

    def upload_fileobj(self, fileobj: BinaryIO, key: str, content_type: Optional[str] = None) -> dict:
        """
        Upload a file-like object.

        Args:
            fileobj: Readable binary stream
            key: Storage key (path) where to store
            content_type: MIME type (optional)

        Returns:
            Upload metadata
        """
        if self._mode == "local":
            return self._client.upload_fileobj(fileobj, key, content_type)
        extra_args = {"ContentType": content_type} if content_type else None
        self._client.upload_fileobj(fileobj, self._bucket, key, ExtraArgs=extra_args)
        return {"Key": key, "Bucket": self._bucket}

    def put_object(self, key: str, body: bytes, content_type: Optional[str] = None) -> dict:
        if self._mode == "local":
            return self._client.put_object(key, body, content_type)
        params = {"Bucket": self._bucket, "Key": key, "Body": body}
        if content_type:
            params["ContentType"] = content_type
        return self._client.put_object(**params)

    def get_object(self, key: str) -> dict:
        if self._mode == "local":
            return self._client.get_object(key)
        return self._client.get_object(Bucket=self._bucket, Key=key)

    def exists(self, key: str) -> bool:
        if self._mode == "local":
            return self._client.exists(key)
        from botocore.exceptions import ClientError
        try:
            self._client.head_object(Bucket=self._bucket, Key=key)
        except ClientError as e:
            code = (e.response or {}).get("Error", {}).get("Code")
            if code in {"NoSuchKey", "404", "NotFound"}:
                return False
            raise
        return True

    def delete_object(self, key: str) -> dict:
        """Delete an object; deleting a missing key is not an error."""
        if self._mode == "local":
            return self._client.delete_object(key)
        return self._client.delete_object(Bucket=self._bucket, Key=key)

    def generate_url(self, key: str, expiration: Optional[int] = None) -> str:
        """
        URL a client can fetch the object from.

        Args:
            key: Storage key
            expiration: Presigned URL lifetime in seconds (S3 only)
        """
        if expiration is None:
            expiration = settings.STORAGE_URL_EXPIRY_SECONDS
        if self._mode == "local":
            return self._client.generate_url(key, expiration)
        return self._client.generate_presigned_url(
            "get_object",
            Params={"Bucket": self._bucket, "Key": key},
            ExpiresIn=expiration,
        )


# Singleton instance
_storage_client = None


def get_storage_client() -> StorageClient:
    """Get singleton storage client instance."""
    global _storage_client
    if _storage_client is None:
        _storage_client = StorageClient()
    return _storage_client
