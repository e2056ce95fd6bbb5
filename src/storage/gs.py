"""Google Cloud Storage driver."""

from __future__ import annotations

import logging
from typing import List, Optional

from google.api_core.exceptions import Forbidden, GoogleAPIError, NotFound, Unauthorized
from google.cloud import storage as gcs
from google.oauth2 import service_account

from common.logging_utils import Timer, extra_context, is_debug_enabled
from constants import Constants

from .base import StorageDriver
from .exceptions import (
    StorageConnectionError,
    StorageError,
    StorageNotFoundError,
    StoragePermissionError,
)
from .object_ref import ObjectRef

logger = logging.getLogger(__name__)


class GoogleStorageDriver(StorageDriver):
    """Store packages in Google Cloud Storage buckets.

    Without ``credentials_path`` the client uses application default
    credentials.
    """

    protocol = "gs"

    def __init__(
        self,
        project: Optional[str] = None,
        credentials_path: Optional[str] = None,
        client=None,
    ):
        if client is None:
            kwargs: dict = {}
            if project:
                kwargs["project"] = project
            if credentials_path:
                kwargs["credentials"] = service_account.Credentials.from_service_account_file(
                    credentials_path
                )
            client = gcs.Client(**kwargs)
        self._client = client

    def list(self, bucket: str) -> List[ObjectRef]:
        with Timer() as t:
            try:
                refs = [
                    self.get_object_ref(bucket, blob.name)
                    for blob in self._client.list_blobs(bucket)
                ]
            except (GoogleAPIError, ConnectionError, ValueError) as e:
                raise self._translate_error(e, bucket) from e
        if is_debug_enabled(logger):
            logger.debug(
                "Listed bucket",
                extra=extra_context(
                    event="storage_list",
                    component="gs",
                    bucket=bucket,
                    count=len(refs),
                    duration_ms=t.duration_ms(),
                ),
            )
        return refs

    def get(self, bucket: str, key: str) -> bytes:
        with Timer() as t:
            try:
                data = self._client.bucket(bucket).blob(key).download_as_bytes()
            except (GoogleAPIError, ConnectionError, ValueError) as e:
                raise self._translate_error(e, bucket, key) from e
        if is_debug_enabled(logger):
            logger.debug(
                "Fetched object",
                extra=extra_context(
                    event="storage_get",
                    component="gs",
                    bucket=bucket,
                    key=key,
                    duration_ms=t.duration_ms(),
                ),
            )
        return data

    def put(self, bucket: str, key: str, data: bytes) -> None:
        with Timer() as t:
            try:
                blob = self._client.bucket(bucket).blob(key)
                blob.upload_from_string(data, content_type=Constants.CONTENT_TYPE)
            except (GoogleAPIError, ConnectionError, ValueError) as e:
                raise self._translate_error(e, bucket, key) from e
        if is_debug_enabled(logger):
            logger.debug(
                "Stored object",
                extra=extra_context(
                    event="storage_put",
                    component="gs",
                    bucket=bucket,
                    key=key,
                    duration_ms=t.duration_ms(),
                ),
            )

    def _translate_error(
        self, error: Exception, bucket: str, key: Optional[str] = None
    ) -> StorageError:
        location = f"gs://{bucket}/{key}" if key else f"gs://{bucket}"
        message = f"{location}: {error}"
        if isinstance(error, NotFound):
            return StorageNotFoundError(message, bucket=bucket, key=key, cause=error)
        if isinstance(error, (Forbidden, Unauthorized)):
            return StoragePermissionError(message, bucket=bucket, key=key, cause=error)
        if isinstance(error, ValueError) and "credentials" in str(error).lower():
            return StoragePermissionError(message, bucket=bucket, key=key, cause=error)
        if isinstance(error, ConnectionError):
            return StorageConnectionError(message, bucket=bucket, key=key, cause=error)
        return StorageError(message, bucket=bucket, key=key, cause=error)
