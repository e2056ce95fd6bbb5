"""S3-compatible storage driver (AWS S3, MinIO)."""

from __future__ import annotations

import logging
from typing import List, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError, EndpointConnectionError

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

_ERROR_CODE_MAP = {
    "NoSuchKey": StorageNotFoundError,
    "NoSuchBucket": StorageNotFoundError,
    "404": StorageNotFoundError,
    "AccessDenied": StoragePermissionError,
    "403": StoragePermissionError,
    "InvalidAccessKeyId": StoragePermissionError,
    "SignatureDoesNotMatch": StoragePermissionError,
    "ExpiredToken": StoragePermissionError,
}


class S3StorageDriver(StorageDriver):
    """
    Store packages in an S3-compatible bucket.

    Credentials follow the usual boto3 chain (environment, shared config,
    instance profile). Usage::

        driver = S3StorageDriver(region="us-west-2")
        driver.list("my-packages")
    """

    protocol = "s3"

    def __init__(
        self,
        region: str = Constants.DEFAULT_AWS_REGION,
        endpoint_url: Optional[str] = None,
        client=None,
    ):
        if client is None:
            kwargs: dict = {
                "config": Config(
                    region_name=region,
                    signature_version="s3v4",
                    retries={"max_attempts": 3, "mode": "standard"},
                ),
            }
            if endpoint_url:
                kwargs["endpoint_url"] = endpoint_url
            client = boto3.client("s3", **kwargs)
        self._client = client

    def list(self, bucket: str) -> List[ObjectRef]:
        refs: List[ObjectRef] = []
        with Timer() as t:
            try:
                paginator = self._client.get_paginator("list_objects_v2")
                for page in paginator.paginate(Bucket=bucket):
                    for obj in page.get("Contents", []):
                        refs.append(self.get_object_ref(bucket, obj["Key"]))
            except (ClientError, BotoCoreError) as e:
                raise self._translate_error(e, bucket) from e
        if is_debug_enabled(logger):
            logger.debug(
                "Listed bucket",
                extra=extra_context(
                    event="storage_list",
                    component="s3",
                    bucket=bucket,
                    count=len(refs),
                    duration_ms=t.duration_ms(),
                ),
            )
        return refs

    def get(self, bucket: str, key: str) -> bytes:
        with Timer() as t:
            try:
                response = self._client.get_object(Bucket=bucket, Key=key)
                data = response["Body"].read()
            except (ClientError, BotoCoreError) as e:
                raise self._translate_error(e, bucket, key) from e
        if is_debug_enabled(logger):
            logger.debug(
                "Fetched object",
                extra=extra_context(
                    event="storage_get",
                    component="s3",
                    bucket=bucket,
                    key=key,
                    duration_ms=t.duration_ms(),
                ),
            )
        return data

    def put(self, bucket: str, key: str, data: bytes) -> None:
        with Timer() as t:
            try:
                self._client.put_object(
                    Bucket=bucket,
                    Key=key,
                    Body=data,
                    ContentType=Constants.CONTENT_TYPE,
                )
            except (ClientError, BotoCoreError) as e:
                raise self._translate_error(e, bucket, key) from e
        if is_debug_enabled(logger):
            logger.debug(
                "Stored object",
                extra=extra_context(
                    event="storage_put",
                    component="s3",
                    bucket=bucket,
                    key=key,
                    duration_ms=t.duration_ms(),
                ),
            )

    def _translate_error(
        self, error: Exception, bucket: str, key: Optional[str] = None
    ) -> StorageError:
        location = f"s3://{bucket}/{key}" if key else f"s3://{bucket}"
        message = f"{location}: {error}"
        if isinstance(error, EndpointConnectionError):
            return StorageConnectionError(message, bucket=bucket, key=key, cause=error)
        if isinstance(error, ClientError):
            code = error.response.get("Error", {}).get("Code", "")
            exc_cls = _ERROR_CODE_MAP.get(code, StorageError)
            return exc_cls(message, bucket=bucket, key=key, cause=error)
        return StorageError(message, bucket=bucket, key=key, cause=error)
