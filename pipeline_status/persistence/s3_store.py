"""S3 implementation of the status store."""

from typing import TYPE_CHECKING, Any, Optional

import boto3
from botocore import UNSIGNED
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..config.defaults import get_default_config
from ..errors import StoreError
from ..logging.config import get_store_logger
from .store import Store, WriteOptions

if TYPE_CHECKING:
    from ..config.source import Source

logger = get_store_logger(__name__)

_NOT_FOUND_CODES = {"NoSuchKey", "404", "NotFound"}


def _is_not_found(exc: ClientError) -> bool:
    error = exc.response.get("Error", {})
    status = exc.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
    return error.get("Code") in _NOT_FOUND_CODES or status == 404


def _endpoint_url(endpoint: str, disable_ssl: bool) -> Optional[str]:
    if not endpoint:
        return None
    if "://" in endpoint:
        return endpoint
    scheme = "http" if disable_ssl else "https"
    return f"{scheme}://{endpoint}"


def create_s3_client(source: "Source") -> Any:
    """
    Build a boto3 S3 client from the resource source configuration.

    Credentials are resolved in this order: the default credential chain
    when ``use_iam_instance_profile`` is set, unsigned anonymous requests
    when no keys are configured, otherwise the static keys.
    """
    defaults = get_default_config().s3
    region_name = source.region_name or defaults.region_name

    signature_version: Any = "s3" if source.use_v2_signing else None
    session_kwargs: dict[str, Any] = {"region_name": region_name}

    if not source.use_iam_instance_profile:
        if not source.access_key_id and not source.secret_access_key:
            signature_version = UNSIGNED
        else:
            session_kwargs.update(
                aws_access_key_id=source.access_key_id,
                aws_secret_access_key=source.secret_access_key,
                aws_session_token=source.session_token or None,
            )

    config = Config(
        signature_version=signature_version,
        s3={"addressing_style": "path"},
        retries={"max_attempts": defaults.max_retries, "mode": "standard"},
    )

    session = boto3.session.Session(**session_kwargs)
    return session.client(
        "s3",
        endpoint_url=_endpoint_url(source.endpoint, source.disable_ssl),
        use_ssl=not source.disable_ssl,
        config=config,
    )


class S3Store(Store):
    """Status store backed by a single S3 bucket."""

    def __init__(self, client: Any, bucket: str):
        self.client = client
        self.bucket = bucket
        self.logger = logger.bind(bucket=bucket)

    @classmethod
    def from_source(cls, source: "Source") -> "S3Store":
        return cls(create_s3_client(source), source.bucket)

    def fetch(self, key: str) -> Optional[bytes]:
        try:
            response = self.client.get_object(Bucket=self.bucket, Key=key)
        except ClientError as e:
            if _is_not_found(e):
                self.logger.debug("Status object not found", key=key)
                return None
            raise StoreError(
                f"Failed to fetch s3://{self.bucket}/{key}: {e}",
                operation="fetch",
                key=key
            ) from e
        except BotoCoreError as e:
            raise StoreError(
                f"Failed to fetch s3://{self.bucket}/{key}: {e}",
                operation="fetch",
                key=key
            ) from e

        body = response["Body"]
        try:
            data = body.read()
        except BotoCoreError as e:
            raise StoreError(
                f"Failed to read s3://{self.bucket}/{key}: {e}",
                operation="fetch",
                key=key
            ) from e
        finally:
            body.close()

        self.logger.debug("Fetched status object", key=key, size=len(data))
        return data

    def write(self, key: str, body: bytes, options: Optional[WriteOptions] = None) -> None:
        options = options or WriteOptions()
        params: dict[str, Any] = {
            "Bucket": self.bucket,
            "Key": key,
            "Body": body,
            "ContentType": options.content_type,
            "ACL": get_default_config().s3.acl,
        }
        if options.server_side_encryption:
            params["ServerSideEncryption"] = options.server_side_encryption

        try:
            self.client.put_object(**params)
        except (BotoCoreError, ClientError) as e:
            raise StoreError(
                f"Failed to write s3://{self.bucket}/{key}: {e}",
                operation="write",
                key=key
            ) from e

        self.logger.debug("Wrote status object", key=key, size=len(body))
