from functools import lru_cache

import boto3
from botocore.client import Config

from user_service.errors import StorageNotConfigured
from user_service.settings import AWS_DEFAULT_REGION, AWS_S3_BUCKET_NAME


@lru_cache(maxsize=1)
def s3_client():
    return boto3.client(
        "s3", region_name=AWS_DEFAULT_REGION, config=Config(signature_version="s3v4")
    )


def upload_file(filename: str, body: bytes, content_type: str, bucket=None, client=None):
    """Upload a file body to S3 under ``filename`` and return the S3 response."""
    bucket = bucket or AWS_S3_BUCKET_NAME
    if not bucket:
        raise StorageNotConfigured("AWS_S3_BUCKET_NAME is not configured")
    client = client or s3_client()
    return client.put_object(
        Bucket=bucket,
        Key=filename,
        Body=body,
        ContentType=content_type,
    )
