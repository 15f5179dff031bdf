import pytest

from user_service.errors import StorageNotConfigured
from user_service.services.s3_service import s3_client, upload_file


def test_upload_file_puts_object(bucket):
    upload_file("docs/readme.txt", b"hello", "text/plain")

    obj = bucket.get_object(Bucket="user-service-test-bucket", Key="docs/readme.txt")
    assert obj["Body"].read() == b"hello"
    assert obj["ContentType"] == "text/plain"


def test_upload_file_to_explicit_bucket(bucket):
    bucket.create_bucket(Bucket="other-bucket")
    upload_file("a.bin", b"\x00\x01", "application/octet-stream", bucket="other-bucket", client=bucket)
    assert bucket.head_object(Bucket="other-bucket", Key="a.bin")["ContentLength"] == 2


def test_client_is_built_once(aws):
    assert s3_client() is s3_client()


def test_upload_file_needs_a_bucket(monkeypatch):
    import user_service.services.s3_service as s3_service

    monkeypatch.setattr(s3_service, "AWS_S3_BUCKET_NAME", None)
    with pytest.raises(StorageNotConfigured):
        upload_file("a.txt", b"x", "text/plain")
