import os

# Must be set before user_service.settings is imported
os.environ["AWS_ACCESS_KEY_ID"] = "testing"
os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
os.environ["AWS_SECURITY_TOKEN"] = "testing"
os.environ["AWS_SESSION_TOKEN"] = "testing"
os.environ["AWS_REGION"] = "us-east-1"
os.environ["AWS_DEFAULT_REGION"] = "us-east-1"
os.environ["DYNAMODB_TABLE_NAME"] = "SocialApp"
os.environ["AWS_S3_BUCKET_NAME"] = "user-service-test-bucket"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.pop("DYNAMODB_ENDPOINT_URL", None)

import boto3
import pytest
from fastapi.testclient import TestClient
from moto import mock_aws

from user_service.create_table import create_table
from user_service.db import Dynamodb, get_db
from user_service.main import create_app
from user_service.services.s3_service import s3_client
from user_service.services.users import UserService


@pytest.fixture
def aws():
    s3_client.cache_clear()
    with mock_aws():
        yield


@pytest.fixture
def db(aws):
    database = Dynamodb()
    create_table(database)
    return database


@pytest.fixture
def bucket(aws):
    s3 = boto3.client("s3", region_name="us-east-1")
    s3.create_bucket(Bucket=os.environ["AWS_S3_BUCKET_NAME"])
    return s3


@pytest.fixture
def users(db):
    return UserService(db)


@pytest.fixture
def app(db):
    application = create_app()
    application.dependency_overrides[get_db] = lambda: db
    return application


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def new_user():
    return {
        "name": "Ada Lovelace",
        "email": "ada@acme.io",
        "password": "engine1843",
        "mobile": "+447700900123",
    }
