import logging
import os
import uuid

from boto3.dynamodb.conditions import Attr
from botocore.exceptions import ClientError

from user_service.db import Dynamodb
from user_service.errors import (
    InvalidCredentials,
    UserAlreadyExists,
    UserNotFound,
)
from user_service.services.password import hash_password, verify_password
from user_service.services.s3_service import upload_file
from user_service.utils import decimal_to_native, now_iso

logger = logging.getLogger(__name__)

ENTITY_TYPE = "USER"
MASKED_PASSWORD = "****"
# Page size used while searching the table for a single attribute match
LOOKUP_PAGE_SIZE = 100


def user_key(user_id: str) -> dict:
    return {"PK": f"USER#{user_id}", "SK": f"PROFILE#{user_id}"}


def public_user(item):
    """Copy of a stored user that is safe to return to clients."""
    if not item:
        return None
    out = decimal_to_native(dict(item))
    if "password" in out:
        out["password"] = MASKED_PASSWORD
    return out


def _is_condition_failure(error: ClientError) -> bool:
    return error.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException"


class UserService:
    def __init__(self, db: Dynamodb, s3=None):
        self.db = db
        self.s3 = s3

    def create(self, params: dict) -> dict:
        name = params["name"]
        email = params["email"].lower()
        mobile = params["mobile"]

        if self._find_one("email", email):
            raise UserAlreadyExists("Email already registered")

        user_id = str(uuid.uuid4())
        now = now_iso()
        item = {
            **user_key(user_id),
            "entityType": ENTITY_TYPE,
            "name": name,
            "email": email,
            "userId": user_id,
            "mobile": mobile,
            "password": hash_password(params["password"]),
            "active": True,
            "avatar": None,
            "createdAt": now,
            "updatedAt": now,
        }
        try:
            self.db.create(Item=item, ConditionExpression="attribute_not_exists(PK)")
        except ClientError as e:
            if _is_condition_failure(e):
                raise UserAlreadyExists(f"User {user_id} already exists") from e
            raise
        logger.info("Created user %s", user_id)
        return public_user(item)

    def get_user(self, user_id: str) -> dict:
        item = self.db.query(ExpressionAttributeValues={":pk": user_key(user_id)["PK"]})
        if not item:
            raise UserNotFound(user_id)
        return public_user(item)

    def get_users(self, limit: int = 20, start_key=None) -> dict:
        page = self.db.scan(
            limit=limit,
            start_key=start_key,
            FilterExpression=Attr("entityType").eq(ENTITY_TYPE),
        )
        return {
            "items": [public_user(item) for item in page["items"]],
            "nextKey": page["nextKey"],
        }

    def update(self, user_id: str, changes: dict) -> dict:
        changes = {k: v for k, v in changes.items() if v is not None}

        if "email" in changes:
            # a missing user is a 404 even when the email is taken
            self.get_user(user_id)
            changes["email"] = changes["email"].lower()
            owner = self._find_one("email", changes["email"])
            if owner and owner.get("userId") != user_id:
                raise UserAlreadyExists("Email already registered")
        if "password" in changes:
            changes["password"] = hash_password(changes["password"])
        changes["updatedAt"] = now_iso()

        try:
            response = self.db.update(
                Key=user_key(user_id),
                UpdateExpression="SET " + ", ".join(f"#{k} = :{k}" for k in changes),
                ConditionExpression="attribute_exists(PK)",
                ExpressionAttributeNames={f"#{k}": k for k in changes},
                ExpressionAttributeValues={f":{k}": v for k, v in changes.items()},
                ReturnValues="ALL_NEW",
            )
        except ClientError as e:
            if _is_condition_failure(e):
                raise UserNotFound(user_id) from e
            raise
        logger.info("Updated user %s fields %s", user_id, sorted(changes))
        return public_user(response.get("Attributes"))

    def get_by_email(self, email: str):
        return public_user(self._find_one("email", email.lower()))

    def get_by_mobile(self, mobile: str):
        return public_user(self._find_one("mobile", mobile))

    def delete_user(self, user_id: str) -> dict:
        try:
            response = self.db.delete(
                Key=user_key(user_id),
                ConditionExpression="attribute_exists(PK)",
                ReturnValues="ALL_OLD",
            )
        except ClientError as e:
            if _is_condition_failure(e):
                raise UserNotFound(user_id) from e
            raise
        logger.info("Deleted user %s", user_id)
        return public_user(response.get("Attributes"))

    def login(self, email: str, password: str) -> dict:
        user = self._find_one("email", email.lower())
        if not user or not verify_password(password, user.get("password")):
            raise InvalidCredentials()
        if not user.get("active", True):
            raise InvalidCredentials("Account is inactive")
        return public_user(user)

    def set_avatar(self, user_id: str, filename: str, body: bytes, content_type: str) -> dict:
        self.get_user(user_id)
        key = f"avatars/{user_id}/{uuid.uuid4()}-{os.path.basename(filename)}"
        upload_file(key, body, content_type, client=self.s3)
        return self.update(user_id, {"avatar": key})

    def _find_one(self, attribute: str, value):
        """Walk the table until an item with ``attribute == value`` turns up."""
        start_key = None
        while True:
            page = self.db.scan(
                limit=LOOKUP_PAGE_SIZE,
                start_key=start_key,
                FilterExpression=Attr("entityType").eq(ENTITY_TYPE) & Attr(attribute).eq(value),
            )
            if page["items"]:
                return page["items"][0]
            start_key = page["nextKey"]
            if not start_key:
                return None
