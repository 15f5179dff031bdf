import pytest
from botocore.exceptions import ClientError

from user_service.create_table import create_table


def _put(db, pk, sk, **attrs):
    db.create(Item={"PK": pk, "SK": sk, **attrs})


def test_create_table_is_idempotent(db):
    # fixture already created it
    assert create_table(db) is None
    assert db.table_name in db.list_tables()


def test_list_tables_respects_limit(db):
    for i in range(3):
        db.client.create_table(
            TableName=f"Other{i}",
            AttributeDefinitions=[{"AttributeName": "id", "AttributeType": "S"}],
            KeySchema=[{"AttributeName": "id", "KeyType": "HASH"}],
            BillingMode="PAY_PER_REQUEST",
        )
    assert len(db.list_tables(limit=2)) == 2


def test_create_then_get(db):
    _put(db, "USER#1", "PROFILE#1", name="one")
    item = db.get(Key={"PK": "USER#1", "SK": "PROFILE#1"})["Item"]
    assert item["name"] == "one"


def test_create_reraises_condition_failures(db):
    _put(db, "USER#1", "PROFILE#1")
    with pytest.raises(ClientError) as exc:
        db.create(
            Item={"PK": "USER#1", "SK": "PROFILE#1"},
            ConditionExpression="attribute_not_exists(PK)",
        )
    assert exc.value.response["Error"]["Code"] == "ConditionalCheckFailedException"


def test_query_defaults_to_partition_key_and_returns_first_item(db):
    _put(db, "USER#1", "PROFILE#1", name="one")
    _put(db, "USER#2", "PROFILE#2", name="two")

    item = db.query(ExpressionAttributeValues={":pk": "USER#2"})
    assert item["name"] == "two"


def test_query_returns_none_without_matches(db):
    assert db.query(ExpressionAttributeValues={":pk": "USER#missing"}) is None


def test_query_caller_params_override_defaults(db):
    _put(db, "USER#1", "PROFILE#1", name="profile")
    _put(db, "USER#1", "SETTINGS#1", name="settings")

    item = db.query(
        KeyConditionExpression="PK = :pk AND begins_with(SK, :sk)",
        ExpressionAttributeValues={":pk": "USER#1", ":sk": "SETTINGS#"},
    )
    assert item["name"] == "settings"


def test_update_and_delete_pass_through(db):
    _put(db, "USER#1", "PROFILE#1", name="one")
    key = {"PK": "USER#1", "SK": "PROFILE#1"}

    resp = db.update(
        Key=key,
        UpdateExpression="SET #n = :n",
        ExpressionAttributeNames={"#n": "name"},
        ExpressionAttributeValues={":n": "uno"},
        ReturnValues="ALL_NEW",
    )
    assert resp["Attributes"]["name"] == "uno"

    db.delete(Key=key)
    assert "Item" not in db.get(Key=key)


def test_scan_pages_with_next_key(db):
    for i in range(3):
        _put(db, f"USER#{i}", f"PROFILE#{i}")

    first = db.scan(limit=2)
    assert len(first["items"]) == 2
    assert first["nextKey"]

    second = db.scan(limit=2, start_key=first["nextKey"])
    assert len(second["items"]) == 1
    assert second["nextKey"] is None

    seen = {item["PK"] for item in first["items"] + second["items"]}
    assert seen == {"USER#0", "USER#1", "USER#2"}


def test_scan_default_limit_and_empty_table(db):
    page = db.scan()
    assert page == {"items": [], "nextKey": None}
