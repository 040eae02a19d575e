"""Tests for session-state storage and the DynamoDB client."""

import json
from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from itinerary_planner.config import SessionStoreKind
from itinerary_planner.data.dynamodb import DynamoDBClient
from itinerary_planner.data.models import SelectionState, TripRequest
from itinerary_planner.data.session_store import (
    DynamoDBSessionStore,
    InMemorySessionStore,
    SessionKey,
    create_session_store,
)


@pytest.fixture
def mock_boto3():
    with patch("itinerary_planner.data.dynamodb.boto3") as mock:
        mock_table = MagicMock()
        mock_resource = MagicMock()
        mock_resource.Table.return_value = mock_table
        mock.resource.return_value = mock_resource
        yield mock, mock_table


@pytest.fixture
def selection():
    return SelectionState(
        itinerary_id="goa-relaxed",
        hotel_id="goa-relaxed-h1",
        activity_selections={"goa-relaxed-d1-a1": False},
    )


class TestDynamoDBClient:
    def test_client_init_local(self, mock_boto3):
        mock, _ = mock_boto3
        client = DynamoDBClient(
            table_name="test-table",
            endpoint_url="http://localhost:8000",
            region="ap-south-1",
        )
        assert client.table_name == "test-table"
        mock.resource.assert_called_once_with(
            "dynamodb", region_name="ap-south-1", endpoint_url="http://localhost:8000"
        )

    def test_client_init_aws(self, mock_boto3):
        mock, _ = mock_boto3
        DynamoDBClient(table_name="test-table")
        mock.resource.assert_called_once_with("dynamodb", region_name="ap-south-1")

    def test_get_item_not_found(self, mock_boto3):
        _, mock_table = mock_boto3
        mock_table.get_item.return_value = {}
        client = DynamoDBClient(table_name="test-table")
        assert client.get_item("SESSION#1", "REQUEST") is None

    def test_query_follows_pagination(self, mock_boto3):
        _, mock_table = mock_boto3
        mock_table.query.side_effect = [
            {"Items": [{"PK": "SESSION#1", "SK": "BUNDLE"}], "LastEvaluatedKey": {"PK": "x"}},
            {"Items": [{"PK": "SESSION#1", "SK": "REQUEST"}]},
        ]
        client = DynamoDBClient(table_name="test-table")

        items = client.query(pk="SESSION#1")

        assert [item["SK"] for item in items] == ["BUNDLE", "REQUEST"]
        assert mock_table.query.call_args_list[1].kwargs["ExclusiveStartKey"] == {"PK": "x"}

    def test_delete_partition(self, mock_boto3):
        _, mock_table = mock_boto3
        mock_table.query.return_value = {
            "Items": [
                {"PK": "SESSION#1", "SK": "BUNDLE"},
                {"PK": "SESSION#1", "SK": "SELECTION"},
            ]
        }
        batch = mock_table.batch_writer.return_value.__enter__.return_value
        client = DynamoDBClient(table_name="test-table")

        assert client.delete_partition("SESSION#1") == 2
        assert batch.delete_item.call_count == 2

    def test_create_table_when_missing(self, mock_boto3):
        _, mock_table = mock_boto3
        mock_table.load.side_effect = ClientError(
            {"Error": {"Code": "ResourceNotFoundException", "Message": "missing"}},
            "DescribeTable",
        )
        low_level = mock_table.meta.client
        client = DynamoDBClient(table_name="test-table")

        client.create_table_if_not_exists()

        assert low_level.create_table.call_args.kwargs["TableName"] == "test-table"
        low_level.update_time_to_live.assert_called_once_with(
            TableName="test-table",
            TimeToLiveSpecification={"Enabled": True, "AttributeName": "TTL"},
        )

    def test_create_table_skipped_when_present(self, mock_boto3):
        _, mock_table = mock_boto3
        client = DynamoDBClient(table_name="test-table")

        client.create_table_if_not_exists()

        mock_table.meta.client.create_table.assert_not_called()

    def test_create_table_reraises_other_errors(self, mock_boto3):
        _, mock_table = mock_boto3
        mock_table.load.side_effect = ClientError(
            {"Error": {"Code": "AccessDeniedException", "Message": "no"}},
            "DescribeTable",
        )
        client = DynamoDBClient(table_name="test-table")

        with pytest.raises(ClientError):
            client.create_table_if_not_exists()


class TestInMemorySessionStore:
    def test_save_and_load(self, selection, goa_request):
        store = InMemorySessionStore()
        store.save("s1", SessionKey.SELECTION, selection)
        store.save("s1", SessionKey.REQUEST, goa_request)

        assert store.load("s1", SessionKey.SELECTION) == selection
        assert store.load("s1", SessionKey.REQUEST) == goa_request
        assert store.load("s1", SessionKey.BUNDLE) is None
        assert store.load("other", SessionKey.REQUEST) is None

    def test_save_replaces_record(self, selection):
        store = InMemorySessionStore()
        store.save("s1", SessionKey.SELECTION, selection)
        store.save("s1", SessionKey.SELECTION, selection.with_hotel(None))

        assert store.load("s1", SessionKey.SELECTION).hotel_id is None

    def test_wrong_record_type_rejected(self, goa_request):
        store = InMemorySessionStore()
        with pytest.raises(TypeError):
            store.save("s1", SessionKey.SELECTION, goa_request)

    def test_clear(self, selection):
        store = InMemorySessionStore()
        store.save("s1", SessionKey.SELECTION, selection)
        store.clear("s1")
        store.clear("never-existed")

        assert "s1" not in store
        assert store.load("s1", SessionKey.SELECTION) is None


class TestDynamoDBSessionStore:
    def test_save_writes_json_item(self, mock_boto3, selection):
        _, mock_table = mock_boto3
        store = DynamoDBSessionStore(DynamoDBClient(table_name="t"), ttl_seconds=60)

        with patch("itinerary_planner.data.session_store.time.time", return_value=1000):
            store.save("s1", SessionKey.SELECTION, selection)

        item = mock_table.put_item.call_args.kwargs["Item"]
        assert item["PK"] == "SESSION#s1"
        assert item["SK"] == "SELECTION"
        assert item["EntityType"] == "SelectionState"
        assert item["TTL"] == 1060
        assert json.loads(item["Data"])["activity_selections"] == {
            "goa-relaxed-d1-a1": False
        }

    def test_load_round_trips_model(self, mock_boto3, goa_request):
        _, mock_table = mock_boto3
        mock_table.get_item.return_value = {
            "Item": {"PK": "SESSION#s1", "SK": "REQUEST", "Data": goa_request.model_dump_json()}
        }
        store = DynamoDBSessionStore(DynamoDBClient(table_name="t"))

        loaded = store.load("s1", SessionKey.REQUEST)

        assert isinstance(loaded, TripRequest)
        assert loaded == goa_request
        mock_table.get_item.assert_called_once_with(
            Key={"PK": "SESSION#s1", "SK": "REQUEST"}
        )

    def test_load_missing_returns_none(self, mock_boto3):
        _, mock_table = mock_boto3
        mock_table.get_item.return_value = {}
        store = DynamoDBSessionStore(DynamoDBClient(table_name="t"))
        assert store.load("s1", SessionKey.BUNDLE) is None

    def test_clear_deletes_partition(self, mock_boto3):
        _, mock_table = mock_boto3
        mock_table.query.return_value = {"Items": [{"PK": "SESSION#s1", "SK": "REQUEST"}]}
        store = DynamoDBSessionStore(DynamoDBClient(table_name="t"))

        store.clear("s1")

        batch = mock_table.batch_writer.return_value.__enter__.return_value
        batch.delete_item.assert_called_once_with(Key={"PK": "SESSION#s1", "SK": "REQUEST"})


def test_create_session_store(test_config, mock_boto3):
    assert isinstance(create_session_store(test_config), InMemorySessionStore)

    test_config.system.session_store = SessionStoreKind.DYNAMODB
    test_config.system.session_ttl = 120
    store = create_session_store(test_config)

    assert isinstance(store, DynamoDBSessionStore)
    assert store.ttl_seconds == 120
    assert store.db.table_name == "itinerary-planner-test"
