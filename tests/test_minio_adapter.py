from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from yunstorage.infrastructure.storage.object_storage import minio_adapter
from yunstorage.infrastructure.storage.object_storage.minio_adapter import MinIOAdapter

CONFIG = {
    "accessKeyId": "minioadmin",
    "accessKeySecret": "minioadmin",
    "endpoint": "localhost:9000",
}


@pytest.fixture
def minio_client():
    with patch.object(minio_adapter, "Minio") as client_class:
        client = client_class.return_value
        client.client_class = client_class
        yield client


def test_client_construction(minio_client):
    adapter = MinIOAdapter(dict(CONFIG, secure=True))

    assert adapter.client() is minio_client
    minio_client.client_class.assert_called_once_with(
        endpoint="localhost:9000",
        access_key="minioadmin",
        secret_key="minioadmin",
        secure=True,
    )
    assert adapter.object_url("raw-files", "a/b.pdf") == "https://localhost:9000/raw-files/a/b.pdf"


def test_put_object(minio_client):
    minio_client.put_object.return_value = SimpleNamespace(etag='"abc"')
    adapter = MinIOAdapter(CONFIG)

    result = adapter.put_object("raw-files", "a.txt", b"hello")

    kwargs = minio_client.put_object.call_args.kwargs
    assert kwargs["bucket_name"] == "raw-files"
    assert kwargs["object_name"] == "a.txt"
    assert kwargs["length"] == 5
    assert kwargs["data"].read() == b"hello"
    assert result.etag == "abc"
    assert result.url == "http://localhost:9000/raw-files/a.txt"


def test_get_zero_byte_object(minio_client):
    response = MagicMock()
    response.read.return_value = b""
    minio_client.get_object.return_value = response

    assert MinIOAdapter(CONFIG).get_object("raw-files", "empty") == b""
    response.close.assert_called_once_with()
    response.release_conn.assert_called_once_with()


def test_delete_objects(minio_client):
    minio_client.remove_objects.return_value = iter([
        SimpleNamespace(name="b", code="AccessDenied", message="denied"),
    ])
    adapter = MinIOAdapter(CONFIG)

    assert adapter.delete_objects("raw-files", ["a", "b", "c"]) == ["a", "c"]
    assert adapter.delete_objects("raw-files", []) == []
    assert minio_client.remove_objects.call_count == 1


def test_list_objects(minio_client):
    minio_client.list_objects.return_value = iter([
        SimpleNamespace(
            object_name="docs/a.txt",
            size=4,
            last_modified=datetime(2024, 1, 1, tzinfo=timezone.utc),
            etag="e1",
        ),
        SimpleNamespace(object_name="docs/b.txt", size=0, last_modified=None, etag=None),
    ])
    adapter = MinIOAdapter(CONFIG)

    objects = adapter.list_objects("raw-files", "docs/")

    assert [o.key for o in objects] == ["docs/a.txt", "docs/b.txt"]
    assert objects[0].last_modified == "2024-01-01T00:00:00+00:00"
    assert objects[1].etag is None
    minio_client.list_objects.assert_called_once_with("raw-files", prefix="docs/", recursive=True)


def test_bucket_operations(minio_client):
    minio_client.bucket_exists.return_value = False
    minio_client.list_buckets.return_value = [
        SimpleNamespace(name="raw-files", creation_date=None),
    ]
    adapter = MinIOAdapter(CONFIG)

    assert adapter.does_bucket_exist("raw-files") is False
    adapter.create_bucket("raw-files")
    minio_client.make_bucket.assert_called_once_with("raw-files")
    assert [b.name for b in adapter.list_buckets()] == ["raw-files"]
    adapter.delete_bucket("raw-files")
    minio_client.remove_bucket.assert_called_once_with("raw-files")
