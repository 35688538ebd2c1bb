import threading
import time
from types import SimpleNamespace
from typing import Dict, List
from unittest.mock import patch

import pytest

from yunstorage.infrastructure.storage.object_storage import cos_adapter, oss_adapter
from yunstorage.infrastructure.storage.object_storage.base import (
    BucketInfo,
    ObjectMetadata,
    ObjectStorageInterface,
    PutObjectResult,
)
from yunstorage.infrastructure.storage.object_storage.factory import StorageFactory


class InMemoryAdapter(ObjectStorageInterface):
    """Dict backed adapter used to exercise the manager"""

    provider = "memory"
    constructed = 0
    _count_lock = threading.Lock()

    def __init__(self, config):
        super().__init__(config)
        # widen the window for concurrent first use
        time.sleep(0.05)
        with InMemoryAdapter._count_lock:
            InMemoryAdapter.constructed += 1
        self.buckets: Dict[str, Dict[str, bytes]] = {}

    def client(self):
        return self.buckets

    def create_bucket(self, bucket):
        self.buckets.setdefault(bucket, {})

    def does_bucket_exist(self, bucket):
        return bucket in self.buckets

    def delete_bucket(self, bucket):
        del self.buckets[bucket]

    def list_buckets(self) -> List[BucketInfo]:
        return [BucketInfo(name=name) for name in self.buckets]

    def put_object(self, bucket, key, content):
        self.buckets[bucket][key] = content
        return PutObjectResult(url=self.object_url(bucket, key))

    def does_object_exist(self, bucket, key):
        return key in self.buckets.get(bucket, {})

    def delete_object(self, bucket, key):
        self.buckets[bucket].pop(key, None)

    def delete_objects(self, bucket, keys):
        return [k for k in keys if self.buckets[bucket].pop(k, None) is not None]

    def get_object(self, bucket, key):
        return self.buckets[bucket][key]

    def list_objects(self, bucket, prefix=""):
        return [
            ObjectMetadata(key=k, size=len(v), url=self.object_url(bucket, k))
            for k, v in self.buckets[bucket].items()
            if k.startswith(prefix)
        ]

    def object_url(self, bucket, key):
        return f"memory://{bucket}/{key}"

    def upload_file(self, bucket, key, local_path):
        with open(local_path, "rb") as f:
            return self.put_object(bucket, key, f.read())

    def download_file(self, bucket, key, local_path):
        with open(local_path, "wb") as f:
            f.write(self.get_object(bucket, key))
        return local_path


MEMORY_CONFIG = {"accessKeyId": "id", "accessKeySecret": "secret"}


@pytest.fixture
def memory_provider(monkeypatch):
    monkeypatch.setitem(StorageFactory._adapters, "memory", InMemoryAdapter)
    monkeypatch.setattr(InMemoryAdapter, "constructed", 0)
    return InMemoryAdapter


@pytest.fixture
def oss_sdk():
    """Patch the oss2 entry points used by AliyunOssAdapter"""
    with patch.object(oss_adapter.oss2, "Auth") as auth, \
            patch.object(oss_adapter.oss2, "Session"), \
            patch.object(oss_adapter.oss2, "Service") as service, \
            patch.object(oss_adapter.oss2, "Bucket") as bucket:
        yield SimpleNamespace(auth=auth, service=service.return_value, bucket=bucket.return_value,
                              bucket_class=bucket)


@pytest.fixture
def cos_client():
    """Patch CosS3Client so TencentCosAdapter talks to a mock"""
    with patch.object(cos_adapter, "CosClientConfig") as config_class, \
            patch.object(cos_adapter, "CosS3Client") as client_class:
        client = client_class.return_value
        client.get_object_url.side_effect = (
            lambda Bucket, Key: f"https://{Bucket}.cos.ap-guangzhou.myqcloud.com/{Key}"
        )
        client.config_class = config_class
        yield client
