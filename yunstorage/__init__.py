"""
yunstorage

One interface over Aliyun OSS, Tencent COS and MinIO object storage.

    from yunstorage import StorageManager

    manager = StorageManager()
    manager.register("oss", {"accessKeyId": "...", "accessKeySecret": "...",
                             "endpoint": "oss-cn-hangzhou.aliyuncs.com"})
    manager.put_object("mybucket", "a/b.png", b"...")
    manager.adapter("oss").list_object_keys("mybucket", "a/")
"""

from yunstorage.infrastructure.exceptions import (
    StorageError,
    ConfigError,
    NotConfiguredError,
    UnsupportedProviderError,
    PaginationError,
)
from yunstorage.infrastructure.storage.storage_manager import StorageManager, AdapterState
from yunstorage.infrastructure.storage.object_storage import (
    ObjectStorageInterface,
    BucketInfo,
    ObjectMetadata,
    PutObjectResult,
    AliyunOssAdapter,
    TencentCosAdapter,
    MinIOAdapter,
    StorageFactory,
)

__version__ = "0.1.0"

__all__ = [
    'StorageManager',
    'AdapterState',
    'StorageFactory',
    'ObjectStorageInterface',
    'BucketInfo',
    'ObjectMetadata',
    'PutObjectResult',
    'AliyunOssAdapter',
    'TencentCosAdapter',
    'MinIOAdapter',
    'StorageError',
    'ConfigError',
    'NotConfiguredError',
    'UnsupportedProviderError',
    'PaginationError',
]
