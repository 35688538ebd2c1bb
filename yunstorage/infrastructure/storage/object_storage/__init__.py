"""
Object Storage Infrastructure Module

Provides abstracted object storage interfaces supporting multiple cloud providers.
"""

from .base import (
    ObjectStorageInterface,
    BucketInfo,
    ObjectMetadata,
    PutObjectResult,
    OssConfig,
    CosConfig,
    MinioConfig,
)
from .oss_adapter import AliyunOssAdapter
from .cos_adapter import TencentCosAdapter
from .minio_adapter import MinIOAdapter
from .factory import StorageFactory

__all__ = [
    'ObjectStorageInterface',
    'BucketInfo',
    'ObjectMetadata',
    'PutObjectResult',
    'OssConfig',
    'CosConfig',
    'MinioConfig',
    'AliyunOssAdapter',
    'TencentCosAdapter',
    'MinIOAdapter',
    'StorageFactory'
]
