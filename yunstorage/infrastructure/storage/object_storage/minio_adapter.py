"""
MinIO Object Storage Adapter

Implements ObjectStorageInterface for MinIO object storage.
This adapter wraps the MinIO client to provide a consistent interface.
"""

import io
import logging
from typing import Any, List, Mapping, Union

from minio import Minio
from minio.deleteobjects import DeleteObject
from minio.error import S3Error

from yunstorage.infrastructure.storage.file_handler import FileHandler
from .base import (
    BucketInfo,
    MinioConfig,
    ObjectMetadata,
    ObjectStorageInterface,
    PutObjectResult,
    strip_etag,
    to_bytes,
)

logger = logging.getLogger(__name__)

NOT_FOUND_CODES = ("NoSuchKey", "NoSuchBucket", "NoSuchObject", "ResourceNotFound")


class MinIOAdapter(ObjectStorageInterface):
    """
    MinIO implementation of ObjectStorageInterface

    Provides object storage capabilities using MinIO server. The MinIO SDK
    paginates listings itself, so list_objects simply drains its iterator.
    """

    config_class = MinioConfig
    provider = "minio"

    def __init__(self, config: Mapping[str, Any]):
        super().__init__(config)
        self._client = Minio(
            endpoint=self.config.endpoint,
            access_key=self.config.access_key_id,
            secret_key=self.config.access_key_secret,
            secure=self.config.secure
        )

    def client(self) -> Minio:
        return self._client

    def object_url(self, bucket: str, key: str) -> str:
        scheme = "https" if self.config.secure else "http"
        return f"{scheme}://{self.config.endpoint}/{bucket}/{key}"

    def create_bucket(self, bucket: str) -> None:
        self._client.make_bucket(bucket)
        logger.info(f"✅ 创建存储桶 '{bucket}' 成功")

    def does_bucket_exist(self, bucket: str) -> bool:
        return self._client.bucket_exists(bucket)

    def delete_bucket(self, bucket: str) -> None:
        self._client.remove_bucket(bucket)
        logger.info(f"✅ 删除存储桶 '{bucket}' 成功")

    def list_buckets(self) -> List[BucketInfo]:
        return [
            BucketInfo(
                name=b.name,
                creation_date=b.creation_date.isoformat() if b.creation_date else None,
            )
            for b in self._client.list_buckets()
        ]

    def put_object(
        self,
        bucket: str,
        key: str,
        content: Union[bytes, str]
    ) -> PutObjectResult:
        data = to_bytes(content)
        logger.debug(f"正在上传对象: {bucket}/{key} (大小: {len(data)}字节)")
        result = self._client.put_object(
            bucket_name=bucket,
            object_name=key,
            data=io.BytesIO(data),
            length=len(data)
        )
        logger.info(f"✅ 文件对象上传成功: {bucket}/{key}")
        return PutObjectResult(etag=strip_etag(result.etag), url=self.object_url(bucket, key))

    def does_object_exist(self, bucket: str, key: str) -> bool:
        try:
            self._client.stat_object(bucket, key)
            return True
        except S3Error as e:
            if e.code in NOT_FOUND_CODES:
                return False
            raise

    def delete_object(self, bucket: str, key: str) -> None:
        logger.debug(f"正在删除文件: {bucket}/{key}")
        self._client.remove_object(bucket_name=bucket, object_name=key)
        logger.info(f"✅ 文件删除成功: {bucket}/{key}")

    def delete_objects(self, bucket: str, keys: List[str]) -> List[str]:
        keys = list(keys)
        if not keys:
            return []
        failed = set()
        # remove_objects 是惰性的，必须遍历结果才会真正执行删除
        for error in self._client.remove_objects(bucket, [DeleteObject(key) for key in keys]):
            failed.add(error.name)
            logger.warning(f"⚠️ 删除失败: {bucket}/{error.name} ({error.code}: {error.message})")
        deleted = [key for key in keys if key not in failed]
        logger.info(f"✅ 批量删除成功: {bucket} (共{len(deleted)}个文件)")
        return deleted

    def get_object(self, bucket: str, key: str) -> bytes:
        logger.debug(f"正在获取文件: {bucket}/{key}")
        response = self._client.get_object(bucket_name=bucket, object_name=key)
        try:
            return response.read()
        finally:
            response.close()
            response.release_conn()

    def list_objects(self, bucket: str, prefix: str = "") -> List[ObjectMetadata]:
        objects = [
            ObjectMetadata(
                key=obj.object_name,
                size=obj.size,
                last_modified=obj.last_modified.isoformat() if obj.last_modified else None,
                etag=strip_etag(obj.etag),
                url=self.object_url(bucket, obj.object_name),
            )
            for obj in self._client.list_objects(bucket, prefix=prefix or None, recursive=True)
        ]
        logger.debug(f"列出文件成功: {bucket}/{prefix} (共{len(objects)}个文件)")
        return objects

    def upload_file(self, bucket: str, key: str, local_path: str) -> PutObjectResult:
        file_info = FileHandler.get_file_info(local_path)
        logger.debug(f"正在上传本地文件: {local_path} → {bucket}/{key} (大小: {file_info.file_size}字节)")
        result = self._client.fput_object(
            bucket_name=bucket,
            object_name=key,
            file_path=local_path
        )
        logger.info(f"✅ 文件上传成功: {local_path} → {bucket}/{key}")
        return PutObjectResult(etag=strip_etag(result.etag), url=self.object_url(bucket, key))

    def download_file(self, bucket: str, key: str, local_path: str) -> str:
        FileHandler.ensure_parent_directory(local_path)
        logger.debug(f"正在下载文件: {bucket}/{key} → {local_path}")
        self._client.fget_object(
            bucket_name=bucket,
            object_name=key,
            file_path=local_path
        )
        logger.info(f"✅ 文件下载成功: {bucket}/{key} → {local_path}")
        return local_path
