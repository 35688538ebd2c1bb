"""
Aliyun OSS Object Storage Adapter

Implements ObjectStorageInterface for Alibaba Cloud Object Storage Service.
This adapter wraps the oss2 SDK to provide a consistent interface.
"""

import logging
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional, Tuple, Union

import oss2
from oss2.exceptions import NotFound

from yunstorage.infrastructure.storage.file_handler import FileHandler
from .base import (
    BucketInfo,
    ListPage,
    ObjectMetadata,
    ObjectStorageInterface,
    OssConfig,
    PutObjectResult,
    collect_pages,
    strip_etag,
    to_bytes,
)

logger = logging.getLogger(__name__)

# batch_delete_objects 单次最多删除1000个对象
BATCH_DELETE_LIMIT = 1000


def split_endpoint(endpoint: str) -> Tuple[str, str]:
    """
    Split an endpoint into (scheme, host)

    The scheme defaults to https when the endpoint carries none.
    """
    if endpoint.startswith("https://"):
        return "https", endpoint[len("https://"):]
    if endpoint.startswith("http://"):
        return "http", endpoint[len("http://"):]
    return "https", endpoint


def _iso_timestamp(value: Optional[int]) -> Optional[str]:
    if value is None:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc).isoformat()


class AliyunOssAdapter(ObjectStorageInterface):
    """
    Aliyun OSS implementation of ObjectStorageInterface

    client() returns the oss2.Service; oss2.Bucket handles are lightweight
    and built per call on top of one shared HTTP session.
    """

    config_class = OssConfig
    provider = "oss"

    def __init__(self, config: Mapping[str, Any]):
        super().__init__(config)
        self.page_size = self.config.page_size
        self.auth = oss2.Auth(self.config.access_key_id, self.config.access_key_secret)
        self.session = oss2.Session()
        self.service = oss2.Service(self.auth, self.config.endpoint, session=self.session)

    def client(self) -> oss2.Service:
        return self.service

    def bucket(self, bucket: str) -> oss2.Bucket:
        """Build the oss2.Bucket handle for a bucket name"""
        return oss2.Bucket(self.auth, self.config.endpoint, bucket, session=self.session)

    def object_url(self, bucket: str, key: str) -> str:
        scheme, host = split_endpoint(self.config.endpoint)
        return f"{scheme}://{bucket}.{host}/{key}"

    def create_bucket(self, bucket: str) -> None:
        self.bucket(bucket).create_bucket()
        logger.info(f"✅ 创建存储桶 '{bucket}' 成功")

    def does_bucket_exist(self, bucket: str) -> bool:
        try:
            self.bucket(bucket).get_bucket_info()
            return True
        except NotFound:
            return False

    def delete_bucket(self, bucket: str) -> None:
        self.bucket(bucket).delete_bucket()
        logger.info(f"✅ 删除存储桶 '{bucket}' 成功")

    def list_buckets(self) -> List[BucketInfo]:
        def fetch_page(marker: str) -> ListPage[BucketInfo]:
            result = self.service.list_buckets(marker=marker)
            buckets = [
                BucketInfo(
                    name=info.name,
                    location=info.location,
                    creation_date=_iso_timestamp(info.creation_date),
                )
                for info in result.buckets
            ]
            return ListPage(buckets, result.next_marker, result.is_truncated)

        return collect_pages(fetch_page)

    def put_object(
        self,
        bucket: str,
        key: str,
        content: Union[bytes, str]
    ) -> PutObjectResult:
        data = to_bytes(content)
        logger.debug(f"正在上传对象: {bucket}/{key} (大小: {len(data)}字节)")
        result = self.bucket(bucket).put_object(key, data)
        logger.info(f"✅ 文件对象上传成功: {bucket}/{key}")
        return PutObjectResult(
            etag=strip_etag(result.etag),
            url=self.object_url(bucket, key),
            request_id=result.request_id,
        )

    def does_object_exist(self, bucket: str, key: str) -> bool:
        try:
            return self.bucket(bucket).object_exists(key)
        except NotFound:
            return False

    def delete_object(self, bucket: str, key: str) -> None:
        logger.debug(f"正在删除文件: {bucket}/{key}")
        self.bucket(bucket).delete_object(key)
        logger.info(f"✅ 文件删除成功: {bucket}/{key}")

    def delete_objects(self, bucket: str, keys: List[str]) -> List[str]:
        keys = list(keys)
        if not keys:
            return []
        deleted: List[str] = []
        handle = self.bucket(bucket)
        for start in range(0, len(keys), BATCH_DELETE_LIMIT):
            result = handle.batch_delete_objects(keys[start:start + BATCH_DELETE_LIMIT])
            deleted.extend(result.deleted_keys)
        logger.info(f"✅ 批量删除成功: {bucket} (共{len(deleted)}个文件)")
        return deleted

    def get_object(self, bucket: str, key: str) -> bytes:
        logger.debug(f"正在获取文件: {bucket}/{key}")
        result = self.bucket(bucket).get_object(key)
        return result.read()

    def list_objects(self, bucket: str, prefix: str = "") -> List[ObjectMetadata]:
        handle = self.bucket(bucket)

        def fetch_page(marker: str) -> ListPage[ObjectMetadata]:
            result = handle.list_objects(
                prefix=prefix,
                delimiter="",
                marker=marker,
                max_keys=self.page_size,
            )
            objects = [
                ObjectMetadata(
                    key=info.key,
                    size=info.size,
                    last_modified=_iso_timestamp(info.last_modified),
                    etag=strip_etag(info.etag),
                    url=self.object_url(bucket, info.key),
                )
                for info in result.object_list
            ]
            return ListPage(objects, result.next_marker, result.is_truncated)

        objects = collect_pages(fetch_page)
        logger.debug(f"列出文件成功: {bucket}/{prefix} (共{len(objects)}个文件)")
        return objects

    def upload_file(self, bucket: str, key: str, local_path: str) -> PutObjectResult:
        file_info = FileHandler.get_file_info(local_path)
        logger.debug(f"正在上传本地文件: {local_path} → {bucket}/{key} (大小: {file_info.file_size}字节)")
        result = self.bucket(bucket).put_object_from_file(key, local_path)
        logger.info(f"✅ 文件上传成功: {local_path} → {bucket}/{key}")
        return PutObjectResult(
            etag=strip_etag(result.etag),
            url=self.object_url(bucket, key),
            request_id=result.request_id,
        )

    def download_file(self, bucket: str, key: str, local_path: str) -> str:
        FileHandler.ensure_parent_directory(local_path)
        logger.debug(f"正在下载文件: {bucket}/{key} → {local_path}")
        self.bucket(bucket).get_object_to_file(key, local_path)
        logger.info(f"✅ 文件下载成功: {bucket}/{key} → {local_path}")
        return local_path
