"""
Tencent COS Object Storage Adapter

Implements ObjectStorageInterface for Tencent Cloud Object Storage.
COS bucket names carry the account appid ("{bucket}-{appid}"); this adapter
adds the suffix on every request and strips it from listBuckets results so
callers only ever see logical bucket names.
"""

import logging
from typing import Any, Dict, List, Mapping, Union

from qcloud_cos import CosConfig as CosClientConfig, CosS3Client
from qcloud_cos.cos_exception import CosServiceError

from yunstorage.infrastructure.storage.file_handler import FileHandler
from .base import (
    BucketInfo,
    CosConfig,
    ListPage,
    ObjectMetadata,
    ObjectStorageInterface,
    PutObjectResult,
    collect_pages,
    strip_etag,
    to_bytes,
)

logger = logging.getLogger(__name__)

# delete_objects 单次最多删除1000个对象
BATCH_DELETE_LIMIT = 1000


def _as_list(value: Any) -> List[Any]:
    """XML 转换结果中单个元素可能不是列表"""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _is_truncated(value: Any) -> bool:
    return str(value).lower() == "true"


class TencentCosAdapter(ObjectStorageInterface):
    """
    Tencent COS implementation of ObjectStorageInterface

    Provides object storage capabilities using qcloud_cos.CosS3Client.
    """

    config_class = CosConfig
    provider = "cos"

    def __init__(self, config: Mapping[str, Any]):
        super().__init__(config)
        self.page_size = self.config.page_size
        self._client = CosS3Client(CosClientConfig(
            Region=self.config.region,
            SecretId=self.config.access_key_id,
            SecretKey=self.config.access_key_secret,
            Scheme=self.config.schema_,
        ))

    def client(self) -> CosS3Client:
        return self._client

    def full_bucket_name(self, bucket: str) -> str:
        """Logical bucket name -> COS bucket name"""
        return f"{bucket}-{self.config.appid}"

    def logical_bucket_name(self, full_name: str) -> str:
        """COS bucket name -> logical bucket name"""
        return full_name[:-(len(self.config.appid) + 1)]

    def object_url(self, bucket: str, key: str) -> str:
        return self._client.get_object_url(Bucket=self.full_bucket_name(bucket), Key=key)

    def create_bucket(self, bucket: str) -> None:
        self._client.create_bucket(Bucket=self.full_bucket_name(bucket))
        logger.info(f"✅ 创建存储桶 '{bucket}' 成功")

    def does_bucket_exist(self, bucket: str) -> bool:
        try:
            return self._client.bucket_exists(Bucket=self.full_bucket_name(bucket))
        except CosServiceError as e:
            if e.get_status_code() == 404:
                return False
            raise

    def delete_bucket(self, bucket: str) -> None:
        self._client.delete_bucket(Bucket=self.full_bucket_name(bucket))
        logger.info(f"✅ 删除存储桶 '{bucket}' 成功")

    def list_buckets(self) -> List[BucketInfo]:
        def fetch_page(marker: str) -> ListPage[BucketInfo]:
            response = self._client.list_buckets(Marker=marker)
            entries = _as_list((response.get("Buckets") or {}).get("Bucket"))
            buckets = [
                BucketInfo(
                    name=self.logical_bucket_name(item["Name"]),
                    location=item.get("Location"),
                    creation_date=item.get("CreationDate"),
                )
                for item in entries
            ]
            next_marker = response.get("NextMarker") or (entries[-1]["Name"] if entries else "")
            return ListPage(buckets, next_marker, _is_truncated(response.get("IsTruncated")))

        buckets = collect_pages(fetch_page)
        logger.debug(f"列出存储桶成功 (共{len(buckets)}个)")
        return buckets

    def put_object(
        self,
        bucket: str,
        key: str,
        content: Union[bytes, str]
    ) -> PutObjectResult:
        data = to_bytes(content)
        logger.debug(f"正在上传对象: {bucket}/{key} (大小: {len(data)}字节)")
        response = self._client.put_object(
            Bucket=self.full_bucket_name(bucket),
            Body=data,
            Key=key,
        )
        logger.info(f"✅ 文件对象上传成功: {bucket}/{key}")
        return self._put_result(bucket, key, response)

    def does_object_exist(self, bucket: str, key: str) -> bool:
        try:
            return self._client.object_exists(Bucket=self.full_bucket_name(bucket), Key=key)
        except CosServiceError as e:
            if e.get_status_code() == 404:
                return False
            raise

    def delete_object(self, bucket: str, key: str) -> None:
        logger.debug(f"正在删除文件: {bucket}/{key}")
        self._client.delete_object(Bucket=self.full_bucket_name(bucket), Key=key)
        logger.info(f"✅ 文件删除成功: {bucket}/{key}")

    def delete_objects(self, bucket: str, keys: List[str]) -> List[str]:
        keys = list(keys)
        if not keys:
            return []
        deleted: List[str] = []
        for start in range(0, len(keys), BATCH_DELETE_LIMIT):
            response = self._client.delete_objects(
                Bucket=self.full_bucket_name(bucket),
                Delete={
                    "Object": [{"Key": key} for key in keys[start:start + BATCH_DELETE_LIMIT]],
                    "Quiet": "false",
                },
            )
            deleted.extend(item["Key"] for item in _as_list(response.get("Deleted")))
            for error in _as_list(response.get("Error")):
                logger.warning(f"⚠️ 删除失败: {bucket}/{error.get('Key')} ({error.get('Code')}: {error.get('Message')})")
        logger.info(f"✅ 批量删除成功: {bucket} (共{len(deleted)}个文件)")
        return deleted

    def get_object(self, bucket: str, key: str) -> bytes:
        logger.debug(f"正在获取文件: {bucket}/{key}")
        response = self._client.get_object(Bucket=self.full_bucket_name(bucket), Key=key)
        return response["Body"].get_raw_stream().read()

    def list_objects(self, bucket: str, prefix: str = "") -> List[ObjectMetadata]:
        full_name = self.full_bucket_name(bucket)

        def fetch_page(marker: str) -> ListPage[ObjectMetadata]:
            response = self._client.list_objects(
                Bucket=full_name,
                Prefix=prefix,
                Marker=marker,
                MaxKeys=self.page_size,
            )
            contents = _as_list(response.get("Contents"))
            objects = [
                ObjectMetadata(
                    key=item["Key"],
                    size=int(item.get("Size", 0)),
                    last_modified=item.get("LastModified"),
                    etag=strip_etag(item.get("ETag")),
                    url=self.object_url(bucket, item["Key"]),
                )
                for item in contents
            ]
            # 未返回 NextMarker 时以本页最后一个 key 作为下一页起点
            next_marker = response.get("NextMarker") or (contents[-1]["Key"] if contents else "")
            return ListPage(objects, next_marker, _is_truncated(response.get("IsTruncated")))

        objects = collect_pages(fetch_page)
        logger.debug(f"列出文件成功: {bucket}/{prefix} (共{len(objects)}个文件)")
        return objects

    def upload_file(self, bucket: str, key: str, local_path: str) -> PutObjectResult:
        file_info = FileHandler.get_file_info(local_path)
        logger.debug(f"正在上传本地文件: {local_path} → {bucket}/{key} (大小: {file_info.file_size}字节)")
        response = self._client.upload_file(
            Bucket=self.full_bucket_name(bucket),
            LocalFilePath=local_path,
            Key=key,
        )
        logger.info(f"✅ 文件上传成功: {local_path} → {bucket}/{key}")
        return self._put_result(bucket, key, response)

    def download_file(self, bucket: str, key: str, local_path: str) -> str:
        FileHandler.ensure_parent_directory(local_path)
        logger.debug(f"正在下载文件: {bucket}/{key} → {local_path}")
        self._client.download_file(
            Bucket=self.full_bucket_name(bucket),
            Key=key,
            DestFilePath=local_path,
        )
        logger.info(f"✅ 文件下载成功: {bucket}/{key} → {local_path}")
        return local_path

    def _put_result(self, bucket: str, key: str, response: Dict[str, Any]) -> PutObjectResult:
        response = response or {}
        return PutObjectResult(
            etag=strip_etag(response.get("ETag")),
            url=self.object_url(bucket, key),
            request_id=response.get("x-cos-request-id"),
        )
