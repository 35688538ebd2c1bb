"""
Object Storage Abstract Base Classes

Defines the interface for object storage implementations to ensure
consistency across different cloud providers (Alibaba OSS, Tencent COS, MinIO).
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, List, Mapping, Optional, TypeVar, Union
from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from yunstorage.infrastructure.exceptions import ConfigError, PaginationError

T = TypeVar("T")


class AdapterConfig(BaseModel):
    """Credentials shared by every provider"""
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    provider: Optional[str] = None
    access_key_id: str = Field(..., alias="accessKeyId", min_length=1)
    access_key_secret: str = Field(..., alias="accessKeySecret", min_length=1)
    # 列举对象时每页的最大数量（OSS/COS 上限均为1000）
    page_size: int = Field(default=1000, alias="pageSize", ge=1, le=1000)

    @classmethod
    def parse(cls, provider: str, config: Mapping[str, Any]):
        """
        Validate a raw configuration mapping

        Raises:
            ConfigError: a required field is missing or empty
        """
        try:
            return cls.model_validate(dict(config))
        except ValidationError as e:
            missing = []
            for error in e.errors():
                name = str(error["loc"][0]) if error["loc"] else "config"
                if name not in missing:
                    missing.append(name)
            raise ConfigError(provider, missing) from e


class OssConfig(AdapterConfig):
    """Aliyun OSS: endpoint such as oss-cn-hangzhou.aliyuncs.com"""
    endpoint: str = Field(..., min_length=1)


class CosConfig(AdapterConfig):
    """Tencent COS: bucket names are scoped by appid"""
    region: str = Field(..., min_length=1)
    appid: str = Field(..., min_length=1)
    schema_: str = Field(default="http", alias="schema")

    @field_validator("appid", mode="before")
    @classmethod
    def appid_to_str(cls, v):
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("schema_", mode="before")
    @classmethod
    def default_schema(cls, v):
        return v or "http"


class MinioConfig(AdapterConfig):
    """MinIO / S3 compatible server"""
    endpoint: str = Field(..., min_length=1)
    secure: bool = False


@dataclass
class BucketInfo:
    """Bucket information"""
    name: str
    location: Optional[str] = None
    creation_date: Optional[str] = None


@dataclass
class ObjectMetadata:
    """Object metadata information from listings"""
    key: str
    size: int
    last_modified: Optional[str] = None
    etag: Optional[str] = None
    url: Optional[str] = None


@dataclass
class PutObjectResult:
    """Normalized upload result"""
    etag: Optional[str] = None
    url: Optional[str] = None
    request_id: Optional[str] = None


@dataclass
class ListPage(Generic[T]):
    """One page of a marker-paginated listing"""
    items: List[T] = field(default_factory=list)
    next_marker: str = ""
    is_truncated: bool = False


def collect_pages(fetch_page: Callable[[str], ListPage[T]]) -> List[T]:
    """
    Accumulate every page of a marker-paginated listing

    Starts with an empty marker and feeds each page's continuation marker
    into the next request until a page reports it is not truncated.

    Args:
        fetch_page: Callable issuing one "list with marker" request

    Returns:
        Items of all pages, in page order

    Raises:
        PaginationError: a truncated page has no new continuation marker
    """
    items: List[T] = []
    marker = ""
    while True:
        page = fetch_page(marker)
        items.extend(page.items)
        if not page.is_truncated:
            break
        if not page.next_marker or page.next_marker == marker:
            raise PaginationError(
                f"列举结果被截断但未返回新的 marker (当前 marker: {marker!r})"
            )
        marker = page.next_marker
    return items


def strip_etag(etag: Optional[str]) -> Optional[str]:
    if etag is None:
        return None
    return etag.strip('"')


def to_bytes(content: Union[bytes, bytearray, str]) -> bytes:
    if isinstance(content, str):
        return content.encode("utf-8")
    return bytes(content)


class ObjectStorageInterface(ABC):
    """
    Abstract interface for object storage operations

    This interface defines the contract that all object storage
    implementations must follow, enabling easy switching between
    different providers. Bucket names are always the caller's logical
    names; provider errors propagate unchanged.
    """

    config_class = AdapterConfig
    provider = ""

    def __init__(self, config: Mapping[str, Any]):
        self.config = self.config_class.parse(self.provider, config)

    @abstractmethod
    def client(self) -> Any:
        """Return the underlying provider client"""
        pass

    @abstractmethod
    def create_bucket(self, bucket: str) -> None:
        """Create bucket"""
        pass

    @abstractmethod
    def does_bucket_exist(self, bucket: str) -> bool:
        """
        Check if bucket exists

        Returns:
            False when the provider reports the bucket is not found
        """
        pass

    @abstractmethod
    def delete_bucket(self, bucket: str) -> None:
        """Delete bucket"""
        pass

    @abstractmethod
    def list_buckets(self) -> List[BucketInfo]:
        """List every bucket owned by the configured account"""
        pass

    @abstractmethod
    def put_object(
        self,
        bucket: str,
        key: str,
        content: Union[bytes, str]
    ) -> PutObjectResult:
        """
        Upload in-memory content

        Args:
            bucket: Target bucket name
            key: Object key
            content: Object content, str is encoded as UTF-8

        Returns:
            PutObjectResult with url, etag and request id where available
        """
        pass

    @abstractmethod
    def does_object_exist(self, bucket: str, key: str) -> bool:
        """Check if object exists, False on not-found"""
        pass

    @abstractmethod
    def delete_object(self, bucket: str, key: str) -> None:
        """Delete a single object"""
        pass

    @abstractmethod
    def delete_objects(self, bucket: str, keys: List[str]) -> List[str]:
        """
        Delete multiple objects in a bucket

        An empty key list is a no-op and returns an empty list.

        Returns:
            Keys reported deleted by the provider
        """
        pass

    @abstractmethod
    def get_object(self, bucket: str, key: str) -> bytes:
        """Get the whole object content, b"" for a zero-byte object"""
        pass

    @abstractmethod
    def list_objects(self, bucket: str, prefix: str = "") -> List[ObjectMetadata]:
        """
        List every object under prefix, paginating transparently

        Args:
            bucket: Source bucket name
            prefix: Object key prefix

        Returns:
            Object metadata in the order pages were returned
        """
        pass

    def list_object_keys(self, bucket: str, prefix: str = "") -> List[str]:
        """List every object key under prefix"""
        return [obj.key for obj in self.list_objects(bucket, prefix)]

    @abstractmethod
    def object_url(self, bucket: str, key: str) -> str:
        """Derive the public URL of an object"""
        pass

    @abstractmethod
    def upload_file(self, bucket: str, key: str, local_path: str) -> PutObjectResult:
        """Upload local file to storage"""
        pass

    @abstractmethod
    def download_file(self, bucket: str, key: str, local_path: str) -> str:
        """
        Download object to local path

        Returns:
            The local path written
        """
        pass

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} provider={self.provider!r}>"
