import enum
import logging
import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Union

from yunstorage.core.config import Settings, settings as default_settings
from yunstorage.infrastructure.exceptions import NotConfiguredError
from .object_storage.base import BucketInfo, ObjectMetadata, ObjectStorageInterface, PutObjectResult
from .object_storage.factory import StorageFactory

logger = logging.getLogger(__name__)


class AdapterState(enum.Enum):
    UNCONFIGURED = "unconfigured"
    CONFIGURED = "configured"
    RESOLVED = "resolved"


@dataclass
class _AdapterSlot:
    """One registered adapter name: its frozen config and, once resolved, its instance"""
    config: Mapping[str, Any]
    adapter: Optional[ObjectStorageInterface] = None

    @property
    def provider(self) -> str:
        return self.config["provider"]

    @property
    def state(self) -> AdapterState:
        return AdapterState.CONFIGURED if self.adapter is None else AdapterState.RESOLVED


class StorageManager:
    """
    对象存储管理器

    按名称注册存储适配器配置，首次使用时创建适配器实例并缓存。
    第一个注册的适配器默认作为默认适配器；未指定名称的调用转发给默认适配器。

    配置格式（键名也可使用 snake_case，如 access_key_id）：

        oss:   {"accessKeyId": "", "accessKeySecret": "", "endpoint": ""}
        cos:   {"accessKeyId": "", "accessKeySecret": "", "region": "", "appid": "", "schema": "http"}
        minio: {"accessKeyId": "", "accessKeySecret": "", "endpoint": "", "secure": False}

    适配器类型默认等于注册名称，也可以通过配置中的 "provider" 字段指定，
    例如 register("backup", {"provider": "oss", ...})。
    """

    def __init__(self):
        self._slots: Dict[str, _AdapterSlot] = {}
        self._default: Optional[str] = None
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "StorageManager":
        """
        根据配置创建管理器，注册所有已配置凭证的存储适配器

        Args:
            settings: 配置对象，默认使用全局 settings

        Returns:
            StorageManager: 存储管理器
        """
        settings = settings or default_settings
        manager = cls()
        for name, config in settings.adapter_configs.items():
            manager.register(name, config)
        if settings.STORAGE_DEFAULT_ADAPTER:
            manager.set_default(settings.STORAGE_DEFAULT_ADAPTER)
        return manager

    def register(self, name: str, config: Mapping[str, Any]) -> None:
        """
        注册存储适配器配置

        配置在此处不做校验，创建适配器实例时才校验。重复注册同一名称会替换配置
        并丢弃已缓存的实例。

        Args:
            name: 适配器名称
            config: 适配器配置
        """
        frozen = dict(config)
        frozen["provider"] = frozen.get("provider") or name
        with self._lock:
            previous = self._slots.get(name)
            if previous is not None and previous.adapter is not None:
                logger.warning(f"存储适配器 [{name}] 被重新注册，已丢弃缓存的实例")
            self._slots[name] = _AdapterSlot(config=MappingProxyType(frozen))
            if not self._default:
                self._default = name
        logger.info(f"注册存储适配器: {name} (类型: {frozen['provider']})")

    def set_default(self, name: str) -> None:
        self._default = name

    def get_default(self) -> Optional[str]:
        return self._default

    def names(self) -> List[str]:
        return list(self._slots)

    def state(self, name: str) -> AdapterState:
        slot = self._slots.get(name)
        if slot is None:
            return AdapterState.UNCONFIGURED
        return slot.state

    def resolve(self, name: Optional[str]) -> ObjectStorageInterface:
        """
        获取指定名称的适配器实例，首次调用时创建并缓存

        Raises:
            NotConfiguredError: 该名称没有注册配置
            UnsupportedProviderError: 适配器类型不受支持
            ConfigError: 配置缺少必要参数
        """
        with self._lock:
            slot = self._slots.get(name) if name else None
            if slot is None:
                raise NotConfiguredError(name)
            if slot.adapter is None:
                slot.adapter = StorageFactory.create_storage(slot.provider, slot.config)
                logger.info(f"✅ 创建存储适配器实例: {name} ({slot.adapter.__class__.__name__})")
            return slot.adapter

    def adapter(self, name: Optional[str] = None) -> ObjectStorageInterface:
        """获取适配器实例，未指定名称时使用默认适配器"""
        return self.resolve(name or self.get_default())

    # 以下方法转发给默认适配器

    def client(self) -> Any:
        return self.adapter().client()

    def create_bucket(self, bucket: str) -> None:
        return self.adapter().create_bucket(bucket)

    def does_bucket_exist(self, bucket: str) -> bool:
        return self.adapter().does_bucket_exist(bucket)

    def delete_bucket(self, bucket: str) -> None:
        return self.adapter().delete_bucket(bucket)

    def list_buckets(self) -> List[BucketInfo]:
        return self.adapter().list_buckets()

    def put_object(self, bucket: str, key: str, content: Union[bytes, str]) -> PutObjectResult:
        return self.adapter().put_object(bucket, key, content)

    def does_object_exist(self, bucket: str, key: str) -> bool:
        return self.adapter().does_object_exist(bucket, key)

    def delete_object(self, bucket: str, key: str) -> None:
        return self.adapter().delete_object(bucket, key)

    def delete_objects(self, bucket: str, keys: List[str]) -> List[str]:
        return self.adapter().delete_objects(bucket, keys)

    def get_object(self, bucket: str, key: str) -> bytes:
        return self.adapter().get_object(bucket, key)

    def list_object_keys(self, bucket: str, prefix: str = "") -> List[str]:
        return self.adapter().list_object_keys(bucket, prefix)

    def list_objects(self, bucket: str, prefix: str = "") -> List[ObjectMetadata]:
        return self.adapter().list_objects(bucket, prefix)

    def object_url(self, bucket: str, key: str) -> str:
        return self.adapter().object_url(bucket, key)

    def upload_file(self, bucket: str, key: str, local_path: str) -> PutObjectResult:
        return self.adapter().upload_file(bucket, key, local_path)

    def download_file(self, bucket: str, key: str, local_path: str) -> str:
        return self.adapter().download_file(bucket, key, local_path)
