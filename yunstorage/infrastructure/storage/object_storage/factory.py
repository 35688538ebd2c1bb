"""
Object Storage Factory

Creates appropriate storage adapters based on provider tag.
"""

import logging
from typing import Any, Dict, List, Mapping, Type

from yunstorage.infrastructure.exceptions import UnsupportedProviderError
from .base import ObjectStorageInterface
from .cos_adapter import TencentCosAdapter
from .minio_adapter import MinIOAdapter
from .oss_adapter import AliyunOssAdapter

logger = logging.getLogger(__name__)


class StorageFactory:
    """Factory for creating object storage instances"""

    _adapters: Dict[str, Type[ObjectStorageInterface]] = {
        "oss": AliyunOssAdapter,
        "cos": TencentCosAdapter,
        "minio": MinIOAdapter,
    }

    @classmethod
    def create_storage(
        cls,
        provider: str,
        config: Mapping[str, Any]
    ) -> ObjectStorageInterface:
        """
        Create object storage instance based on provider tag

        Args:
            provider: Provider tag ("oss", "cos", "minio")
            config: Provider configuration mapping

        Returns:
            ObjectStorageInterface implementation

        Raises:
            UnsupportedProviderError: no adapter registered for provider
            ConfigError: config is missing required fields
        """
        adapter_class = cls._adapters.get(provider)
        if adapter_class is None:
            raise UnsupportedProviderError(provider)
        return adapter_class(config)

    @classmethod
    def register_adapter(cls, provider: str, adapter_class: Type[ObjectStorageInterface]) -> None:
        """
        注册新的适配器类型

        Args:
            provider: 适配器名称
            adapter_class: 适配器类（必须实现ObjectStorageInterface接口）
        """
        if not (isinstance(adapter_class, type) and issubclass(adapter_class, ObjectStorageInterface)):
            raise ValueError("适配器类必须实现ObjectStorageInterface接口")

        cls._adapters[provider] = adapter_class
        logger.info(f"注册对象存储适配器: {provider}")

    @classmethod
    def supported_providers(cls) -> List[str]:
        return list(cls._adapters)
