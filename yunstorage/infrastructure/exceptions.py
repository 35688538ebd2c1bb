"""
Custom exceptions for the Infrastructure layer.

Errors raised by the vendor SDKs (oss2, qcloud_cos, minio) are not part of
this hierarchy; they propagate to the caller unchanged.
"""

class InfrastructureError(Exception):
    """Base class for exceptions in the infrastructure layer."""
    pass


class StorageError(InfrastructureError):
    """Base class for object storage facade errors."""
    pass


class ConfigError(StorageError):
    """Adapter configuration is missing a required field."""

    def __init__(self, provider: str, missing):
        self.provider = provider
        self.missing = list(missing)
        super().__init__(f"存储适配器 [{provider}] 缺少配置参数: {', '.join(self.missing)}")


class NotConfiguredError(StorageError):
    """No configuration was registered under the requested adapter name."""

    def __init__(self, name):
        self.name = name
        super().__init__(f"Storage adapter [{name}] does not have a configure.")


class UnsupportedProviderError(StorageError):
    """The adapter name (or its provider tag) has no adapter implementation."""

    def __init__(self, provider):
        self.provider = provider
        super().__init__(f"Storage adapter [{provider}] is not supported.")


class PaginationError(StorageError):
    """A truncated listing page came back without a usable continuation marker."""
    pass
