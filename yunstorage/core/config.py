import os
from typing import Any, Dict, Optional, Union

from dotenv import load_dotenv
from pydantic_settings import BaseSettings
from pydantic import field_validator

project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
env_path = os.path.join(project_root, '.env')
load_dotenv(env_path)


class Settings(BaseSettings):
    # 默认存储适配器，为空时使用第一个注册的适配器
    STORAGE_DEFAULT_ADAPTER: Optional[str] = None

    # 阿里云 OSS 配置
    OSS_ACCESS_KEY_ID: Optional[str] = None
    OSS_ACCESS_KEY_SECRET: Optional[str] = None
    OSS_ENDPOINT: Optional[str] = None  # 例如 oss-cn-hangzhou.aliyuncs.com

    # 腾讯云 COS 配置
    COS_SECRET_ID: Optional[str] = None
    COS_SECRET_KEY: Optional[str] = None
    COS_REGION: Optional[str] = None    # 例如 ap-guangzhou
    COS_APPID: Optional[str] = None
    COS_SCHEMA: str = "http"

    # MinIO配置
    MINIO_ENDPOINT: Optional[str] = None
    MINIO_ACCESS_KEY: Optional[str] = None
    MINIO_SECRET_KEY: Optional[str] = None
    MINIO_SECURE: bool = False

    # 列举对象时每页的最大数量（OSS/COS 上限均为1000）
    LIST_PAGE_SIZE: int = 1000

    # 日志配置
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None

    @field_validator("COS_APPID", mode="before")
    @classmethod
    def appid_to_str(cls, v: Union[str, int, None]) -> Optional[str]:
        if v is None:
            return None
        return str(v)

    @field_validator("LIST_PAGE_SIZE")
    @classmethod
    def check_page_size(cls, v: int) -> int:
        if not 1 <= v <= 1000:
            raise ValueError(f"LIST_PAGE_SIZE 必须在 1~1000 之间: {v}")
        return v

    @property
    def adapter_configs(self) -> Dict[str, Dict[str, Any]]:
        """
        获取已配置凭证的存储适配器配置，键为适配器名称
        """
        configs: Dict[str, Dict[str, Any]] = {}
        if self.OSS_ACCESS_KEY_ID and self.OSS_ACCESS_KEY_SECRET:
            configs["oss"] = {
                "accessKeyId": self.OSS_ACCESS_KEY_ID,
                "accessKeySecret": self.OSS_ACCESS_KEY_SECRET,
                "endpoint": self.OSS_ENDPOINT,
                "pageSize": self.LIST_PAGE_SIZE,
            }
        if self.COS_SECRET_ID and self.COS_SECRET_KEY:
            configs["cos"] = {
                "accessKeyId": self.COS_SECRET_ID,
                "accessKeySecret": self.COS_SECRET_KEY,
                "region": self.COS_REGION,
                "schema": self.COS_SCHEMA,
                "appid": self.COS_APPID,
                "pageSize": self.LIST_PAGE_SIZE,
            }
        if self.MINIO_ACCESS_KEY and self.MINIO_SECRET_KEY:
            configs["minio"] = {
                "accessKeyId": self.MINIO_ACCESS_KEY,
                "accessKeySecret": self.MINIO_SECRET_KEY,
                "endpoint": self.MINIO_ENDPOINT,
                "secure": self.MINIO_SECURE,
            }
        return configs

    class Config:
        case_sensitive = True
        env_file = ".env"


# 创建设置实例
settings = Settings()
