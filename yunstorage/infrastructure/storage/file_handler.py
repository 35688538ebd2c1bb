import os
import logging
from datetime import datetime
from dataclasses import dataclass

logger = logging.getLogger(__name__)

@dataclass
class FileInfo:
    """文件基础信息数据类"""
    file_path: str
    file_name: str
    file_size: int
    modified_time: str

class FileHandler:
    """
    本地文件操作处理器

    负责上传/下载时本地路径的校验与目录准备
    不包含具体的存储逻辑，保持职责单一
    """

    @staticmethod
    def validate_file_exists(file_path: str) -> bool:
        """
        验证文件是否存在

        Args:
            file_path: 文件路径

        Returns:
            bool: 文件是否存在
        """
        if not file_path:
            return False
        return os.path.isfile(file_path)

    @staticmethod
    def require_file(file_path: str) -> None:
        """
        要求本地文件存在

        Raises:
            FileNotFoundError: 文件不存在
        """
        if not FileHandler.validate_file_exists(file_path):
            raise FileNotFoundError(f"文件不存在: {file_path}")

    @staticmethod
    def get_file_info(file_path: str) -> FileInfo:
        """
        获取文件基本信息

        Args:
            file_path: 文件路径

        Returns:
            FileInfo: 文件信息对象
        """
        FileHandler.require_file(file_path)

        modified = datetime.fromtimestamp(os.path.getmtime(file_path))
        return FileInfo(
            file_path=file_path,
            file_name=os.path.basename(file_path),
            file_size=os.path.getsize(file_path),
            modified_time=modified.strftime("%Y-%m-%d %H:%M:%S")
        )

    @staticmethod
    def ensure_directory_exists(dir_path: str) -> None:
        """
        确保目录存在，如果不存在则创建

        Args:
            dir_path: 目录路径
        """
        if dir_path and not os.path.exists(dir_path):
            os.makedirs(dir_path, exist_ok=True)
            logger.info(f"创建目录: {dir_path}")

    @staticmethod
    def ensure_parent_directory(file_path: str) -> None:
        """确保文件所在目录存在"""
        FileHandler.ensure_directory_exists(os.path.dirname(os.path.abspath(file_path)))
