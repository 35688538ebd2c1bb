import logging
import os
from datetime import datetime
from typing import Optional

from yunstorage.core.config import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: Optional[str] = None, log_dir: Optional[str] = None) -> Optional[str]:
    """
    配置根日志记录器

    Args:
        level: 日志级别名称，例如 INFO、DEBUG，默认取 settings.LOG_LEVEL
        log_dir: 日志文件目录，默认取 settings.LOG_DIR，为空时只输出到控制台

    Returns:
        Optional[str]: 日志文件路径，未写文件时为 None
    """
    if level is None:
        level = settings.LOG_LEVEL
    if log_dir is None:
        log_dir = settings.LOG_DIR
    log_level = getattr(logging, level.upper(), logging.INFO)

    # 创建logger
    logger = logging.getLogger()
    logger.setLevel(log_level)

    formatter = logging.Formatter(LOG_FORMAT)

    # 创建控制台处理器
    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)

    # 清除可能已存在的处理器，然后添加新的处理器
    logger.handlers = []
    logger.addHandler(console_handler)

    log_filename = None
    if log_dir:
        if not os.path.exists(log_dir):
            os.makedirs(log_dir)
        # 按日期生成日志文件
        log_filename = os.path.join(log_dir, f"yunstorage_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log")
        file_handler = logging.FileHandler(log_filename, encoding='utf-8')
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return log_filename
