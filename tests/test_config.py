import logging

import pytest
from pydantic import ValidationError

from yunstorage.core.config import Settings
from yunstorage.core import log_config
from yunstorage.core.log_config import setup_logging


def test_adapter_configs_only_include_configured_providers():
    settings = Settings(
        _env_file=None,
        MINIO_ENDPOINT="localhost:9000",
        MINIO_ACCESS_KEY="minioadmin",
        MINIO_SECRET_KEY="minioadmin",
    )

    assert settings.adapter_configs == {
        "minio": {
            "accessKeyId": "minioadmin",
            "accessKeySecret": "minioadmin",
            "endpoint": "localhost:9000",
            "secure": False,
        },
    }


def test_cos_settings():
    settings = Settings(
        _env_file=None,
        COS_SECRET_ID="id",
        COS_SECRET_KEY="key",
        COS_REGION="ap-guangzhou",
        COS_APPID=1250000000,
    )

    assert settings.adapter_configs["cos"]["appid"] == "1250000000"
    assert settings.adapter_configs["cos"]["schema"] == "http"
    assert settings.adapter_configs["cos"]["pageSize"] == 1000


def test_page_size_is_bounded():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, LIST_PAGE_SIZE=1001)


def test_setup_logging_writes_file(tmp_path):
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        log_file = setup_logging("DEBUG", str(tmp_path / "logs"))
        logging.getLogger("yunstorage.test").info("hello")
        for handler in root.handlers:
            handler.flush()

        assert root.level == logging.DEBUG
        assert "hello" in open(log_file, encoding="utf-8").read()
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers = saved_handlers
        root.setLevel(saved_level)


def test_setup_logging_console_only(monkeypatch):
    monkeypatch.setattr(log_config.settings, "LOG_DIR", None)
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        assert setup_logging("warning") is None
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)


def test_list_page_size_reaches_adapter_configs():
    settings = Settings(
        _env_file=None,
        OSS_ACCESS_KEY_ID="id",
        OSS_ACCESS_KEY_SECRET="secret",
        OSS_ENDPOINT="oss-cn-hangzhou.aliyuncs.com",
        LIST_PAGE_SIZE=200,
    )

    assert settings.adapter_configs["oss"]["pageSize"] == 200


def test_setup_logging_defaults_from_settings(monkeypatch, tmp_path):
    monkeypatch.setattr(log_config.settings, "LOG_LEVEL", "ERROR")
    monkeypatch.setattr(log_config.settings, "LOG_DIR", str(tmp_path / "logs"))
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        log_file = setup_logging()

        assert root.level == logging.ERROR
        assert log_file.startswith(str(tmp_path / "logs"))
        assert len(root.handlers) == 2
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers = saved_handlers
        root.setLevel(saved_level)
