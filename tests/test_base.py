import pytest

from yunstorage import ConfigError, PaginationError
from yunstorage.infrastructure.storage.object_storage.base import (
    CosConfig,
    ListPage,
    OssConfig,
    collect_pages,
    strip_etag,
    to_bytes,
)


def test_collect_pages_follows_markers():
    pages = {
        "": ListPage([1, 2], "m1", True),
        "m1": ListPage([3], "m2", True),
        "m2": ListPage([4], "", False),
    }
    seen = []

    def fetch(marker):
        seen.append(marker)
        return pages[marker]

    assert collect_pages(fetch) == [1, 2, 3, 4]
    assert seen == ["", "m1", "m2"]


def test_collect_pages_repeated_marker():
    with pytest.raises(PaginationError):
        collect_pages(lambda marker: ListPage(["x"], "same", True))


def test_oss_config_accepts_snake_case():
    config = OssConfig.parse("oss", {
        "access_key_id": "id",
        "access_key_secret": "secret",
        "endpoint": "oss-cn-hangzhou.aliyuncs.com",
    })

    assert config.access_key_id == "id"
    assert config.endpoint == "oss-cn-hangzhou.aliyuncs.com"


def test_cos_config_defaults():
    config = CosConfig.parse("cos", {
        "accessKeyId": "id",
        "accessKeySecret": "secret",
        "region": "ap-guangzhou",
        "appid": 1250000000,
        "schema": "",
    })

    assert config.appid == "1250000000"
    assert config.schema_ == "http"


def test_config_error_lists_missing_fields():
    with pytest.raises(ConfigError) as exc:
        OssConfig.parse("oss", {})

    assert set(exc.value.missing) == {"accessKeyId", "accessKeySecret", "endpoint"}
    assert "oss" in str(exc.value)


def test_helpers():
    assert strip_etag('"abc"') == "abc"
    assert strip_etag(None) is None
    assert to_bytes("中文") == "中文".encode("utf-8")
    assert to_bytes(bytearray(b"ab")) == b"ab"
