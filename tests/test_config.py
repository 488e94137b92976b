import pytest

from scraper.config import Config
from scraper.models import RetryPolicy


def test_defaults_from_shipped_config():
    config = Config(environ={})

    assert config.retry_policy == RetryPolicy(max_retries=3, base_delay_ms=2000)
    assert config.pagination["page_delay_ms"] == 1000
    assert config.fetcher["user_agent"].startswith("Mozilla/5.0")
    assert config.fetcher["cookies"] == ""
    assert config.endpoint["base_url"] == "https://www.google.com/maps/rpc/listugcposts"


def test_environment_overrides_are_type_converted():
    config = Config(environ={
        "RETRY_MAX_RETRIES": "5",
        "RETRY_BASE_DELAY_MS": "250",
        "FETCHER_TIMEOUT": "12.5",
        "LOG_JSON": "true",
        "LOG_LEVEL": "DEBUG",
    })

    assert config.retry_policy == RetryPolicy(max_retries=5, base_delay_ms=250)
    assert config.fetcher["timeout"] == 12.5
    assert config.logging == {"level": "DEBUG", "json": True}


def test_cookie_is_read_from_environment_verbatim():
    config = Config(environ={"GOOGLE_MAPS_COOKIES": "NID=511=abc; SID=123"})

    assert config.fetcher["cookies"] == "NID=511=abc; SID=123"


def test_get_returns_default_for_missing_keys():
    config = Config(environ={})

    assert config.get("retry", "max_retries") == 3
    assert config.get("retry", "missing", default="x") == "x"
    assert config.get("nope", "deeper") is None


def test_override_creates_missing_sections(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("logging:\n  level: INFO\n")

    config = Config(path, environ={"PAGINATION_PAGE_DELAY_MS": "0"})

    assert config.pagination == {"page_delay_ms": 0}
    assert config.retry_policy == RetryPolicy()


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        Config(tmp_path / "absent.yaml", environ={})


def test_invalid_yaml_raises_value_error(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("retry: [unclosed\n")

    with pytest.raises(ValueError, match="Invalid YAML"):
        Config(path, environ={})
