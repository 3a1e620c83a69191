from fandom_oracle.config import DEFAULT_BASE_URL, OracleConfig


def test_defaults(monkeypatch):
    for name in ["UPSTREAM_BASE_URL", "UPSTREAM_CLIENT_ID", "UPSTREAM_BEARER_TOKEN", "CACHE_TTL_SECS"]:
        monkeypatch.delenv(name, raising=False)

    config = OracleConfig.from_env()
    assert config.base_url == DEFAULT_BASE_URL
    assert config.client_id is None
    assert config.bearer_token is None
    assert config.cache_ttl_secs == 300


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("UPSTREAM_BASE_URL", "http://localhost:8080/v2")
    monkeypatch.setenv("UPSTREAM_CLIENT_ID", "cid")
    monkeypatch.setenv("UPSTREAM_BEARER_TOKEN", "   ")
    monkeypatch.setenv("CACHE_TTL_SECS", "60")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = OracleConfig.from_env()
    assert config.base_url == "http://localhost:8080/v2"
    assert config.client_id == "cid"
    assert config.bearer_token is None
    assert config.cache_ttl_secs == 60
    assert config.log_level == "DEBUG"
