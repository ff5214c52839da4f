"""Config loading and profile overlay tests."""

from predpricer.config import get_settings, load_config


def test_defaults_when_config_missing(tmp_path):
    settings = get_settings(config_dir=tmp_path)
    assert settings.pool_floor == 0.0001
    assert settings.odds_format == "EU"
    assert settings.default_timeframe == "1D"
    assert settings.trade_window == 100
    assert settings.debounce_sec == 0.4
    assert settings.api_port == 8000
    assert settings.logging_level == "INFO"


def test_profile_overlays_default(tmp_path):
    (tmp_path / "default.toml").write_text(
        '[display]\nodds_format = "us"\n\n[feed]\ndebounce_ms = 400\n\n[api]\nhost = "0.0.0.0"\nport = 9000\n'
    )
    (tmp_path / "dev.toml").write_text('[feed]\ndebounce_ms = 50\n\n[logging]\nlevel = "debug"\n')

    base = get_settings(config_dir=tmp_path)
    assert base.odds_format == "US"
    assert base.debounce_ms == 400

    dev = get_settings("dev", tmp_path)
    assert dev.debounce_ms == 50
    assert dev.api_host == "0.0.0.0"
    assert dev.api_port == 9000
    assert dev.logging_level == "DEBUG"


def test_unknown_profile_is_ignored(tmp_path):
    (tmp_path / "default.toml").write_text("[orderbook]\ntrade_window = 25\n")
    assert load_config("nope", tmp_path) == {"orderbook": {"trade_window": 25}}
