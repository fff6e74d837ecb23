"""Tests for configuration loading."""

from roastlens_core.config import DEFAULT_CONFIG, load_config


def test_defaults_applied_when_no_config_file(tmp_path):
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["provider"] == "openai"
    assert config["model"] == "gpt-4o"
    assert config["max_diff_chars"] == 50000
    assert config["enable_mock"] is True
    assert config["store"] == "noop"
    assert config["rate_limit"] is None


def test_config_file_overrides_defaults(tmp_path):
    cfg = tmp_path / ".roastlens.yml"
    cfg.write_text("provider: anthropic\nmodel: claude-3-5-haiku-20241022\nstore: sqlite\n")
    config = load_config(config_path=str(cfg))
    assert config["provider"] == "anthropic"
    assert config["model"] == "claude-3-5-haiku-20241022"
    assert config["store"] == "sqlite"


def test_rate_limit_loaded(tmp_path):
    cfg = tmp_path / ".roastlens.yml"
    cfg.write_text("rate_limit:\n  requests: 5\n  window_seconds: 30\n")
    config = load_config(config_path=str(cfg))
    assert config["rate_limit"] == {"requests": 5, "window_seconds": 30}


def test_empty_config_file_keeps_defaults(tmp_path):
    cfg = tmp_path / ".roastlens.yml"
    cfg.write_text("")
    config = load_config(config_path=str(cfg))
    assert config["provider"] == "openai"


def test_cli_overrides_config_file(tmp_path):
    cfg = tmp_path / ".roastlens.yml"
    cfg.write_text("provider: anthropic\n")
    config = load_config(config_path=str(cfg), cli_overrides={"provider": "mock"})
    assert config["provider"] == "mock"


def test_none_cli_overrides_are_ignored(tmp_path):
    cfg = tmp_path / ".roastlens.yml"
    cfg.write_text("provider: anthropic\n")
    config = load_config(config_path=str(cfg), cli_overrides={"provider": None})
    assert config["provider"] == "anthropic"


def test_credentials_read_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_test")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-openai")
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    config = load_config(config_path=str(tmp_path / "none.yml"))
    assert config["github_token"] == "ghp_test"
    assert config["openai_api_key"] == "sk-openai"
    assert config["anthropic_api_key"] is None


def test_defaults_not_mutated(tmp_path):
    cfg = tmp_path / ".roastlens.yml"
    cfg.write_text("store: sqlite\n")
    load_config(config_path=str(cfg))
    assert DEFAULT_CONFIG["store"] == "noop"
