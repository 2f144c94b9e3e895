from vultr_cli import config


def _use_tmp_config_dir(monkeypatch, tmp_path) -> None:
    def _config_dir(_: str) -> str:
        return str(tmp_path)

    monkeypatch.setattr(config, "user_config_dir", _config_dir)
    monkeypatch.delenv(config.ENV_API_KEY, raising=False)
    monkeypatch.delenv(config.ENV_BASE_URL, raising=False)


def test_load_config_defaults_when_missing(tmp_path, monkeypatch) -> None:
    _use_tmp_config_dir(monkeypatch, tmp_path)

    cfg = config.load_config()

    assert cfg.base_url == "https://api.vultr.com/v1/"
    assert cfg.auth.token == ""
    assert cfg.timeout_s == 30.0
    assert cfg.verify_tls is True


def test_save_and_load_round_trip(tmp_path, monkeypatch) -> None:
    _use_tmp_config_dir(monkeypatch, tmp_path)
    cfg = config.default_config()
    cfg.auth.token = "secret"
    cfg.timeout_s = 10
    cfg.verify_tls = False

    path = config.save_config(cfg)
    contents = tmp_path.joinpath("config.toml").read_text(encoding="utf-8")
    loaded = config.load_config()

    assert path.endswith("config.toml")
    assert 'token = "secret"' in contents
    assert loaded.auth.token == "secret"
    assert loaded.timeout_s == 10.0
    assert loaded.verify_tls is False


def test_env_overrides_stored_values(tmp_path, monkeypatch) -> None:
    _use_tmp_config_dir(monkeypatch, tmp_path)
    cfg = config.default_config()
    cfg.auth.token = "stored"
    config.save_config(cfg)
    monkeypatch.setenv(config.ENV_API_KEY, "from-env")
    monkeypatch.setenv(config.ENV_BASE_URL, "localhost:8080/v1")

    loaded = config.load_config()
    stored = config.load_stored_config()

    assert loaded.auth.token == "from-env"
    assert loaded.base_url == "http://localhost:8080/v1/"
    assert stored.auth.token == "stored"


def test_from_toml_ignores_bad_values() -> None:
    cfg = config.from_toml({"timeout_s": "soon", "verify_tls": "nope", "auth": "x"})

    assert cfg.timeout_s == 30.0
    assert cfg.verify_tls is True
    assert cfg.auth.token == ""


def test_normalize_base_url_defaults_to_https() -> None:
    assert config.normalize_base_url("api.example.com/v1") == "https://api.example.com/v1/"


def test_normalize_base_url_keeps_single_trailing_slash() -> None:
    assert config.normalize_base_url("https://api.example.com/v1//") == "https://api.example.com/v1/"


def test_normalize_base_url_empty() -> None:
    assert config.normalize_base_url("  ") == ""
