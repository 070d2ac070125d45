"""
YAML configuration with environment overrides
"""

import yaml

from voucher_gateway.config import AppConfig, load_config, save_config


def test_defaults_without_file(tmp_path, monkeypatch):
    monkeypatch.delenv("VOUCHER_API_URL", raising=False)
    
    loaded = load_config(str(tmp_path / "missing.yaml"))
    
    assert loaded.backend.base_url is None
    assert loaded.pagination.per_page == 10
    assert loaded.pagination.activity_per_page == 15
    assert loaded.signatures.placeholder == "/placeholder.svg"


def test_yaml_file(tmp_path, monkeypatch):
    monkeypatch.delenv("VOUCHER_API_URL", raising=False)
    path = tmp_path / "config.yaml"
    path.write_text(yaml.dump({
        "backend": {"base_url": "http://books.local/api", "timeout": 5},
        "logging": {"level": "DEBUG", "file": None},
    }))
    
    loaded = load_config(str(path))
    
    assert loaded.backend.base_url == "http://books.local/api"
    assert loaded.backend.timeout == 5.0
    assert loaded.logging.file is None
    assert loaded.api.port == 8080


def test_environment_overrides_backend_url(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.dump({"backend": {"base_url": "http://from-file/api"}}))
    monkeypatch.setenv("VOUCHER_API_URL", "http://from-env/api")
    
    assert load_config(str(path)).backend.base_url == "http://from-env/api"


def test_config_file_from_environment(tmp_path, monkeypatch):
    path = tmp_path / "other.yaml"
    path.write_text(yaml.dump({"api": {"port": 9090}}))
    monkeypatch.setenv("VOUCHER_CONFIG_FILE", str(path))
    
    assert load_config().api.port == 9090


def test_save_round_trip(tmp_path, monkeypatch):
    monkeypatch.delenv("VOUCHER_API_URL", raising=False)
    original = AppConfig()
    original.backend.base_url = "http://saved/api"
    path = tmp_path / "saved.yaml"
    
    save_config(original, str(path))
    
    assert load_config(str(path)).backend.base_url == "http://saved/api"


def test_save_writes_back_to_the_file_it_loaded(tmp_path, monkeypatch):
    monkeypatch.delenv("VOUCHER_API_URL", raising=False)
    custom = tmp_path / "custom.yaml"
    custom.write_text(yaml.dump({"backend": {"base_url": "http://orig.test/api"}}))
    workdir = tmp_path / "workdir"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    monkeypatch.setenv("VOUCHER_CONFIG_FILE", str(custom))
    
    loaded = load_config()
    loaded.backend.base_url = "http://new.test/api"
    saved_to = save_config(loaded)
    
    assert saved_to == custom
    assert yaml.safe_load(custom.read_text())["backend"]["base_url"] == "http://new.test/api"
    assert not (workdir / "config.yaml").exists()


def test_explicit_save_path_wins(tmp_path, monkeypatch):
    monkeypatch.delenv("VOUCHER_API_URL", raising=False)
    source = tmp_path / "source.yaml"
    source.write_text(yaml.dump({"api": {"port": 9000}}))
    target = tmp_path / "target.yaml"
    
    save_config(load_config(str(source)), str(target))
    
    assert yaml.safe_load(target.read_text())["api"]["port"] == 9000
