"""
Config Tests
------------
"""

import yaml

from qa_core.config import Config


def write_config(tmp_path, data) -> str:
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return str(path)


def test_dotted_lookup(tmp_path) -> None:
    cfg = Config(write_config(tmp_path, {"driver": {"browser": "firefox", "headless": False}}))
    assert cfg.get("driver.browser") == "firefox"
    assert cfg.get("driver.missing", "fallback") == "fallback"
    assert cfg.get_bool("driver.headless", True) is False


def test_environment_overrides_yaml(tmp_path, monkeypatch) -> None:
    cfg = Config(write_config(tmp_path, {"driver": {"browser": "firefox"}}))
    monkeypatch.setenv("DRIVER_BROWSER", "edge")
    assert cfg.get("driver.browser") == "edge"


def test_missing_file_gives_defaults(tmp_path) -> None:
    cfg = Config(str(tmp_path / "absent.yaml"))
    assert cfg.data == {}
    assert cfg.get("report.dir", "reports") == "reports"


def test_env_selects_config_file(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("QA_CORE_CONFIG", write_config(tmp_path, {"report": {"dir": "out"}}))
    assert Config().get("report.dir") == "out"


def test_invalid_yaml_is_logged_not_raised(tmp_path) -> None:
    path = tmp_path / "broken.yaml"
    path.write_text("driver: [unclosed", encoding="utf-8")
    assert Config(str(path)).data == {}


def test_overrides_and_typed_getters(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("DRIVER_HEADLESS", "yes")
    monkeypatch.setenv("EXECUTOR_MAX_WORKERS", "not-a-number")
    cfg = Config(str(tmp_path / "absent.yaml"), overrides={"report.screenshots_dir": "shots"})
    assert cfg.get("report.screenshots_dir") == "shots"
    assert cfg.get_bool("driver.headless") is True
    assert cfg.get_int("executor.max_workers", 4) == 4
    assert cfg.require("driver.remote_url") is None
