from pathlib import Path

from fastgo.config import Settings, file_path, load_settings, search_dirs


def test_search_dirs_uses_home(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    assert search_dirs() == [str(tmp_path / ".fastgo"), "."]


def test_file_path_uses_home(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    assert file_path() == str(tmp_path / ".fastgo" / "fg-apiserver.yaml")


def _write(path, text):
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_load_settings_reads_yaml(tmp_path):
    config = _write(tmp_path / "c.yaml", "addr: 1.2.3.4:80\nlog:\n  Level: debug\nmysql:\n  max-idle-connections: 7\n")
    settings = load_settings(config, {})
    assert settings.get("addr") == "1.2.3.4:80"
    assert settings.get_string("log.level") == "debug"
    assert settings.get("MYSQL.Max-Idle-Connections") == 7
    assert settings.get_string("mysql.max-idle-connections") == "7"


def test_missing_values(tmp_path):
    settings = load_settings(_write(tmp_path / "c.yaml", "a: 1\n"), {})
    assert settings.get("b") is None
    assert settings.get_string("b") == ""
    assert settings.get("a.b") is None


def test_environment_overrides_file(tmp_path):
    config = _write(tmp_path / "c.yaml", "log:\n  level: info\nmysql:\n  max-idle-connections: 7\n")
    env = {"FASTGO_LOG_LEVEL": "error", "FASTGO_MYSQL_MAX_IDLE_CONNECTIONS": "9", "FASTGO_LOG_FORMAT": "text"}
    settings = load_settings(config, env)
    assert settings.get_string("log.level") == "error"
    assert settings.get_string("log.format") == "text"
    assert settings.as_mapping() == {"log": {"level": "error"}, "mysql": {"max-idle-connections": "9"}}


def test_empty_env_value_is_ignored(tmp_path):
    settings = load_settings(_write(tmp_path / "c.yaml", "addr: x:1\n"), {"FASTGO_ADDR": ""})
    assert settings.get("addr") == "x:1"


def test_bool_as_string():
    settings = Settings({"flag": True, "off": False}, {})
    assert settings.get_string("flag") == "true"
    assert settings.get_string("off") == "false"


def test_as_mapping_is_a_copy():
    settings = Settings({"mysql": {"addr": "a:1"}}, {})
    mapping = settings.as_mapping()
    mapping["mysql"]["addr"] = "changed"
    assert settings.get("mysql.addr") == "a:1"


def test_missing_file_gives_empty_settings(tmp_path):
    settings = load_settings(str(tmp_path / "absent.yaml"), {})
    assert settings.as_mapping() == {}


def test_invalid_yaml_gives_empty_settings(tmp_path):
    settings = load_settings(_write(tmp_path / "bad.yaml", "a: [unclosed\n"), {})
    assert settings.as_mapping() == {}


def test_search_finds_home_config(monkeypatch, tmp_path):
    home = tmp_path / "home"
    (home / ".fastgo").mkdir(parents=True)
    _write(home / ".fastgo" / "fg-apiserver.yaml", "addr: home:1\n")
    work = tmp_path / "work"
    work.mkdir()
    _write(work / "fg-apiserver.yaml", "addr: cwd:1\n")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    assert load_settings("", {}).get("addr") == "home:1"


def test_search_falls_back_to_current_dir(monkeypatch, tmp_path):
    home = tmp_path / "home"
    home.mkdir()
    work = tmp_path / "work"
    work.mkdir()
    _write(work / "fg-apiserver.yaml", "addr: cwd:1\n")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    assert load_settings(None, {}).get("addr") == "cwd:1"
    assert Path(".").resolve() == work.resolve()