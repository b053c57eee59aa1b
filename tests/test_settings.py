import json

import pytest

from cumt_login.errors import ConfigError
from cumt_login.settings import load_error_table, load_settings, parse_settings


def write_json(path, data):
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return path


BASE = {"user_account": "08201234", "user_password": "s3cretpw", "operator": "cmcc"}


def test_defaults(tmp_path):
    settings = load_settings(write_json(tmp_path / "settings.json", BASE))
    assert settings.log_file_path == tmp_path.resolve() / "logs"
    assert settings.info_sheet_path == tmp_path.resolve() / "ret_err_info_sheet.json"
    assert settings.log_level == "INFO"
    assert settings.gateway_host == "10.2.5.251:801"
    assert settings.check_url == "https://baidu.com"
    assert settings.daily_login_hour == 7
    assert settings.reconnect_interval_seconds == 300
    assert settings.timeout_seconds == 8


def test_overrides_and_login_request(tmp_path):
    data = dict(
        BASE,
        log_file_path="/var/log/cumt",
        info_sheet_path="sheets/info.json",
        log_level="debug",
        gateway_host="10.0.0.1",
        daily_login_hour=6,
        reconnect_interval_seconds=120,
        http={"timeout_seconds": 2.5},
    )
    settings = load_settings(write_json(tmp_path / "settings.json", data))
    assert str(settings.log_file_path) == "/var/log/cumt"
    assert settings.info_sheet_path == tmp_path.resolve() / "sheets" / "info.json"
    assert settings.log_level == "DEBUG"
    assert settings.daily_login_hour == 6
    assert settings.reconnect_interval_seconds == 120
    assert settings.timeout_seconds == 2.5
    assert settings.login_request.url.startswith("http://10.0.0.1/eportal/")
    assert "user_account=08201234%40cmcc" in settings.login_request.url


@pytest.mark.parametrize("missing", ["user_account", "user_password", "operator"])
def test_missing_credentials(tmp_path, missing):
    data = {key: value for key, value in BASE.items() if key != missing}
    with pytest.raises(ConfigError, match=missing):
        parse_settings(data, tmp_path)


@pytest.mark.parametrize(
    "override",
    [
        {"daily_login_hour": 24},
        {"daily_login_hour": "seven"},
        {"reconnect_interval_seconds": 0},
        {"http": {"timeout_seconds": -1}},
        {"http": "fast"},
    ],
)
def test_invalid_values(tmp_path, override):
    with pytest.raises(ConfigError):
        parse_settings(dict(BASE, **override), tmp_path)


def test_null_timeout_disables_it(tmp_path):
    assert parse_settings(dict(BASE, http={"timeout_seconds": None}), tmp_path).timeout_seconds is None


def test_unreadable_settings(tmp_path):
    with pytest.raises(ConfigError):
        load_settings(tmp_path / "missing.json")
    (tmp_path / "broken.json").write_text("{", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_settings(tmp_path / "broken.json")


def test_error_table_keeps_file_order(tmp_path):
    records = [
        {"ret_code": "1", "raw_info": "ldap auth error", "info_zh": "密码错误", "info_en": "Wrong password"},
        {"ret_code": "1", "raw_info": "userid error1", "info_zh": "账号不存在", "info_en": "No such account"},
        {"ret_code": "1", "raw_info": "ldap auth error", "info_zh": "重复", "info_en": "Duplicate"},
    ]
    table = load_error_table(write_json(tmp_path / "sheet.json", records))
    assert [entry.raw_info for entry in table] == ["ldap auth error", "userid error1", "ldap auth error"]
    assert table[0].info_zh == "密码错误"
    assert isinstance(table, tuple)


@pytest.mark.parametrize("records", [{"raw_info": "x"}, ["x"], [{"info_zh": "no raw info"}]])
def test_error_table_rejects_bad_shape(tmp_path, records):
    with pytest.raises(ConfigError):
        load_error_table(write_json(tmp_path / "sheet.json", records))


def test_example_files_load():
    from pathlib import Path

    config_dir = Path(__file__).resolve().parents[1] / "config"
    settings = load_settings(config_dir / "settings.example.json")
    table = load_error_table(settings.info_sheet_path)
    assert settings.info_sheet_path == config_dir / "ret_err_info_sheet.example.json"
    assert table
