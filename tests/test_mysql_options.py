from datetime import timedelta

import pytest

from fastgo.mysql_options import MySQLOptions, split_host_port


def test_defaults_are_valid_and_match_source():
    opts = MySQLOptions()
    assert opts.validate() is None
    assert opts.addr == "127.0.0.1:3306"
    assert opts.username == "onex"
    assert opts.database == "onex"
    assert opts.max_idle_connections == 100
    assert opts.max_open_connections == 100
    assert opts.max_connection_life_time == timedelta(seconds=10)


def test_dsn_format():
    password = "password"
    opts = MySQLOptions(addr="db.example.com:3307", username="user", password=password, database="blog")
    assert opts.dsn() == "user:password@tcp(db.example.com:3307)/blog?charset=utf8&parseTime=true&loc=local"


@pytest.mark.parametrize(
    "addr, expected",
    [
        ("127.0.0.1:3306", ("127.0.0.1", "3306")),
        ("[::1]:80", ("::1", "80")),
        (":6666", ("", "6666")),
        ("localhost:", ("localhost", "")),
    ],
)
def test_split_host_port(addr, expected):
    assert split_host_port(addr) == expected


@pytest.mark.parametrize(
    "addr, reason",
    [
        ("localhost", "missing port in address"),
        ("a:b:c", "too many colons in address"),
        ("[::1", "missing ']' in address"),
        ("[::1]", "missing port in address"),
        ("[::1]x:80", "too many colons in address"),
        ("a]:80", "unexpected ']' in address"),
    ],
)
def test_split_host_port_errors(addr, reason):
    with pytest.raises(ValueError, match=re_escape(reason)):
        split_host_port(addr)


def re_escape(text):
    import re

    return re.escape(text)


@pytest.mark.parametrize(
    "changes, message",
    [
        ({"addr": ""}, "MySQL server address cannot be empty"),
        ({"addr": "localhost"}, "invalid MySQL address format 'localhost'"),
        ({"addr": "localhost:abc"}, "invalid MySQL port: abc"),
        ({"addr": "localhost:0"}, "invalid MySQL port: 0"),
        ({"addr": "localhost:65536"}, "invalid MySQL port: 65536"),
        ({"addr": ":3306"}, "MySQL hostname cannot be empty"),
        ({"username": ""}, "MySQL username cannot be empty"),
        ({"password": ""}, "MySQL password cannot be empty"),
        ({"database": ""}, "MySQL database name cannot be empty"),
        ({"max_idle_connections": 0}, "MySQL max idle connections must be greater than 0"),
        ({"max_open_connections": 0}, "MySQL max open connections must be greater than 0"),
        (
            {"max_idle_connections": 10, "max_open_connections": 5},
            "MySQL max idle connections cannot be greater than max open connections",
        ),
        ({"max_connection_life_time": timedelta(0)}, "MySQL max connection lifetime must be greater than 0"),
    ],
)
def test_validate_errors(changes, message):
    opts = MySQLOptions(**changes)
    with pytest.raises(ValueError, match=re_escape(message)):
        opts.validate()


def test_port_boundaries_are_valid():
    assert MySQLOptions(addr="h:1").validate() is None
    assert MySQLOptions(addr="h:65535").validate() is None


def test_new_db_engine_settings():
    password = "password"
    opts = MySQLOptions(
        addr="db.example.com:3307",
        username="user",
        password=password,
        database="blog",
        max_idle_connections=5,
        max_open_connections=8,
    )
    engine = opts.new_db()
    try:
        assert engine.url.host == "db.example.com"
        assert engine.url.port == 3307
        assert engine.url.database == "blog"
        assert engine.url.username == "user"
        assert engine.url.password == "password"
        assert engine.url.query["charset"] == "utf8"
        assert engine.pool.size() == 5
    finally:
        engine.dispose()


def test_new_db_rejects_bad_address():
    with pytest.raises(ValueError):
        MySQLOptions(addr="nohost").new_db()