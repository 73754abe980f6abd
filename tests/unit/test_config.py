"""
Unit tests for configuration and the CLI parser.
"""

import socket

import pytest

from simplewebserver.config import DEFAULT_SERVER_NAME, ServerConfig
from simplewebserver.__main__ import build_parser, main


class TestServerConfig:

    def test_defaults(self):
        config = ServerConfig()

        assert config.host == "127.0.0.1"
        assert config.port == 8080
        assert config.read_timeout is None
        assert config.content_type == "text/html"
        assert config.server_name == DEFAULT_SERVER_NAME
        assert config.tag_server_name is None
        assert config.tag_name == DEFAULT_SERVER_NAME
        config.validate()

    @pytest.mark.parametrize("overrides", [
        {"port": -1},
        {"port": 65536},
        {"backlog": 0},
        {"buffer_size": 0},
        {"max_line_length": 0},
        {"read_timeout": 0},
        {"read_timeout": -2.5},
        {"log_level": "CHATTY"},
    ])
    def test_validate_rejects(self, overrides):
        with pytest.raises(ValueError):
            ServerConfig(**overrides).validate()

    def test_port_zero_allowed(self):
        ServerConfig(port=0).validate()

    def test_tag_name_overrides_server_name(self):
        config = ServerConfig(server_name="Header", tag_server_name="Tag")

        assert config.server_name == "Header"
        assert config.tag_name == "Tag"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("HTTP_HOST", "0.0.0.0")
        monkeypatch.setenv("HTTP_PORT", "3000")
        monkeypatch.setenv("HTTP_READ_TIMEOUT", "2.5")
        monkeypatch.setenv("HTTP_SERVER_NAME", "Env Server")
        monkeypatch.setenv("HTTP_TAG_SERVER_NAME", "Env Tag")
        monkeypatch.setenv("HTTP_LOG_LEVEL", "debug")

        config = ServerConfig.from_env()

        assert config.host == "0.0.0.0"
        assert config.port == 3000
        assert config.read_timeout == 2.5
        assert config.server_name == "Env Server"
        assert config.tag_name == "Env Tag"
        config.validate()

    def test_from_env_defaults(self, monkeypatch):
        for name in ("HTTP_HOST", "HTTP_PORT", "HTTP_READ_TIMEOUT",
                     "HTTP_SERVER_NAME", "HTTP_TAG_SERVER_NAME", "HTTP_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        assert ServerConfig.from_env() == ServerConfig()


class TestCLI:

    def test_defaults_from_config(self):
        args = build_parser(ServerConfig(port=9000)).parse_args([])

        assert args.port == 9000
        assert args.host == "127.0.0.1"
        assert args.read_timeout is None
        assert args.log_level == "INFO"
        assert args.tag_server_name is None

    def test_flags(self):
        args = build_parser(ServerConfig()).parse_args([
            "-p", "3000", "-H", "0.0.0.0", "--read-timeout", "1.5",
            "--server-name", "X", "--tag-server-name", "Y", "-l", "debug",
        ])

        assert args.port == 3000
        assert args.host == "0.0.0.0"
        assert args.read_timeout == 1.5
        assert args.server_name == "X"
        assert args.tag_server_name == "Y"
        assert args.log_level == "DEBUG"


class TestMain:

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in ("HTTP_HOST", "HTTP_PORT", "HTTP_READ_TIMEOUT",
                     "HTTP_SERVER_NAME", "HTTP_TAG_SERVER_NAME", "HTTP_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

    def test_bind_failure_exits_1(self, capsys):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as holder:
            holder.bind(("127.0.0.1", 0))
            holder.listen(1)
            port = holder.getsockname()[1]

            with pytest.raises(SystemExit) as exc_info:
                main(["-H", "127.0.0.1", "-p", str(port)])

        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_bad_environment_exits_2(self, monkeypatch, capsys):
        monkeypatch.setenv("HTTP_PORT", "abc")

        with pytest.raises(SystemExit) as exc_info:
            main([])

        assert exc_info.value.code == 2
        assert "invalid environment configuration" in capsys.readouterr().err

    def test_invalid_port_flag_exits_1(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["-p", "70000"])

        assert exc_info.value.code == 1
        assert "Invalid port" in capsys.readouterr().err
