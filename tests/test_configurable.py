"""Tests for ConfigurableObject and defaulted options."""

import threading

import pytest

from kvconfig.config.configurable import ConfigOption, ConfigurableObject, resolve_option
from kvconfig.config.store import Config


class Server(ConfigurableObject):
    port = ConfigOption("PORT", 8080)
    host = ConfigOption("HOST", "localhost")
    timeout = ConfigOption("TIMEOUT", 2.5)
    verbose = ConfigOption("VERBOSE", True)


class TestResolveOption:
    """The shared resolution function."""

    def test_without_store_returns_default(self):
        assert resolve_option(None, "PORT", 8080) == 8080

    def test_existing_value_is_converted(self):
        config = Config()
        config.set("PORT", "9090")
        assert resolve_option(config, "PORT", 8080) == 9090

    def test_missing_value_is_materialized(self):
        config = Config()
        assert resolve_option(config, "PORT", 8080) == 8080
        assert config.exists("PORT")
        assert config.get("PORT") == "8080"

    def test_explicit_type(self):
        config = Config()
        config.set("RATIO", "0.5")
        assert resolve_option(config, "RATIO", 1, float) == 0.5

    def test_stored_value_wins_over_later_default(self):
        config = Config()
        resolve_option(config, "PORT", 8080)
        assert resolve_option(config, "PORT", 1234) == 8080

    def test_concurrent_first_access_stores_once(self):
        config = Config()
        results = []

        def worker(default):
            results.append(resolve_option(config, "SHARED", default))

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(20)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        stored = config.get("SHARED", int)
        assert results == [stored] * len(threads)
        assert len(config) == 1


class TestConfigOption:
    """Option descriptors on a ConfigurableObject subclass."""

    def test_no_store_returns_default_without_mutation(self):
        server = Server()
        assert server.config is None
        assert server.port == 8080
        assert server.host == "localhost"

    def test_empty_store_is_populated_on_first_access(self):
        config = Config()
        server = Server(config)

        assert server.port == 8080
        assert config.exists("PORT")
        assert config.get("PORT") == "8080"
        assert not config.exists("HOST")

    def test_materialized_defaults_survive_write(self, tmp_path):
        config = Config()
        server = Server(config)
        server.port
        server.verbose
        path = tmp_path / "server.cfg"

        assert config.write(path)
        assert path.read_text(encoding="utf-8") == "PORT = 8080\nVERBOSE = 1\n"

        reloaded = Server(Config(path))
        assert reloaded.port == 8080
        assert reloaded.verbose is True

    def test_values_from_file(self, write_file):
        path = write_file("port = 9000\nhost = example.org\ntimeout = 0.75\nverbose = 0\n")
        server = Server(Config(path))

        assert server.port == 9000
        assert server.host == "example.org"
        assert server.timeout == 0.75
        assert server.verbose is False

    def test_unparsable_value_gives_zero(self):
        config = Config()
        config.set("PORT", "not-a-port")
        assert Server(config).port == 0

    def test_class_access_exposes_metadata(self):
        assert isinstance(Server.port, ConfigOption)
        assert Server.port.param_name == "PORT"
        assert Server.port.default == 8080
        assert Server.port.name == "port"

    def test_option_param_and_default(self):
        server = Server()
        assert server.option_param("port") == "PORT"
        assert server.option_default("port") == 8080
        assert Server.option_param("timeout") == "TIMEOUT"
        assert Server.option_default("timeout") == 2.5

    def test_unknown_option(self):
        with pytest.raises(AttributeError):
            Server.option_param("missing")
        with pytest.raises(AttributeError):
            Server.option_default("obj_name")

    def test_options_are_read_only(self):
        server = Server(Config())
        with pytest.raises(AttributeError):
            server.port = 1


class TestConfigurableObject:
    """Store reference and name handling."""

    def test_store_is_borrowed(self):
        config = Config()
        server = Server(config)
        assert server.config is config

    def test_store_can_be_reassigned(self):
        first = Config()
        second = Config()
        second.set("PORT", 1)
        server = Server(first)

        server.config = second
        assert server.port == 1
        assert not first.exists("PORT")

        server.config = None
        assert server.port == 8080

    def test_shared_store(self):
        config = Config()
        a = Server(config, obj_name="a")
        b = Server(config, obj_name="b")

        a.port
        config.set("PORT", 7000)
        assert b.port == 7000

    def test_obj_name_is_read_only(self):
        server = Server(obj_name="primary")
        assert server.obj_name == "primary"
        with pytest.raises(AttributeError):
            server.obj_name = "other"

    def test_default_name_is_empty(self):
        assert ConfigurableObject().obj_name == ""
