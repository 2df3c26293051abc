# tests/test_config.py - Tests for configuration
"""
Unit tests for Config and registry construction from configuration.
"""

import pytest

from gathering_agent.errors import ConfigurationError
from gathering_agent.utils.config import Config, build_registry_from_config
from gathering_agent.utils.helpers import load_object, read_events


def write_config(tmp_path, text):
    path = tmp_path / "agent.yaml"
    path.write_text(text)
    return str(path)


class TestConfig:
    """Test cases for Config"""

    def test_defaults(self):
        """Test default configuration"""
        cfg = Config()

        assert cfg.get('agent.agent_id') == ''
        assert cfg.get('logging.level') == 'INFO'
        assert cfg.get('metrics.port') == 9090
        assert cfg.get('gatherers') == []

    def test_defaults_are_not_shared(self):
        """Test instances do not mutate the class defaults"""
        Config().set('agent.agent_id', 'agent_1')

        assert Config().get('agent.agent_id') == ''

    def test_load_from_file(self, tmp_path):
        """Test file values are merged over defaults"""
        cfg = Config(write_config(tmp_path, "agent:\n  agent_id: agent_1\nmetrics:\n  port: 9100\n"))

        assert cfg.get('agent.agent_id') == 'agent_1'
        assert cfg.get('metrics.port') == 9100
        assert cfg.get('metrics.enabled') is False

    def test_missing_file_uses_defaults(self, tmp_path):
        """Test a missing file is not fatal"""
        cfg = Config(str(tmp_path / "missing.yaml"))

        assert cfg.get('logging.level') == 'INFO'

    def test_invalid_file(self, tmp_path):
        """Test a file that is not a mapping"""
        with pytest.raises(ConfigurationError):
            Config(write_config(tmp_path, "- just\n- a list\n"))

    def test_get_unknown_key(self):
        """Test default value for unknown keys"""
        assert Config().get('agent.unknown.key', 'fallback') == 'fallback'


class TestBuildRegistryFromConfig:
    """Test cases for build_registry_from_config"""

    def test_build_registry(self, tmp_path):
        """Test gatherers are instantiated from their factories"""
        cfg = Config(write_config(tmp_path, (
            "gatherers:\n"
            "  - {name: disk, version: v1, factory: 'conftest:FakeGatherer'}\n"
            "  - {name: disk, version: v2, factory: 'conftest:FakeGatherer'}\n"
        )))

        registry = build_registry_from_config(cfg)

        assert registry.list() == ["disk - v1/v2"]
        assert registry.resolve("disk").name() == "fake"

    def test_empty_gatherers(self):
        """Test no gatherers configured"""
        assert build_registry_from_config(Config()).list() == []

    @pytest.mark.parametrize("entry", [
        {'name': 'disk', 'version': 'v1'},
        {'name': 'disk', 'factory': 'conftest:FakeGatherer'},
        {'name': 'disk', 'version': 'v1', 'factory': 'collections:OrderedDict'},
        {'name': 'disk', 'version': 'v1', 'factory': 'not_a_module_at_all:Thing'},
        {'name': 'disk', 'version': 'v1', 'factory': 'os:getenv'},
        {'name': 'disk', 'version': '', 'factory': 'conftest:FakeGatherer'},
        {'name': None, 'version': 'v1', 'factory': 'conftest:FakeGatherer'},
        'corosync',
        ['disk', 'v1'],
        None,
    ])
    def test_invalid_entries(self, entry):
        """Test incomplete or wrong gatherer entries"""
        cfg = Config()
        cfg.set('gatherers', [entry])

        with pytest.raises(ConfigurationError):
            build_registry_from_config(cfg)

    def test_numeric_version(self):
        """Test a version written as a YAML number is accepted"""
        cfg = Config()
        cfg.set('gatherers', [{'name': 'disk', 'version': 0, 'factory': 'conftest:FakeGatherer'}])

        registry = build_registry_from_config(cfg)

        assert registry.list() == ["disk - 0"]
        assert registry.resolve("disk@0").name() == "fake"

    def test_failing_factory_keeps_cause(self):
        """Test a factory error is wrapped with its cause"""
        cfg = Config()
        cfg.set('gatherers', [{'name': 'disk', 'version': 'v1', 'factory': 'os:getenv'}])

        with pytest.raises(ConfigurationError) as exc_info:
            build_registry_from_config(cfg)

        assert isinstance(exc_info.value.__cause__, TypeError)


class TestHelpers:
    """Test cases for helper functions"""

    def test_load_object(self):
        """Test importing a dotted attribute"""
        assert load_object('os.path:join.__name__') == 'join'

    @pytest.mark.parametrize("path", ["os.path", ":join", "os:does_not_exist"])
    def test_load_object_invalid(self, path):
        """Test invalid import paths"""
        with pytest.raises(ConfigurationError):
            load_object(path)

    def test_read_events(self, tmp_path):
        """Test newline-delimited events skip blank lines"""
        path = tmp_path / "events.ndjson"
        path.write_text('{"type": "a"}\n\n  \n{"type": "b"}\n')

        with open(path, 'rb') as f:
            assert list(read_events(f)) == [b'{"type": "a"}', b'{"type": "b"}']
