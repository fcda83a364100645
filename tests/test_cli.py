"""Tests for CLI module."""

from unittest.mock import patch

from config import ConfigError, ValidationError


class TestMain:
    """Tests for main() dispatch."""

    @patch('cli.resolve_config')
    def test_no_argument_prints_usage_and_config(self, mock_resolve, config, capsys):
        mock_resolve.return_value = config

        from cli import main
        rc = main([])

        out = capsys.readouterr().out
        assert rc == 0
        assert 'delete_cluster_and_disks' in out
        assert 'project_name' in out and 'proj1' in out
        assert 'manifest_dir' in out

    @patch('cli.resolve_config')
    def test_validation_failure_returns_1(self, mock_resolve, capsys):
        mock_resolve.side_effect = ValidationError([
            "node_count is 2, GlusterFS needs at least 3 nodes\n  Set NODE_COUNT to 3 or more",
            "Required tool 'kubectl' not found on PATH",
        ])

        from cli import main
        rc = main(['deploy'])

        out = capsys.readouterr().out
        assert rc == 1
        assert 'Pre-flight validation failed' in out
        assert 'node_count is 2' in out
        assert "'kubectl'" in out

    @patch('cli.Orchestrator')
    @patch('cli.resolve_config')
    def test_validation_failure_skips_operation(self, mock_resolve, mock_orch):
        mock_resolve.side_effect = ValidationError(['bad'])

        from cli import main
        main(['generate_manifests'])

        mock_orch.assert_not_called()

    @patch('cli.resolve_config')
    def test_config_error_returns_1(self, mock_resolve, capsys):
        mock_resolve.side_effect = ConfigError("GFS_BOOTSTRAP_CONFIG=/x does not exist")

        from cli import main
        assert main([]) == 1
        assert 'does not exist' in capsys.readouterr().out

    @patch('cli.resolve_config')
    def test_unknown_operation(self, mock_resolve, config, capsys):
        mock_resolve.return_value = config

        from cli import main
        rc = main(['frobnicate'])

        assert rc == 1
        assert "Unknown operation 'frobnicate'" in capsys.readouterr().out

    @patch('cli.resolve_config')
    def test_too_many_arguments(self, mock_resolve, capsys):
        from cli import main
        assert main(['deploy', 'extra']) == 1
        mock_resolve.assert_not_called()

    @patch('cli.Orchestrator')
    @patch('cli.resolve_config')
    def test_runs_named_operation(self, mock_resolve, mock_orch, config):
        mock_resolve.return_value = config
        mock_orch.return_value.run.return_value = True

        from cli import main
        assert main(['delete_cluster']) == 0

        operation, passed_config = mock_orch.call_args[0]
        assert operation.name == 'delete_cluster'
        assert passed_config is config

    @patch('cli.Orchestrator')
    @patch('cli.resolve_config')
    def test_failed_operation_returns_1(self, mock_resolve, mock_orch, config):
        mock_resolve.return_value = config
        mock_orch.return_value.run.return_value = False

        from cli import main
        assert main(['push_image']) == 1


class TestDebugEnabled:
    """Tests for the DEBUG toggle."""

    def test_values(self):
        from cli import debug_enabled
        assert debug_enabled({'DEBUG': '1'}) is True
        assert debug_enabled({'DEBUG': 'true'}) is True
        assert debug_enabled({'DEBUG': '0'}) is False
        assert debug_enabled({'DEBUG': 'false'}) is False
        assert debug_enabled({}) is False
        assert debug_enabled({'DEBUG': 'no'}) is False
        assert debug_enabled({'DEBUG': 'yes'}) is True


class TestGetVersion:
    """Tests for version lookup."""

    @patch('cli.version', return_value='0.1.0')
    def test_installed_version(self, mock_version):
        from cli import get_version
        assert get_version() == '0.1.0'
        mock_version.assert_called_once_with('gfs-bootstrap')

    def test_dev_when_not_installed(self):
        from importlib.metadata import PackageNotFoundError

        from cli import get_version
        with patch('cli.version', side_effect=PackageNotFoundError('gfs-bootstrap')):
            assert get_version() == 'dev'
