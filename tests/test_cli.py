"""
Tests for the command line entry point and its exit codes.
"""

import pytest
from unittest.mock import patch

from catalog_sync import cli
from catalog_sync.matching import MatchPolicy
from catalog_sync.models import SyncReport


@pytest.fixture
def env(clean_env, required_env):
    for key, value in required_env.items():
        clean_env.setenv(key, value)
    return clean_env


@pytest.fixture(autouse=True)
def no_logging_setup():
    with patch.object(cli, "setup_logging") as setup:
        yield setup


class TestMain:

    @pytest.mark.parametrize("missing", ["MONGO_URI", "WEAVIATE_HOST", "WEAVIATE_API_KEY"])
    def test_missing_config_exits_1_without_connecting(self, env, missing, capsys):
        env.delenv(missing)

        with patch.object(cli.Reconciler, "from_settings") as from_settings:
            code = cli.main([])

        assert code == 1
        from_settings.assert_not_called()
        assert missing in capsys.readouterr().err

    def test_success_exits_0(self, env):
        with patch.object(cli.Reconciler, "from_settings") as from_settings:
            from_settings.return_value.run.return_value = SyncReport(candidates=0)
            code = cli.main([])

        assert code == 0
        from_settings.return_value.run.assert_called_once_with()
        _, kwargs = from_settings.call_args
        assert kwargs == {"dry_run": False, "policy": None}

    def test_connection_failure_exits_1(self, env, capsys):
        with patch.object(cli.Reconciler, "from_settings", side_effect=RuntimeError("auth failed")):
            code = cli.main([])

        assert code == 1
        assert "auth failed" in capsys.readouterr().err

    def test_flags_are_passed_through(self, env):
        with patch.object(cli.Reconciler, "from_settings") as from_settings:
            cli.main(["--dry-run", "--policy", "unique"])

        _, kwargs = from_settings.call_args
        assert kwargs == {"dry_run": True, "policy": MatchPolicy.UNIQUE}

    def test_logging_configured_from_settings(self, env, no_logging_setup):
        env.setenv("LOG_LEVEL", "DEBUG")
        with patch.object(cli.Reconciler, "from_settings"):
            cli.main([])

        no_logging_setup.assert_called_once_with("DEBUG", None)

    def test_unknown_policy_rejected_by_parser(self, env):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["--policy", "best"])
        assert exc_info.value.code == 2
