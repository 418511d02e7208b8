"""CLI command tests."""

from pathlib import Path
from unittest.mock import patch

from typer.testing import CliRunner

from src.cli import app
from src.customer_api.core.services import JwtVerificationService
from src.customer_api.runtime.config.config_data import ConfigData, DatabaseConfig
from src.customer_api.runtime.context import get_config, with_context

runner = CliRunner()


class TestIssueToken:
    def test_issue_token_with_scopes(self):
        result = runner.invoke(
            app, ["customers", "issue-token", "alex@example.com", "--scope", "ROLE_USER"]
        )

        assert result.exit_code == 0
        claims = JwtVerificationService(get_config().jwt).verify(result.stdout.strip())
        assert claims.subject == "alex@example.com"
        assert claims.scopes == ["ROLE_USER"]


class TestDatabaseCommands:
    def test_init_db_then_list(self, tmp_path: Path):
        db_file = tmp_path / "cli.db"
        override = ConfigData(database=DatabaseConfig(url=f"sqlite:///{db_file}"))

        with with_context(override):
            init_result = runner.invoke(app, ["init-db"])
            list_result = runner.invoke(app, ["customers", "list"])

        assert init_result.exit_code == 0
        assert db_file.exists()
        assert list_result.exit_code == 0
        assert "No customers found" in list_result.stdout


class TestServe:
    def test_serve_uses_configured_port(self):
        with patch("uvicorn.run") as run:
            result = runner.invoke(app, ["serve", "--host", "127.0.0.1"])

        assert result.exit_code == 0
        kwargs = run.call_args.kwargs
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["port"] == get_config().app.port
