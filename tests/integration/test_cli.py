from unittest.mock import MagicMock, patch

from click.testing import CliRunner

from flexdata.cli import cli


def sqlite_settings(**overrides) -> MagicMock:
    settings = MagicMock()
    settings.database_url = "sqlite+aiosqlite:///./fd_data/flexdata.db"
    settings.host = "0.0.0.0"
    settings.port = 8000
    settings.workers = 1
    settings.is_development = True
    settings.log_level = "INFO"
    for key, value in overrides.items():
        setattr(settings, key, value)
    return settings


def test_info_shows_configuration():
    result = CliRunner().invoke(cli, ["info"])

    assert result.exit_code == 0
    assert "FlexData v" in result.output
    assert "Admin API:" in result.output
    assert "Key Step:" in result.output


def test_serve_rejects_multiple_workers_with_sqlite():
    with patch("flexdata.cli.get_settings", return_value=sqlite_settings()), patch(
        "uvicorn.run"
    ) as mock_run:
        result = CliRunner().invoke(cli, ["serve", "--workers", "2"])

    assert result.exit_code == 1
    assert "SQLite does not support multiple worker processes" in result.output
    mock_run.assert_not_called()


def test_serve_starts_uvicorn():
    with patch("flexdata.cli.get_settings", return_value=sqlite_settings()), patch(
        "flexdata.cli.configure_logging"
    ), patch("uvicorn.run") as mock_run:
        result = CliRunner().invoke(cli, ["serve", "--port", "9000"])

    assert result.exit_code == 0
    mock_run.assert_called_once()
    assert mock_run.call_args.kwargs["port"] == 9000
    assert mock_run.call_args.args[0] == "flexdata.infrastructure.api.app:app"


def test_delete_collection_aborts_without_confirmation():
    with patch("flexdata.cli.configure_logging"), patch(
        "flexdata.infrastructure.persistence.database.get_db_manager"
    ) as mock_manager:
        result = CliRunner().invoke(cli, ["delete-collection", "col-1"], input="n\n")

    assert result.exit_code == 1
    assert "Aborted" in result.output
    mock_manager.assert_not_called()


def test_delete_collection_reports_missing(tmp_path, monkeypatch):
    from flexdata.core.config import get_settings
    from flexdata.infrastructure.persistence import database

    monkeypatch.setenv("FLEXDATA_DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path}/cli.db")
    get_settings.cache_clear()
    monkeypatch.setattr(database, "_db_manager", None)

    runner = CliRunner()
    assert runner.invoke(cli, ["init-db"]).exit_code == 0
    monkeypatch.setattr(database, "_db_manager", None)
    result = runner.invoke(cli, ["delete-collection", "nope", "--yes"])

    get_settings.cache_clear()
    assert result.exit_code == 1
    assert "not found" in result.output
