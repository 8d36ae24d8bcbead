"""
Tests unitarios para scripts.export_files.

Valida:
- Código de salida según los resultados
- Overrides de la línea de comandos
- Configuración inválida

python -m pytest tests/test_export_files.py
"""

from unittest.mock import MagicMock, patch

import pytest

from exporter.models import Outcome
from scripts.export_files import (
    EXIT_CONFIGURATION_ERROR,
    build_config,
    exit_code,
    main,
    parse_args,
)


@pytest.fixture
def no_logging_setup():
    with patch("scripts.export_files.setup_logging") as mock_setup:
        yield mock_setup


class TestExitCode:
    """Tests de exit_code."""

    @pytest.mark.parametrize("outcomes,code", [
        ([Outcome.ACCEPTED], 0),
        ([Outcome.ACCEPTED, Outcome.ACCEPTED], 0),
        ([Outcome.ACCEPTED, Outcome.RETRYABLE], 2),
        ([Outcome.RETRYABLE, Outcome.REJECTED], 1),
        ([Outcome.REJECTED], 1),
    ])
    def test_worst_outcome_wins(self, outcomes, code):
        assert exit_code(outcomes) == code


class TestBuildConfig:
    """Tests de build_config."""

    def test_overrides(self):
        """Los argumentos reemplazan a settings."""
        args = parse_args(["--url", "http://aim.example.org/", "-u", "ctp", "-l", "all", "doc.xml"])

        config = build_config(args)

        assert config["url"] == "http://aim.example.org/"
        assert config["username"] == "ctp"
        assert config["logResponses"] == "all"
        assert "password" in config

    def test_keeps_settings_without_overrides(self):
        """Sin argumentos se usan los valores de settings."""
        with patch("scripts.export_files.settings") as mock_settings:
            mock_settings.aim_export.as_stage_config.return_value = {
                "url": "https://from-settings.example.org/",
                "username": "",
            }
            config = build_config(parse_args(["doc.xml"]))

        assert config["url"] == "https://from-settings.example.org/"


class TestMain:
    """Tests de main."""

    def test_exports_each_file(self, no_logging_setup, capsys):
        """Debe exportar cada archivo e imprimir el resultado."""
        service = MagicMock()
        service.export.side_effect = [Outcome.ACCEPTED, Outcome.RETRYABLE]

        with patch("scripts.export_files.create_export_service", return_value=service):
            code = main(["--url", "http://aim.example.org/", "a.xml", "b.xml"])

        assert code == 2
        assert [c.args[0] for c in service.export.call_args_list] == ["a.xml", "b.xml"]
        output = capsys.readouterr().out
        assert "a.xml: ACCEPTED" in output
        assert "b.xml: RETRYABLE" in output
        no_logging_setup.assert_called_once_with("aim_export")

    def test_invalid_configuration(self, no_logging_setup, capsys):
        """URL inválida debe terminar con código de configuración."""
        code = main(["--url", "ftp://aim.example.org/", "a.xml"])

        assert code == EXIT_CONFIGURATION_ERROR
        assert "ftp" in capsys.readouterr().err
