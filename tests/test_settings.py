"""
Tests unitarios para config.settings.

Valida:
- Lectura de variables de entorno
- Normalización de valores
- Conversión a configuración del stage

python -m pytest tests/test_settings.py
"""

from config.constants import DEFAULT_MAX_RESPONSE_BYTES, DEFAULT_STAGE_NAME
from config.settings import AimExportSettings, GeneralSettings, LoggingSettings


class TestAimExportSettings:
    """Tests de AimExportSettings."""

    def test_defaults(self, monkeypatch):
        """Sin variables de entorno debe usar defaults."""
        for name in AimExportSettings.model_fields:
            monkeypatch.delenv(name, raising=False)

        aim_settings = AimExportSettings(_env_file=None)

        assert aim_settings.AIM_EXPORT_NAME == DEFAULT_STAGE_NAME
        assert aim_settings.AIM_EXPORT_URL == ""
        assert aim_settings.AIM_EXPORT_LOG_RESPONSES == "none"
        assert aim_settings.AIM_EXPORT_MAX_RESPONSE_BYTES == DEFAULT_MAX_RESPONSE_BYTES

    def test_reads_environment(self, monkeypatch):
        """Debe leer y limpiar variables de entorno."""
        monkeypatch.setenv("AIM_EXPORT_URL", "  https://aim.example.org/AIMDataService/ ")
        monkeypatch.setenv("AIM_EXPORT_USERNAME", " ctp ")
        monkeypatch.setenv("AIM_EXPORT_PASSWORD", "secret")
        monkeypatch.setenv("AIM_EXPORT_LOG_RESPONSES", "failed")
        monkeypatch.setenv("AIM_EXPORT_READ_TIMEOUT", "12.5")

        aim_settings = AimExportSettings(_env_file=None)

        assert aim_settings.AIM_EXPORT_URL == "https://aim.example.org/AIMDataService/"
        assert aim_settings.AIM_EXPORT_USERNAME == "ctp"
        assert aim_settings.AIM_EXPORT_READ_TIMEOUT == 12.5

    def test_as_stage_config(self):
        """Debe producir las claves que espera new_export_target."""
        aim_settings = AimExportSettings(
            _env_file=None,
            AIM_EXPORT_URL="http://aim.example.org/",
            AIM_EXPORT_LOG_RESPONSES="all",
        )

        config = aim_settings.as_stage_config()

        assert config["url"] == "http://aim.example.org/"
        assert config["logResponses"] == "all"
        assert set(config) == {
            "name", "url", "username", "password", "logResponses",
            "connectTimeout", "readTimeout", "maxResponseBytes",
        }


class TestGeneralSettings:
    """Tests de GeneralSettings."""

    def test_log_level_normalized(self, monkeypatch):
        """Debe pasar a mayúsculas."""
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert GeneralSettings(_env_file=None).LOG_LEVEL == "DEBUG"

    def test_unknown_log_level(self, monkeypatch):
        """Niveles desconocidos caen a INFO."""
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        assert GeneralSettings(_env_file=None).LOG_LEVEL == "INFO"


class TestLoggingSettings:
    """Tests de LoggingSettings."""

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("LOG_DIR", "/var/log/aim")
        monkeypatch.setenv("LOG_RETENTION_DAYS", "14")

        logging_settings = LoggingSettings(_env_file=None)

        assert logging_settings.LOG_DIR == "/var/log/aim"
        assert logging_settings.LOG_RETENTION_DAYS == 14
