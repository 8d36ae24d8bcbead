from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Any, Dict
from functools import lru_cache

from config.constants import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_MAX_RESPONSE_BYTES,
    DEFAULT_READ_TIMEOUT,
    DEFAULT_STAGE_NAME,
    LogLevel,
)


class GeneralSettings(BaseSettings):
    """Configuracion general"""

    LOG_LEVEL: str = Field(
        default="INFO",
        description="Nivel de logging: DEBUG, INFO, WARNING, ERROR, CRITICAL"
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Normalizar a mayusculas; niveles desconocidos caen a INFO"""
        v = v.strip().upper()
        if v not in {level.value for level in LogLevel}:
            return LogLevel.INFO.value
        return v

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


class AimExportSettings(BaseSettings):
    """Configuracion del stage de exportacion al AIM Data Service"""

    AIM_EXPORT_NAME: str = Field(
        default=DEFAULT_STAGE_NAME,
        description="Nombre del stage (prefijo en los logs)"
    )
    AIM_EXPORT_URL: str = Field(
        default="",
        description="URL destino del AIM Data Service (http o https)"
    )
    AIM_EXPORT_USERNAME: str = Field(
        default="",
        description="Usuario para Basic auth (vacio = sin autenticacion)"
    )
    AIM_EXPORT_PASSWORD: str = Field(
        default="",
        description="Contraseña para Basic auth"
    )
    AIM_EXPORT_LOG_RESPONSES: str = Field(
        default="none",
        description="Registrar respuestas: all, failed, none"
    )
    AIM_EXPORT_CONNECT_TIMEOUT: float = Field(
        default=DEFAULT_CONNECT_TIMEOUT,
        description="Timeout en segundos para establecer la conexion"
    )
    AIM_EXPORT_READ_TIMEOUT: float = Field(
        default=DEFAULT_READ_TIMEOUT,
        description="Timeout en segundos para escribir la peticion y leer la respuesta"
    )
    AIM_EXPORT_MAX_RESPONSE_BYTES: int = Field(
        default=DEFAULT_MAX_RESPONSE_BYTES,
        description="Maximo de bytes de la respuesta leidos para el log"
    )

    @field_validator("AIM_EXPORT_URL", "AIM_EXPORT_USERNAME", "AIM_EXPORT_PASSWORD")
    @classmethod
    def strip_value(cls, v):
        """Remover espacios alrededor"""
        return v.strip()

    def as_stage_config(self) -> Dict[str, Any]:
        """
        Convertir a la configuracion que espera new_export_target.

        Returns:
            Diccionario con las claves url, username, password, logResponses, ...
        """
        return {
            "name": self.AIM_EXPORT_NAME,
            "url": self.AIM_EXPORT_URL,
            "username": self.AIM_EXPORT_USERNAME,
            "password": self.AIM_EXPORT_PASSWORD,
            "logResponses": self.AIM_EXPORT_LOG_RESPONSES,
            "connectTimeout": self.AIM_EXPORT_CONNECT_TIMEOUT,
            "readTimeout": self.AIM_EXPORT_READ_TIMEOUT,
            "maxResponseBytes": self.AIM_EXPORT_MAX_RESPONSE_BYTES,
        }

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


class LoggingSettings(BaseSettings):
    """Configuracion de logging"""

    LOG_DIR: str = Field(
        default="logs",
        description="Directorio de archivos de log"
    )
    LOG_RETENTION_DAYS: int = Field(
        default=7,
        description="Numero de archivos rotados a mantener"
    )

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


class Settings(BaseSettings):
    """
    Clase principal que agrupa todas las configuraciones
    Uso: from config.settings import settings
         settings.aim_export.AIM_EXPORT_URL, settings.general.LOG_LEVEL, etc
    """

    # Subconfigurations
    general: GeneralSettings = GeneralSettings()
    aim_export: AimExportSettings = AimExportSettings()
    logging: LoggingSettings = LoggingSettings()

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


# Singleton instance
@lru_cache()
def get_settings() -> Settings:
    """
    Obtener instancia singleton de Settings
    Uso: from config.settings import get_settings
         settings = get_settings()
    """
    return Settings()


# Instancia global (para imports directos)
settings = get_settings()
