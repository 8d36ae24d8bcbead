"""
Configuración centralizada de logging con rotación diaria.

Cada servicio escribe a su propio archivo en LOG_DIR:
- logs/aim_export.log → stage de exportación al AIM Data Service

Los archivos rotan a medianoche y se eliminan después de N días.
"""

import logging
import sys
from pathlib import Path
from logging.handlers import TimedRotatingFileHandler
from typing import Optional

from config.settings import settings

# Configuración
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logs_directory() -> Path:
    """Retorna el directorio de logs (relativo al directorio de trabajo si no es absoluto)."""
    return Path(settings.logging.LOG_DIR)


def get_log_file_path(service_name: str = "aim_export") -> Path:
    """Retorna la ruta al archivo de log de un servicio."""
    return get_logs_directory() / f"{service_name}.log"


def setup_logging(
    service_name: str = "aim_export",
    level: Optional[str] = None
) -> logging.Logger:
    """
    Configura logging con rotación diaria para un servicio específico.

    Args:
        service_name: Nombre del servicio. Define el archivo de log:
                     - "aim_export" → logs/aim_export.log
        level: Nivel explícito; por defecto settings.general.LOG_LEVEL

    Returns:
        Logger raíz configurado
    """
    log_level = getattr(logging, level or settings.general.LOG_LEVEL, logging.INFO)

    # Obtener logger raíz
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Limpiar handlers existentes (evita duplicados si se llama dos veces)
    root_logger.handlers.clear()

    # Formatter común
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    # Handler 1: Consola (stdout)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Handler 2: Archivo con rotación diaria
    log_file = get_log_file_path(service_name)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = TimedRotatingFileHandler(
        filename=log_file,
        when="midnight",
        interval=1,
        backupCount=settings.logging.LOG_RETENTION_DAYS,
        encoding="utf-8",
        utc=False
    )
    file_handler.setLevel(log_level)
    file_handler.setFormatter(formatter)

    # Sufijo para archivos rotados: aim_export.log.2026-01-23
    file_handler.suffix = "%Y-%m-%d"

    root_logger.addHandler(file_handler)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging iniciado [{service_name}] → {log_file}")

    return root_logger
