from enum import Enum


class LogResponses(str, Enum):
    """Cuando registrar la respuesta del AIM Data Service"""

    NONE = "none"      # Nunca
    ALL = "all"        # Todas las respuestas
    FAILED = "failed"  # Solo respuestas distintas de 200

    @classmethod
    def parse(cls, value: str) -> "LogResponses":
        """Valores desconocidos equivalen a NONE"""
        value = (value or "").strip().lower()
        if value == cls.ALL.value:
            return cls.ALL
        if value == cls.FAILED.value:
            return cls.FAILED
        return cls.NONE

    def should_log(self, ok: bool) -> bool:
        return self is LogResponses.ALL or (self is LogResponses.FAILED and not ok)


class LogLevel(str, Enum):
    """Niveles de logging"""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# AIM Data Service

EXPECTED_ROOT_TAG = "ImageAnnotation"
XML_CONTENT_TYPE = "text/xml;charset=UTF-8"
ALLOWED_SCHEMES = ("http", "https")
RESPONSE_UNAVAILABLE = "Unable to obtain response text"
DEFAULT_STAGE_NAME = "AimExportService"

# Limites por defecto del transporte
DEFAULT_CONNECT_TIMEOUT = 10.0
DEFAULT_READ_TIMEOUT = 30.0
DEFAULT_MAX_RESPONSE_BYTES = 64 * 1024
