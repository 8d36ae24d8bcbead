"""
Exporter - Stage de exportación de documentos AIM.

Componentes:
- target: configuración inmutable del destino (URL, credenciales, logging)
- document: parseo, validación del elemento raíz y serialización
- http/: cliente HTTP para el AIM Data Service
- service: decisión de exportación (ACCEPTED / REJECTED / RETRYABLE)
"""

from exporter.errors import (
    ConfigurationError,
    ExportError,
    InvalidDocument,
    ResponseReadFailure,
    ServerRejected,
    TransportFailure,
)
from exporter.models import Outcome, ServiceResponse
from exporter.service import AimExportService, create_export_service
from exporter.target import ExportTarget, new_export_target

__all__ = [
    # Service
    "AimExportService",
    "create_export_service",
    "Outcome",
    "ServiceResponse",
    # Configuration
    "ExportTarget",
    "new_export_target",
    # Errors
    "ExportError",
    "ConfigurationError",
    "InvalidDocument",
    "ServerRejected",
    "TransportFailure",
    "ResponseReadFailure",
]
