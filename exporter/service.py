"""
AIM Export Service - exporta un documento al AIM Data Service.

Cada llamada a export() es un intento independiente:
1. Parsear el documento y validar el elemento raíz (ImageAnnotation)
2. Serializar el elemento raíz
3. POST al AIM Data Service
4. Clasificar la respuesta

Resultado:
- ACCEPTED  → el servidor respondió 200
- REJECTED  → documento inválido o respuesta distinta de 200 (no reintentar)
- RETRYABLE → no se completó la transacción (reintentar más tarde)

export() nunca lanza excepciones; los reintentos son responsabilidad
del llamador.

Uso:
    from exporter import create_export_service, Outcome

    service = create_export_service({"url": "https://aim.example.org/AIMDataService/"})
    if service.export(path) is Outcome.RETRYABLE:
        queue.requeue(path)
"""

import logging
from typing import Any, Mapping, Optional

import httpx

from config.settings import settings
from exporter.document import DocumentSource, load_export_payload
from exporter.error_classifier import ErrorClassifier
from exporter.errors import InvalidDocument, ServerRejected
from exporter.http.aim_client import AimDataServiceClient
from exporter.models import Outcome
from exporter.target import ExportTarget, new_export_target

logger = logging.getLogger(__name__)


class AimExportService:
    """Stage de exportación de documentos AIM a un AIM Data Service."""

    def __init__(
        self,
        target: ExportTarget,
        transport: Optional[httpx.BaseTransport] = None
    ):
        """
        Args:
            target: Configuración inmutable del destino
            transport: Transporte httpx alternativo (tests, proxies)
        """
        self.target = target
        self.client = AimDataServiceClient(target, transport=transport)
        self.error_classifier = ErrorClassifier()

        logger.info(
            f"{self.name}: exporting to {target.display_url} "
            f"(authenticate={target.authenticate}, logResponses={target.log_responses.value})"
        )

    @property
    def name(self) -> str:
        return self.target.name

    def export(self, document: DocumentSource) -> Outcome:
        """
        Exportar un documento.

        Args:
            document: Ruta al archivo o bytes del documento

        Returns:
            Outcome.ACCEPTED, Outcome.REJECTED o Outcome.RETRYABLE
        """
        # Parsear y validar el documento
        try:
            text = load_export_payload(document)
        except InvalidDocument as e:
            code = self.error_classifier.get_error_code(e)
            if e.root_tag is not None:
                logger.warning(f"{self.name}: [{code}] XmlObject with illegal root ({e.root_tag}) not transmitted.")
            else:
                logger.warning(f"{self.name}: [{code}] Invalid document not transmitted: {e.message}")
            return self.error_classifier.classify(e)
        except Exception as e:
            code = self.error_classifier.get_error_code(e)
            logger.warning(f"{self.name}: [{code}] Invalid document not transmitted: {e}")
            logger.debug("Stack trace:", exc_info=True)
            return Outcome.REJECTED

        # Enviar; cualquier fallo aquí es de red → reintentar
        try:
            response = self.client.post_document(text)
        except Exception as e:
            code = self.error_classifier.get_error_code(e)
            logger.warning(f"{self.name}: [{code}] export failed: {e}")
            logger.debug("Stack trace:", exc_info=True)
            return self.error_classifier.classify(e)

        if self.target.log_responses.should_log(response.ok):
            logger.info(
                f"{self.name}: export response code: {response.status_code}"
                + (f"\n{response.text}" if response.text else "")
            )

        if response.ok:
            return Outcome.ACCEPTED

        rejection = ServerRejected(response.status_code, response.text)
        code = self.error_classifier.get_error_code(rejection)
        logger.warning(f"{self.name}: [{code}] {rejection.message}")
        return self.error_classifier.classify(rejection)

    # Nombre alternativo: un intento de exportación
    attempt = export


def create_export_service(
    config: Optional[Mapping[str, Any]] = None,
    transport: Optional[httpx.BaseTransport] = None
) -> AimExportService:
    """
    Crear el stage a partir de una configuración o de settings.

    Args:
        config: Claves url, username, password, logResponses, ... (None = settings)
        transport: Transporte httpx alternativo

    Returns:
        AimExportService listo para usar

    Raises:
        ConfigurationError si la configuración no es válida
    """
    if config is None:
        target = ExportTarget.from_settings(settings)
    else:
        target = new_export_target(config)
    return AimExportService(target, transport=transport)
