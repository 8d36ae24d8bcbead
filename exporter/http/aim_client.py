"""
AIM Data Service Client - Cliente HTTP para entregar documentos AIM.

Una transacción por llamada:
- POST {url} con Content-Type text/xml;charset=UTF-8
- Authorization Basic si el target tiene usuario
- Lee la respuesta (limitada a max_response_bytes) solo para el log

El cliente no decide el resultado; solo separa "no hubo respuesta"
(TransportFailure) de "hubo respuesta" (ServiceResponse).
"""

import logging
from typing import Dict, Optional

import httpx

from config.constants import RESPONSE_UNAVAILABLE, XML_CONTENT_TYPE
from exporter.errors import ResponseReadFailure, TransportFailure
from exporter.models import ServiceResponse
from exporter.target import ExportTarget

logger = logging.getLogger(__name__)

TRUNCATED_MARKER = "\n[response truncated]"


class AimDataServiceClient:
    """Cliente HTTP sync para el AIM Data Service."""

    def __init__(
        self,
        target: ExportTarget,
        transport: Optional[httpx.BaseTransport] = None
    ):
        """
        Args:
            target: Destino y credenciales ya resueltos
            transport: Transporte httpx alternativo (tests, proxies)
        """
        self.target = target
        self.timeout = httpx.Timeout(target.read_timeout, connect=target.connect_timeout)
        self._transport = transport

    def build_headers(self) -> Dict[str, str]:
        """Headers de la petición, con Authorization si hay credenciales."""
        headers = {"Content-Type": XML_CONTENT_TYPE}
        if self.target.authenticate:
            headers["Authorization"] = self.target.auth_header
        return headers

    def post_document(self, text: str) -> ServiceResponse:
        """
        Enviar el texto XML al AIM Data Service.

        La conexión y el stream de respuesta se cierran antes de retornar,
        también cuando hay excepciones.

        Args:
            text: XML serializado del elemento raíz

        Returns:
            ServiceResponse con status code y texto de la respuesta

        Raises:
            TransportFailure si no se obtuvo un status code
        """
        body = text.encode("utf-8")
        status_code: Optional[int] = None
        response_text = ""

        try:
            with httpx.Client(
                timeout=self.timeout,
                transport=self._transport,
                follow_redirects=False
            ) as client:
                with client.stream(
                    "POST",
                    self.target.url,
                    content=body,
                    headers=self.build_headers()
                ) as response:
                    status_code = response.status_code
                    response_text = self.read_response_text(response)

        except (httpx.HTTPError, OSError) as e:
            if status_code is None:
                raise TransportFailure(_describe(e)) from e
            # Fallo al cerrar la conexión: la respuesta ya se obtuvo
            logger.debug(f"{self.target.name}: error closing connection: {_describe(e)}")

        return ServiceResponse(status_code=status_code, text=response_text)

    def read_response_text(self, response: httpx.Response) -> str:
        """
        Leer la respuesta para el log. Nunca lanza excepciones.

        Returns:
            Texto de la respuesta, o RESPONSE_UNAVAILABLE si no se pudo leer
        """
        try:
            return self._read_limited(response)
        except ResponseReadFailure as e:
            logger.debug(f"{self.target.name}: {RESPONSE_UNAVAILABLE}: {e.message}", exc_info=e)
            return RESPONSE_UNAVAILABLE

    def _read_limited(self, response: httpx.Response) -> str:
        limit = self.target.max_response_bytes
        chunks = []
        size = 0

        try:
            for chunk in response.iter_bytes():
                chunks.append(chunk)
                size += len(chunk)
                if size > limit:
                    break
            data = b"".join(chunks)
            text = data[:limit].decode(response.encoding or "utf-8", errors="replace")
        except Exception as e:
            raise ResponseReadFailure(_describe(e)) from e

        if size > limit:
            return text + TRUNCATED_MARKER
        return text


def _describe(exception: Exception) -> str:
    """Mensaje legible aunque la excepción venga sin texto."""
    message = str(exception)
    return f"{type(exception).__name__}: {message}" if message else type(exception).__name__
