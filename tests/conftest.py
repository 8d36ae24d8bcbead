from typing import List

import httpx
import pytest

from exporter.target import new_export_target

AIM_NAMESPACE = "gme://caCORE.caCORE/3.2/edu.northwestern.radiology.AIM"

AIM_XML = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    "<!-- staged by the pipeline -->\n"
    f'<ImageAnnotation xmlns="{AIM_NAMESPACE}" cagridId="0" name="Lesion 1">'
    "<user><User cagridId=\"0\" name=\"José Pérez\" loginName=\"jperez\"/></user>"
    "</ImageAnnotation>\n"
).encode("utf-8")

AIM_ROOT_TEXT = (
    f'<ImageAnnotation xmlns="{AIM_NAMESPACE}" cagridId="0" name="Lesion 1">'
    "<user><User cagridId=\"0\" name=\"José Pérez\" loginName=\"jperez\"/></user>"
    "</ImageAnnotation>"
)

OTHER_XML = b'<?xml version="1.0"?><Study uid="1.2.3"><Series/></Study>'

SERVICE_URL = "https://aim.example.org/AIMDataService/"


class FakeAimDataService:
    """AIM Data Service falso: registra peticiones y responde lo configurado."""

    def __init__(self, status_code: int = 200, text: str = "", error: Exception = None):
        self.status_code = status_code
        self.text = text
        self.error = error
        self.requests: List[httpx.Request] = []

    def handle(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, text=self.text)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


class FailingStream(httpx.SyncByteStream):
    """Cuerpo de respuesta que falla al leerse."""

    def __iter__(self):
        raise httpx.ReadError("connection reset while reading body")


@pytest.fixture
def aim_xml():
    """Documento AIM válido (bytes)."""
    return AIM_XML


@pytest.fixture
def aim_document(tmp_path):
    """Documento AIM válido en disco."""
    path = tmp_path / "annotation.xml"
    path.write_bytes(AIM_XML)
    return path


@pytest.fixture
def make_target():
    """Factory de ExportTarget con configuración mínima."""
    def _make(**overrides):
        config = {"url": SERVICE_URL}
        config.update(overrides)
        return new_export_target(config)
    return _make


@pytest.fixture
def aim_service():
    """AIM Data Service falso que responde 200."""
    return FakeAimDataService(status_code=200, text="<Response>stored</Response>")
