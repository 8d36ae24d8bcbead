"""
Subpaquete HTTP - Cliente para el AIM Data Service.

Uso:
    from exporter.http import AimDataServiceClient

    client = AimDataServiceClient(target)
    response = client.post_document(xml_text)
"""

from exporter.http.aim_client import AimDataServiceClient

__all__ = [
    "AimDataServiceClient",
]
