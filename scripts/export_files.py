"""
Script para exportar documentos AIM una sola vez.

Ejecuta un intento por archivo, sin cola ni reintentos, e imprime el
resultado de cada uno. Útil para probar la configuración contra un
AIM Data Service.

Uso:
    python -m scripts.export_files annotation1.xml annotation2.xml
    python -m scripts.export_files --url https://aim.example.org/AIMDataService/ -l all doc.xml

Códigos de salida:
    0 → todos aceptados
    1 → algún documento rechazado
    2 → algún documento para reintentar (y ninguno rechazado)
    3 → configuración inválida
"""

import argparse
import sys
from typing import List, Optional

from config.logging_config import setup_logging
from config.settings import settings
from exporter import ConfigurationError, Outcome, create_export_service

EXIT_CODES = {
    Outcome.ACCEPTED: 0,
    Outcome.REJECTED: 1,
    Outcome.RETRYABLE: 2,
}
EXIT_CONFIGURATION_ERROR = 3


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Exportar documentos AIM al AIM Data Service",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Ejemplos:
  python -m scripts.export_files doc.xml
  python -m scripts.export_files --url http://localhost:8080/aim -u ctp -p secret doc.xml
        """
    )
    parser.add_argument(
        "files",
        nargs="+",
        help="Archivos XML a exportar"
    )
    parser.add_argument(
        "--url",
        type=str,
        default=None,
        help="URL del AIM Data Service (default: AIM_EXPORT_URL)"
    )
    parser.add_argument(
        "--username", "-u",
        type=str,
        default=None,
        help="Usuario para Basic auth (default: AIM_EXPORT_USERNAME)"
    )
    parser.add_argument(
        "--password", "-p",
        type=str,
        default=None,
        help="Contraseña para Basic auth (default: AIM_EXPORT_PASSWORD)"
    )
    parser.add_argument(
        "--log-responses", "-l",
        type=str,
        default=None,
        help="Registrar respuestas: all, failed, none (default: AIM_EXPORT_LOG_RESPONSES)"
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> dict:
    """Configuración de settings con los overrides de la línea de comandos."""
    config = settings.aim_export.as_stage_config()
    overrides = {
        "url": args.url,
        "username": args.username,
        "password": args.password,
        "logResponses": args.log_responses,
    }
    config.update({key: value for key, value in overrides.items() if value is not None})
    return config


def exit_code(outcomes: List[Outcome]) -> int:
    """El peor resultado define el código: REJECTED > RETRYABLE > ACCEPTED."""
    if Outcome.REJECTED in outcomes:
        return EXIT_CODES[Outcome.REJECTED]
    if Outcome.RETRYABLE in outcomes:
        return EXIT_CODES[Outcome.RETRYABLE]
    return EXIT_CODES[Outcome.ACCEPTED]


def main(argv: Optional[List[str]] = None) -> int:
    """Exportar los archivos indicados y retornar el código de salida."""
    args = parse_args(argv)
    setup_logging("aim_export")

    try:
        service = create_export_service(build_config(args))
    except ConfigurationError as e:
        print(f"Configuración inválida: {e.message}", file=sys.stderr)
        return EXIT_CONFIGURATION_ERROR

    outcomes = []
    for path in args.files:
        outcome = service.export(path)
        outcomes.append(outcome)
        print(f"{path}: {outcome.value}")

    return exit_code(outcomes)


if __name__ == "__main__":
    sys.exit(main())
