#!/usr/bin/env python
import os
import sys
from pathlib import Path

from config.structlog_config import configure_logging

configure_logging()
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

# Los paquetes de la aplicación viven en src/
sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))


def main():
    """Punto de entrada de los comandos de administración de Django."""
    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "No se pudo importar Django. Verifique que esté instalado y en el PYTHONPATH."
        ) from exc

    execute_from_command_line(sys.argv)

if __name__ == '__main__':
    main()
