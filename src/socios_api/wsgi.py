import os

from django.core.wsgi import get_wsgi_application

from config.structlog_config import configure_logging

configure_logging()

# 1) Ajuste por defecto de settings
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

# 2) Crea la aplicación WSGI (el contenedor DI se arma en SociosApiConfig.ready)
application = get_wsgi_application()
