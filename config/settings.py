from decimal import Decimal
from pathlib import Path

from decouple import Csv, config

# -------------------------------
# Directorios base
# -------------------------------
BASE_DIR = Path(__file__).resolve().parent.parent

# -------------------------------
# Seguridad y debug
# -------------------------------
SECRET_KEY = config('SECRET_KEY', default='dev-insecure-socios-key')
DEBUG = config('DEBUG', default=False, cast=bool)
ALLOWED_HOSTS = config('ALLOWED_HOSTS', default='localhost,127.0.0.1', cast=Csv())

SESSION_COOKIE_SECURE   = config('SESSION_COOKIE_SECURE', default=False, cast=bool)
SESSION_COOKIE_HTTPONLY = config('SESSION_COOKIE_HTTPONLY', default=True, cast=bool)
CSRF_COOKIE_SECURE      = config('CSRF_COOKIE_SECURE', default=False, cast=bool)
CSRF_TRUSTED_ORIGINS    = config('CSRF_TRUSTED_ORIGINS', default='http://localhost:8000', cast=Csv())

# -------------------------------
# Cuotas (dues)
# -------------------------------
# Valor usado cuando el socio no tiene monto de cuota propio.
DUES_DEFAULT_AMOUNT = config('DUES_DEFAULT_AMOUNT', default='6500', cast=Decimal)

# Planilla de pagos masivos
DUES_IMPORT_ID_COLUMNS           = config('DUES_IMPORT_ID_COLUMNS', default='rut,fiscal_id,fiscalid', cast=Csv())
DUES_IMPORT_NEXT_PAYMENT_COLUMNS = config('DUES_IMPORT_NEXT_PAYMENT_COLUMNS', default='proximo_pago,next_payment', cast=Csv())
DUES_IMPORT_PAID_TOKENS          = config('DUES_IMPORT_PAID_TOKENS', default='yes', cast=Csv())
DUES_IMPORT_MAX_LOOKAHEAD_MONTHS = config('DUES_IMPORT_MAX_LOOKAHEAD_MONTHS', default=12, cast=int)

# -------------------------------
# Apps, Middleware, URLs
# -------------------------------
INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'socios_api.apps.SociosApiConfig',
    'plugins.django_interface.apps.DjangoInterfaceConfig',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
]

ROOT_URLCONF = 'socios_api.urls'
WSGI_APPLICATION = 'socios_api.wsgi.application'

# -------------------------------
# Templates
# -------------------------------
TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

# -------------------------------
# Base de datos
# -------------------------------
DB_ENGINE = config('DB_ENGINE', default='django.db.backends.sqlite3')

if DB_ENGINE.endswith('sqlite3'):
    DATABASES = {
        'default': {
            'ENGINE': DB_ENGINE,
            'NAME':   config('DB_NAME', default=str(BASE_DIR / 'db.sqlite3')),
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE':   DB_ENGINE,
            'NAME':     config('DB_NAME'),
            'USER':     config('DB_USER'),
            'PASSWORD': config('DB_PASS'),
            'HOST':     config('DB_HOST'),
            'PORT':     config('DB_PORT'),
        }
    }

# -------------------------------
# Internacionalización
# -------------------------------
LANGUAGE_CODE = 'es-cl'
TIME_ZONE     = 'America/Santiago'
USE_I18N      = True
USE_TZ        = True

# -------------------------------
# Archivos estáticos
# -------------------------------
STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'
