"""
Production settings for BrandCatalogService.
"""

import os

from .base import *  # noqa: F403, F401
from .logging import get_logging_config

DEBUG = False

ALLOWED_HOSTS = os.environ.get("ALLOWED_HOSTS", "").split(",")

# Security settings
SECURE_SSL_REDIRECT = True
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
SECURE_BROWSER_XSS_FILTER = True
SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = "DENY"

# Secret key must come from the environment
SECRET_KEY = os.environ["SECRET_KEY"]

# Database password must come from the environment
DATABASES["default"]["PASSWORD"] = os.environ.get("DB_PASSWORD", "")  # noqa: F405

# Logging in production
LOGGING = get_logging_config(
    "production",
    log_file=os.environ.get("LOG_FILE", "/var/log/brand_catalog/app.log"),
)
