import os

os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("DJANGO_SECRET_KEY", "grambrandt-test-secret-key")

from djangoconfig.settings import *  # noqa: E402,F401,F403

ALLOWED_HOSTS = ["testserver", "localhost"]
RATELIMIT_ENABLE = False
