import os
from pathlib import Path
import dotenv
from pydantic import BaseModel

from grambrandt.src.constants.search import DEFAULT_AIC_SEARCH_URL, DEFAULT_AIC_USER_AGENT


class Config(BaseModel):
    django_secret_key: str
    allowed_hosts: list[str] = []
    debug: bool = False
    log_level: str = "INFO"

    aic_search_url: str = DEFAULT_AIC_SEARCH_URL
    # Sent as the AIC-User-Agent header so the museum can identify the site
    aic_user_agent: str = DEFAULT_AIC_USER_AGENT
    # None means no client-side timeout (the call resolves or fails on its own)
    aic_request_timeout: float | None = None


def create_config():
    env_files = [".env.dev", ".env.prod"]
    for env_file in env_files:
        if Path(env_file).exists():
            dotenv.load_dotenv(env_file)
            break

    debug = os.getenv("DEBUG", "False").lower() == "true"
    django_secret_key = os.getenv("DJANGO_SECRET_KEY")
    allowed_hosts = [
        host.strip() for host in os.getenv("ALLOWED_HOSTS", "").split(",") if host.strip()
    ]
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    aic_search_url = os.getenv("AIC_SEARCH_URL", DEFAULT_AIC_SEARCH_URL)
    aic_user_agent = os.getenv("AIC_USER_AGENT", DEFAULT_AIC_USER_AGENT)
    aic_request_timeout = os.getenv("AIC_REQUEST_TIMEOUT")

    if not django_secret_key:
        if not debug:
            raise ValueError("DJANGO_SECRET_KEY is not set")
        django_secret_key = "django-insecure-grambrandt-dev-key"
    if not debug and not allowed_hosts:
        raise ValueError("ALLOWED_HOSTS is not set")
    if not aic_search_url:
        raise ValueError("AIC_SEARCH_URL is not set")

    return Config(
        django_secret_key=django_secret_key,
        allowed_hosts=allowed_hosts,
        debug=debug,
        log_level=log_level,
        aic_search_url=aic_search_url,
        aic_user_agent=aic_user_agent,
        aic_request_timeout=float(aic_request_timeout) if aic_request_timeout else None,
    )


config = create_config()

if __name__ == "__main__":
    config = create_config()
    print(config)
