import requests
from requests.adapters import HTTPAdapter


def get_configured_session(user_agent: str) -> requests.Session:
    """
    Return a requests.Session for the AIC API.

    Each batch is a single attempt, so the adapter is mounted with retries
    turned off. AIC asks API consumers to identify themselves with the
    AIC-User-Agent header.
    """
    session = requests.Session()
    adapter = HTTPAdapter(max_retries=0)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    session.headers.update(
        {
            "Content-Type": "application/json",
            "AIC-User-Agent": user_agent,
        }
    )
    return session
