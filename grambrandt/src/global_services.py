"""
Process-wide services.

There is one AIC search client (one HTTP connection pool) for the whole
process, and one FeedController per browser session. Controllers live only in
memory: restarting the server starts every feed from scratch.

From anywhere in the code, get the services from this module.
"""

import logging
import threading
from collections import OrderedDict
from typing import Optional

from grambrandt.src.services.aic_search_client import AICSearchClient
from grambrandt.src.services.feed_controller import FeedController

logger = logging.getLogger(__name__)

# Least recently used feeds are dropped beyond this many sessions
MAX_FEED_SESSIONS = 1000

search_client_instance: Optional[AICSearchClient] = None
_feed_controllers: "OrderedDict[str, FeedController]" = OrderedDict()
_lock = threading.Lock()


def get_search_client() -> AICSearchClient:
    global search_client_instance
    if search_client_instance is None:
        from grambrandt.src.config import config

        search_client_instance = AICSearchClient(
            base_url=config.aic_search_url,
            user_agent=config.aic_user_agent,
            timeout=config.aic_request_timeout,
        )
    return search_client_instance


def get_feed_controller(session_key: str) -> FeedController:
    """Return the feed for a browser session, creating it on first use."""
    with _lock:
        controller = _feed_controllers.get(session_key)
        if controller is not None:
            _feed_controllers.move_to_end(session_key)
            return controller

        controller = FeedController(search_client=get_search_client())
        _feed_controllers[session_key] = controller
        while len(_feed_controllers) > MAX_FEED_SESSIONS:
            evicted_key, _ = _feed_controllers.popitem(last=False)
            logger.debug(f"Evicted feed for session {evicted_key[:8]}...")
        return controller


def clear_feed_controllers() -> int:
    """Drop all feeds. Returns how many were dropped."""
    with _lock:
        count = len(_feed_controllers)
        _feed_controllers.clear()
    return count
