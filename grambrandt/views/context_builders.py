from dataclasses import dataclass
from typing import Any, Optional

from django.http import HttpRequest

from grambrandt.src.constants.artwork_types import ARTWORK_TYPE_IDS, ARTWORK_TYPES
from grambrandt.src.global_services import get_feed_controller
from grambrandt.src.models import FilterConfig
from grambrandt.src.services.feed_controller import FeedController, FeedUpdate
from grambrandt.src.utils.post_formatting import format_posts, get_detail_links


def get_session_key(request: HttpRequest) -> str:
    """Return the browser session key, creating a session if there is none."""
    if not request.session.session_key:
        request.session.create()
    return request.session.session_key


def get_controller_for_request(request: HttpRequest) -> FeedController:
    return get_feed_controller(get_session_key(request))


def retrieve_year(value: Optional[str], current: Optional[int]) -> Optional[int]:
    """
    Parse a year from the config form. Blank means no bound; anything that
    is not an integer keeps the current value.
    """
    if value is None:
        return current
    value = value.strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return current


def retrieve_artwork_type_ids(request: HttpRequest) -> set[int]:
    selected = set()
    for value in request.POST.getlist("artwork_types"):
        try:
            artwork_type_id = int(value)
        except ValueError:
            continue
        if artwork_type_id in ARTWORK_TYPE_IDS:
            selected.add(artwork_type_id)
    return selected


@dataclass
class ConfigParams:
    """Filter values posted from the config modal."""

    request: HttpRequest

    def to_changes(self, current: FilterConfig) -> dict[str, Any]:
        post = self.request.POST
        return {
            "artwork_type_ids": retrieve_artwork_type_ids(self.request),
            "show_obscure": post.get("show_obscure") == "on",
            "require_short_description": post.get("require_short_description") == "on",
            "min_year": retrieve_year(post.get("min_year"), current.min_year),
            "max_year": retrieve_year(post.get("max_year"), current.max_year),
        }


def build_home_context(controller: FeedController) -> dict[str, Any]:
    return {
        "is_initial_load": controller.needs_initial_load,
    }


def build_posts_context(
    controller: FeedController, update: Optional[FeedUpdate]
) -> dict[str, Any]:
    """
    Context for one batch of posts. update is None when the request came in
    while another batch was still loading; the fragment then retries shortly.
    """
    if update is None:
        return {
            "posts": [],
            "error_message": None,
            "is_busy": True,
            "is_initial_load": controller.needs_initial_load,
            "show_sentinel": False,
        }

    error_message = None
    if update.error:
        error_message = "Couldn't load more art right now."

    return {
        "posts": format_posts(update.records, controller.rng),
        "error_message": error_message,
        "is_busy": False,
        "is_initial_load": update.is_initial_load,
        "show_sentinel": update.is_current and controller.signal.is_armed,
    }


def build_config_context(controller: FeedController) -> dict[str, Any]:
    filter_config = controller.filter_config
    artwork_types = [
        {
            **artwork_type,
            "checked": artwork_type["id"] in filter_config.artwork_type_ids,
        }
        for artwork_type in ARTWORK_TYPES
    ]
    return {
        "artwork_types": artwork_types,
        "show_obscure": filter_config.show_obscure,
        "require_short_description": filter_config.require_short_description,
        "min_year": filter_config.min_year,
        "max_year": filter_config.max_year,
    }


def build_details_context(title: str, artist: str) -> dict[str, Any]:
    return {
        "title": title,
        "artist": artist,
        **get_detail_links(title, artist),
    }
