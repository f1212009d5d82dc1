import logging

from django.http import HttpRequest, HttpResponse
from django.shortcuts import redirect, render
from django.views.decorators.http import require_GET

from grambrandt.views.context_builders import (
    ConfigParams,
    build_config_context,
    build_details_context,
    build_home_context,
    build_posts_context,
    get_controller_for_request,
)

logger = logging.getLogger(__name__)


@require_GET
def home_view(request: HttpRequest) -> HttpResponse:
    """
    Render the page shell. The posts themselves are loaded by HTMX from
    `get_posts_view` as soon as the page is shown.
    """
    controller = get_controller_for_request(request)
    context = build_home_context(controller)
    return render(request, "home.html", context)


@require_GET
def get_posts_view(request: HttpRequest) -> HttpResponse:
    """
    HTMX endpoint for the next batch of posts.

    The first call for a session (or the first after a filter change) is the
    initial load; later calls come from the infinite scroll sentinel.
    """
    controller = get_controller_for_request(request)
    if controller.needs_initial_load:
        update = controller.start()
    else:
        update = controller.load_more()
    context = build_posts_context(controller, update)
    return render(request, "partials/posts.html", context)


def config_view(request: HttpRequest) -> HttpResponse:
    """
    GET renders the config modal. POST applies it; if any filter changed the
    feed starts over.
    """
    controller = get_controller_for_request(request)
    if request.method == "POST":
        params = ConfigParams(request=request)
        changed = controller.update_filters(
            **params.to_changes(controller.filter_config)
        )
        if changed:
            logger.info("Feed filters updated from config modal")
        return redirect("home")

    context = build_config_context(controller)
    return render(request, "partials/config_modal.html", context)


@require_GET
def details_view(request: HttpRequest) -> HttpResponse:
    """HTMX view for the '...' modal of a post."""
    title = request.GET.get("title", "").strip()
    artist = request.GET.get("artist", "").strip()
    context = build_details_context(title, artist)
    return render(request, "partials/details_modal.html", context)
