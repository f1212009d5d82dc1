from django.http import HttpRequest, JsonResponse
from django_ratelimit.decorators import ratelimit

from grambrandt.src.constants.artwork_types import ARTWORK_TYPES
from grambrandt.views.context_builders import get_controller_for_request


def get_client_ip(group, request: HttpRequest) -> str:
    """Rate limit key: the first address in X-Forwarded-For, else REMOTE_ADDR."""
    forwarded_for = request.META.get("HTTP_X_FORWARDED_FOR")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR", "")


def artwork_types_view(request):
    return JsonResponse({
        "artwork_types": [
            {"id": artwork_type["id"], "slug": artwork_type["slug"]}
            for artwork_type in ARTWORK_TYPES
        ],
    })


def config_view(request):
    controller = get_controller_for_request(request)
    return JsonResponse(controller.filter_config.to_dict())


@ratelimit(key=get_client_ip, rate="30/m", method="GET", block=False)
@ratelimit(key=get_client_ip, rate="600/h", method="GET", block=False)
def feed_view(request):
    """Next batch of the session's feed as JSON (the same batches the page gets)."""
    if getattr(request, "limited", False):
        return JsonResponse(
            {"error": "Too many requests. Please try again later."}, status=429
        )

    controller = get_controller_for_request(request)
    if controller.needs_initial_load:
        update = controller.start()
    else:
        update = controller.load_more()

    if update is None:
        return JsonResponse(
            {"error": "A batch is already loading for this session."}, status=409
        )

    return JsonResponse({
        "results": [record.to_dict() for record in update.records],
        "is_initial_load": update.is_initial_load,
        "error": update.error,
        "seen_count": len(controller.filter_config.seen_ids),
    })
