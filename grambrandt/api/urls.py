from django.urls import path

from grambrandt.api.views import artwork_types_view, config_view, feed_view

urlpatterns = [
    path("artwork-types/", artwork_types_view),
    path("feed/", feed_view),
    path("config/", config_view),
]
