from django.urls import include, path

urlpatterns = [
    path("api/", include("grambrandt.api.urls")),
    path("", include("grambrandt.urls")),
]
