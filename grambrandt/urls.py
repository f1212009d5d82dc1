import grambrandt.views.views as views
from django.urls import path


urlpatterns = [
    path("", views.home_view, name="home"),
    path("posts/", views.get_posts_view, name="get-posts"),
    path("config/", views.config_view, name="config"),
    path("details/", views.details_view, name="details"),
]
