from django.apps import AppConfig


class GrambrandtConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "grambrandt"
