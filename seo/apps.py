from django.apps import AppConfig


class SeoConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "seo"
    verbose_name = "SEO"

    def ready(self):
        # Регистрируем сигналы после загрузки всех приложений.
        from . import signals  # noqa: F401
