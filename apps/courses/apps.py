from django.apps import AppConfig


class CoursesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.courses'
    verbose_name = 'المقررات والفيديوهات'

    def ready(self):
        """تسجيل Django Signals عند جاهزية التطبيق"""
        import apps.courses.signals  # noqa: F401
