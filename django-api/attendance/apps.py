from django.apps import AppConfig


class AttendanceConfig(AppConfig):
    name = "attendance"
    verbose_name = "Attendance"
    default_auto_field = "django.db.models.BigAutoField"

    def ready(self) -> None:
        from attendance import signals  # noqa: F401
        from attendance.conf import AttendanceSettings
        from attendance.services.cache import ReadThroughCache

        # One cache per process; services receive it by reference.
        settings = AttendanceSettings.from_django()
        self.cache = ReadThroughCache(
            settings.cache_alias, enabled=settings.cache_enabled
        )
