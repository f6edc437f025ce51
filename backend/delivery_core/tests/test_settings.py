"""
Tests for project-level configuration.
"""
from django.conf import settings

LOCAL_APPS = ["users", "restaurants", "catalog", "promotions", "cart", "orders", "delivery_core"]


class TestLoggingConfig:

    def test_every_local_app_logs_to_console(self):
        loggers = settings.LOGGING["loggers"]

        for app in LOCAL_APPS:
            assert loggers[app]["handlers"] == ["console"], app
            assert loggers[app]["propagate"] is False, app

    def test_local_apps_are_installed(self):
        for app in LOCAL_APPS[:-1]:
            assert app in settings.INSTALLED_APPS
