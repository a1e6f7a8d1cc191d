"""
Tests for request logging middleware.
"""

import logging

from django.http import HttpResponse
from django.test import Client as DjangoClient
from django.test import RequestFactory

from apps.web.core.middleware import RequestLoggingMiddleware


class TestRequestLoggingMiddleware:
    def test_logs_request(self, caplog):
        with caplog.at_level(logging.INFO, logger="apps.web.core.middleware"):
            DjangoClient().get("/health")

        assert "GET /health -> 200" in caplog.text

    def test_skips_admin(self, caplog):
        middleware = RequestLoggingMiddleware(lambda request: HttpResponse())

        with caplog.at_level(logging.INFO, logger="apps.web.core.middleware"):
            middleware(RequestFactory().get("/admin/catalog/menuitem/"))

        assert not caplog.records
