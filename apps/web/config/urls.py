"""
URL configuration for Eighty-Six.
"""

from django.contrib import admin
from django.urls import include, path

from apps.web.core import views as core_views

urlpatterns = [
    path("admin/", admin.site.urls),
    path("health", core_views.health, name="health"),
    # Menu availability API (used by the chat bot)
    path("api/", include("apps.web.availability.urls")),
]
