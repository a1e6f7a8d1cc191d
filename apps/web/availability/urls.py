"""URL routing for the availability API."""

from django.urls import path

from apps.web.availability import views

app_name = "availability"

urlpatterns = [
    path("86", views.eighty_six, name="eighty_six"),
    path("restore", views.restore, name="restore"),
    path("status", views.status, name="status"),
    path("ingredients", views.ingredients, name="ingredients"),
    path("menu-items", views.menu_items, name="menu_items"),
    path("admin/sync-menu", views.sync_menu, name="sync_menu"),
]
