"""URL configuration for agencyops project."""

from django.urls import include, path

from . import views

urlpatterns = [
    # Health check
    path("health/", views.health_check, name="health_check"),

    # Dashboard modules
    path("attendance/", include("agencyops.attendance.urls")),
    path("finance/", include("agencyops.finance.urls")),
]
