"""URL configuration for attendance module."""

from django.urls import path

from . import views

app_name = "attendance"

urlpatterns = [
    path("api/sessions/", views.api_sessions, name="api_sessions"),
    path("api/sessions/summary/", views.api_sessions_summary, name="api_sessions_summary"),
    path("api/sessions/<int:employee_id>/today/", views.api_session_today, name="api_session_today"),
    path("api/sessions/<int:employee_id>/<str:day>/", views.api_session_detail, name="api_session_detail"),
    path("api/sessions/<int:employee_id>/<str:day>/start/", views.api_start, name="api_start"),
    path("api/sessions/<int:employee_id>/<str:day>/break/", views.api_break, name="api_break"),
    path("api/sessions/<int:employee_id>/<str:day>/resume/", views.api_resume, name="api_resume"),
    path("api/sessions/<int:employee_id>/<str:day>/end/", views.api_end, name="api_end"),
    path("api/sessions/<int:employee_id>/<str:day>/reopen/", views.api_reopen, name="api_reopen"),
    path("api/sessions/<int:employee_id>/<str:day>/notes/", views.api_notes, name="api_notes"),
]
