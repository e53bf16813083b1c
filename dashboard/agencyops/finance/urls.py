"""URL configuration for finance module."""

from django.urls import path

from . import views

app_name = "finance"

urlpatterns = [
    path("api/exchange-rates/", views.api_exchange_rates, name="api_exchange_rates"),
    path("api/exchange-rates/refresh/", views.api_refresh_rates, name="api_refresh_rates"),
    path("api/convert/", views.api_convert, name="api_convert"),
    path("api/aggregate/", views.api_aggregate, name="api_aggregate"),
    path("api/leaderboard/", views.api_leaderboard, name="api_leaderboard"),
    path("api/goals/progress/", views.api_goals_progress, name="api_goals_progress"),
]
