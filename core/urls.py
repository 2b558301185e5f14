"""URL configuration for core views."""

from __future__ import annotations

from django.urls import path

from core import views

app_name = "core"

urlpatterns = [
    path("shops/<str:shop_id>/charts/earnings/", views.earnings_chart, name="earnings_chart"),
    path("shops/<str:shop_id>/charts/categories/", views.category_chart, name="category_chart"),
]
