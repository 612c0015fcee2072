"""Purchase URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.orders.views import OrderDetailView, PurchaseView

urlpatterns = [
    path("purchases/", PurchaseView.as_view(), name="purchase"),
    path("orders/<uuid:pk>/", OrderDetailView.as_view(), name="order-detail"),
]
