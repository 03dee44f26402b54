"""
URL configuration for purchase feed endpoints.
"""

from django.urls import path

from api.v1.purchases import views

urlpatterns = [
    path(
        "completed",
        views.PurchaseCompletedView.as_view(),
        name="purchase-completed",
    ),
]
