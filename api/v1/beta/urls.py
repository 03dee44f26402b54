"""
URL configuration for beta program endpoints.
"""

from django.urls import path

from api.v1.beta import views

urlpatterns = [
    path(
        "signups",
        views.BetaSignupView.as_view(),
        name="beta-signup",
    ),
    path(
        "signups/<int:signup_id>/approve",
        views.ApproveBetaSignupView.as_view(),
        name="approve-beta-signup",
    ),
    path(
        "testers",
        views.TestersView.as_view(),
        name="beta-testers",
    ),
]
