"""
URL configuration for license API endpoints.
"""

from django.urls import path

from api.v1.licenses import views

urlpatterns = [
    path(
        "validate",
        views.ValidateLicenseView.as_view(),
        name="validate-license",
    ),
    path(
        "reset",
        views.ResetLicenseView.as_view(),
        name="reset-license",
    ),
    path(
        "mine",
        views.MyLicensesView.as_view(),
        name="my-licenses",
    ),
]
