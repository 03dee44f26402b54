"""
URL configuration for user administration endpoints.
"""

from django.urls import path

from api.v1.admin import views

urlpatterns = [
    path(
        "users",
        views.ListUsersView.as_view(),
        name="admin-list-users",
    ),
    path(
        "users/revoke",
        views.RevokeUserView.as_view(),
        name="admin-revoke-user",
    ),
]
