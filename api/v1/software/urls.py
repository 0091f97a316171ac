"""
URL configuration for software API endpoints.
"""

from django.urls import path

from api.v1.software import views

urlpatterns = [
    path("software-version", views.SoftwareVersionView.as_view(), name="software-version"),
]
