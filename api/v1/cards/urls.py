"""
URL configuration for cards API endpoints.
"""

from django.urls import path

from api.v1.cards import views

urlpatterns = [
    path("cards", views.ListCardsView.as_view(), name="list-cards"),
    path("cards/batch", views.GenerateCardsView.as_view(), name="generate-cards"),
    path("cards/verify", views.VerifyCardView.as_view(), name="verify-card"),
    path("cards/check-hwid", views.CheckHwidView.as_view(), name="check-hwid"),
    path("cards/check-expired", views.CheckExpiredView.as_view(), name="check-expired"),
    path("cards/unbind-hwid", views.UnbindCardView.as_view(), name="unbind-card"),
]
