"""
URL configuration for webhook endpoints.
"""

from django.urls import path

from api.v1.webhooks import views

urlpatterns = [
    path(
        "stripe",
        views.StripeWebhookView.as_view(),
        name="stripe-webhook",
    ),
]
