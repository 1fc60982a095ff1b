"""
URL configuration for SeaTrace API tests.

Used as ROOT_URLCONF in test settings via @pytest.mark.urls.
"""

from django.urls import include, path

urlpatterns = [
    path("api/seatrace/", include("seatrace.api.urls")),
]
