"""URLs for coupons"""

from django.urls import include, path

urlpatterns = [
    path("api/v0/", include("coupons.views.v0.urls")),
]
