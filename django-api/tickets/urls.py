from django.urls import path

from tickets.handlers import (
    ConcertDetailView,
    ConcertListView,
    LoginView,
    MyOrdersView,
    PurchaseView,
    RegisterView,
)

urlpatterns = [
    path("auth/register", RegisterView.as_view(), name="auth-register"),
    path("auth/login", LoginView.as_view(), name="auth-login"),
    path("concerts", ConcertListView.as_view(), name="concert-list"),
    path(
        "concerts/<str:concert_id>",
        ConcertDetailView.as_view(),
        name="concert-detail",
    ),
    path("buy", PurchaseView.as_view(), name="purchase"),
    path("my-orders", MyOrdersView.as_view(), name="my-orders"),
]
