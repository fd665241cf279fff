from tickets.handlers.views import (
    ConcertDetailView,
    ConcertListView,
    LoginView,
    MyOrdersView,
    PurchaseView,
    RegisterView,
)

__all__ = [
    "ConcertDetailView",
    "ConcertListView",
    "LoginView",
    "MyOrdersView",
    "PurchaseView",
    "RegisterView",
]
