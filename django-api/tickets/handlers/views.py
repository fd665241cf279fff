"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Leave domain errors to the exception handler for mapping
- Never contain business logic
"""

from django.core.cache import cache
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from tickets.cache_keys import CATALOG_CACHE_TTL, CONCERT_LIST_KEY, concert_detail_key
from tickets.handlers.dependencies import (
    get_account_service,
    get_catalog_service,
    get_order_history_service,
    get_purchase_service,
)
from tickets.handlers.serializers import (
    ConcertSerializer,
    CredentialsSerializer,
    OrderHistoryEntrySerializer,
    PurchasedOrderSerializer,
    PurchaseRequestSerializer,
)

NO_ORDERS_MESSAGE = "You have no orders yet."


class RegisterView(APIView):
    """Handler for POST /auth/register"""

    authentication_classes = []

    def post(self, request: Request) -> Response:
        payload = CredentialsSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        buyer = get_account_service().register(**payload.validated_data)
        return Response(
            {"message": "Registration successful", "buyer_id": str(buyer.id)},
            status=status.HTTP_201_CREATED,
        )


class LoginView(APIView):
    """Handler for POST /auth/login"""

    authentication_classes = []

    def post(self, request: Request) -> Response:
        payload = CredentialsSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        token = get_account_service().login(**payload.validated_data)
        return Response({"token": token})


class ConcertListView(APIView):
    """Handler for GET /concerts"""

    def get(self, request: Request) -> Response:
        data = cache.get(CONCERT_LIST_KEY)
        if data is None:
            concerts = get_catalog_service().list_concerts()
            data = ConcertSerializer(concerts, many=True).data
            cache.set(CONCERT_LIST_KEY, data, CATALOG_CACHE_TTL)
        return Response(data)


class ConcertDetailView(APIView):
    """Handler for GET /concerts/{concert_id}"""

    def get(self, request: Request, concert_id: str) -> Response:
        key = concert_detail_key(concert_id)
        data = cache.get(key)
        if data is None:
            concert = get_catalog_service().get_concert(concert_id)
            data = ConcertSerializer(concert).data
            cache.set(key, data, CATALOG_CACHE_TTL)
        return Response(data)


class PurchaseView(APIView):
    """Handler for POST /buy"""

    permission_classes = [IsAuthenticated]

    def post(self, request: Request) -> Response:
        payload = PurchaseRequestSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        order = get_purchase_service().purchase(
            buyer_id=request.user.buyer_id,
            concert_id=payload.validated_data["concert_id"],
            quantity=payload.validated_data["quantity"],
            addon_names=payload.validated_data["addon_names"],
        )
        return Response(
            {
                "message": "Purchase successful",
                "order": PurchasedOrderSerializer(order).data,
            },
            status=status.HTTP_201_CREATED,
        )


class MyOrdersView(APIView):
    """Handler for GET /my-orders"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        entries = get_order_history_service().list_orders(request.user.buyer_id)
        body = {"orders": OrderHistoryEntrySerializer(entries, many=True).data}
        if not entries:
            body["message"] = NO_ORDERS_MESSAGE
        return Response(body)
