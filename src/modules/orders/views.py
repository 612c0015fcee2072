"""Purchase API views.

Exposes ``PurchaseService`` via HTTP.  Purchase errors are translated into
HTTP status codes by their stable ``code``; the view never swallows
generic exceptions.
"""

from __future__ import annotations

from django.conf import settings
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.core.exceptions import error_response
from modules.orders.dtos import PurchaseDTO
from modules.orders.exceptions import OrderNotFound, PurchaseError
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import OrderSerializer, PurchaseSerializer
from modules.orders.services import PurchaseService
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.users.repositories.django_repository import UserDjangoRepository

PURCHASE_ERROR_STATUS = {
    "invalid_quantity": status.HTTP_400_BAD_REQUEST,
    "inactive_user": status.HTTP_400_BAD_REQUEST,
    "product_not_found": status.HTTP_404_NOT_FOUND,
    "user_not_found": status.HTTP_404_NOT_FOUND,
    "insufficient_stock": status.HTTP_409_CONFLICT,
    "product_unavailable": status.HTTP_409_CONFLICT,
    "lock_timeout": status.HTTP_503_SERVICE_UNAVAILABLE,
    "persistence_failure": status.HTTP_503_SERVICE_UNAVAILABLE,
}


def _build_service() -> PurchaseService:
    return PurchaseService(
        order_repository=OrderDjangoRepository(),
        product_repository=ProductDjangoRepository(),
        user_repository=UserDjangoRepository(),
    )


def purchase_error_response(exc: PurchaseError) -> Response:
    headers = None
    if exc.retryable:
        retry_after = max(int(round(settings.PURCHASE_LOCK_TIMEOUT)), 1)
        headers = {"Retry-After": str(retry_after)}
    return error_response(
        exc.code,
        str(exc),
        PURCHASE_ERROR_STATUS.get(exc.code, status.HTTP_400_BAD_REQUEST),
        headers=headers,
    )


class PurchaseView(APIView):
    """POST /api/v1/purchases/"""

    throttle_scope = "purchases"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = _build_service()

    def post(self, request: Request) -> Response:
        serializer = PurchaseSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto = PurchaseDTO(**serializer.validated_data)

        try:
            order = self._service.purchase(
                product_id=dto.product_id,
                user_id=dto.user_id,
                quantity=dto.quantity,
            )
        except PurchaseError as exc:
            return purchase_error_response(exc)

        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)


class OrderDetailView(APIView):
    """GET /api/v1/orders/{pk}/"""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = _build_service()

    def get(self, request: Request, pk: str) -> Response:
        try:
            order = self._service.get_order(pk)
        except OrderNotFound:
            return error_response(
                "order_not_found", "Order not found.", status.HTTP_404_NOT_FOUND
            )
        return Response(OrderSerializer(order).data)
