import logging

from rest_framework import viewsets, status, serializers
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated, IsAuthenticatedOrReadOnly
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from .models import Order, Bid
from .serializers import (
    PlaceBidSerializer,
    UpdateBidSerializer,
    CreateOrderSerializer,
    OrderFilterSerializer,
    BidFilterSerializer,
    OrderSerializer,
    BidSerializer,
    MyBidSerializer,
)

from apps.orders.services import (
    place_bid,
    update_bid,
    cancel_bid,
    create_order,
    get_order_by_id,
    list_orders,
    get_user_bids,
    get_order_bids,
    # Exceptions
    OrdersServiceError,
    ValidationError,
    UnauthorizedError,
    NotFoundError,
    ConflictError,
)


logger = logging.getLogger(__name__)


# Error kind -> HTTP status
ERROR_STATUS_BY_KIND = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
)


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()
    code = serializers.CharField()


def service_error_response(request, exc: OrdersServiceError) -> Response:
    """Convert a domain error into ``{"error", "code"}`` with its kind's status."""
    http_status = status.HTTP_400_BAD_REQUEST
    for kind, kind_status in ERROR_STATUS_BY_KIND:
        if isinstance(exc, kind):
            http_status = kind_status
            break

    logger.warning(
        "%s %s rejected: %s [%s]",
        request.method, request.path, exc, exc.code
    )
    return Response({'error': str(exc), 'code': exc.code}, status=http_status)


class OrderPagination(PageNumberPagination):
    """Custom pagination for orders and bids."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class OrderViewSet(viewsets.GenericViewSet):
    """
    Aggregate orders, one per passed proposal.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Get orders (status and proposal_id filters)
    create: Open an order for a passed proposal
    retrieve: Get a specific order with progress figures
    bids: Get the open bids on an order
    """

    queryset = Order.objects.select_related('coffee_bean')
    serializer_class = OrderSerializer
    permission_classes = [IsAuthenticatedOrReadOnly]
    pagination_class = OrderPagination

    def list(self, request):
        """List orders, newest first."""
        filter_serializer = OrderFilterSerializer(data=request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        orders = list_orders(
            status=params.get('status'),
            proposal_id=params.get('proposal_id'),
        )

        page = self.paginate_queryset(orders)
        serializer = OrderSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    @extend_schema(
        request=CreateOrderSerializer,
        responses={201: OrderSerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer, 409: ErrorResponseSerializer},
    )
    def create(self, request):
        """Create the order for a passed proposal."""
        serializer = CreateOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            order = create_order(
                proposal_id=data['proposal_id'],
                coffee_bean_id=data['coffee_bean_id'],
                target_quantity_kg=data['target_quantity_kg'],
                moq_kg=data['moq_kg'],
                bidding_days=data.get('bidding_days'),
            )
        except OrdersServiceError as e:
            return service_error_response(request, e)

        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        """Get a single order."""
        try:
            order = get_order_by_id(order_id=pk)
        except OrdersServiceError as e:
            return service_error_response(request, e)

        return Response(OrderSerializer(order).data)

    @extend_schema(responses={200: BidSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def bids(self, request, pk=None):
        """Get bids on the order; all non-cancelled ones unless ?status= is given."""
        filter_serializer = BidFilterSerializer(data=request.query_params)
        filter_serializer.is_valid(raise_exception=True)

        status_filter = filter_serializer.validated_data.get('status')

        try:
            bids = get_order_bids(
                order_id=pk,
                status=status_filter,
                open_only=status_filter is None,
            )
        except OrdersServiceError as e:
            return service_error_response(request, e)

        page = self.paginate_queryset(bids)
        serializer = BidSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)


class BidViewSet(viewsets.GenericViewSet):
    """
    A member's bids.

    create: Place a bid on an order
    partial_update: Change min_kg, max_kg or price_per_kg
    destroy: Cancel the bid (the record is kept)
    mine: List the current member's bids
    """

    queryset = Bid.objects.select_related('order', 'user')
    serializer_class = BidSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = OrderPagination

    @extend_schema(
        request=PlaceBidSerializer,
        responses={201: BidSerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer, 409: ErrorResponseSerializer},
    )
    def create(self, request):
        """Place a bid."""
        serializer = PlaceBidSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            bid = place_bid(
                order_id=data['order_id'],
                user=request.user,
                min_kg=data['min_kg'],
                max_kg=data['max_kg'],
                price_per_kg=data['price_per_kg'],
            )
        except OrdersServiceError as e:
            return service_error_response(request, e)

        return Response(BidSerializer(bid).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        request=UpdateBidSerializer,
        responses={200: BidSerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer, 409: ErrorResponseSerializer},
    )
    def partial_update(self, request, pk=None):
        """Update own bid."""
        serializer = UpdateBidSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            bid = update_bid(
                bid_id=pk,
                user=request.user,
                min_kg=data.get('min_kg'),
                max_kg=data.get('max_kg'),
                price_per_kg=data.get('price_per_kg'),
            )
        except OrdersServiceError as e:
            return service_error_response(request, e)

        return Response(BidSerializer(bid).data)

    @extend_schema(
        responses={200: BidSerializer, 404: ErrorResponseSerializer, 409: ErrorResponseSerializer},
    )
    def destroy(self, request, pk=None):
        """Cancel own bid."""
        try:
            bid = cancel_bid(bid_id=pk, user=request.user)
        except OrdersServiceError as e:
            return service_error_response(request, e)

        return Response(BidSerializer(bid).data)

    @extend_schema(responses={200: MyBidSerializer(many=True)})
    @action(detail=False, methods=['get'])
    def mine(self, request):
        """Get the current member's bids, newest first."""
        filter_serializer = BidFilterSerializer(data=request.query_params)
        filter_serializer.is_valid(raise_exception=True)

        bids = get_user_bids(
            user=request.user,
            status=filter_serializer.validated_data.get('status'),
        )

        page = self.paginate_queryset(bids)
        serializer = MyBidSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)
