from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from .models import CoffeeBean
from .serializers import (
    BeanFilterSerializer,
    CoffeeBeanSerializer,
    CoffeeBeanDetailSerializer,
)
from .services import search_beans, get_all_origins, get_bean_by_id, BeanNotFoundError


class BeanPagination(PageNumberPagination):
    """Custom pagination for beans."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class CoffeeBeanViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Read-only catalog of coffee beans.

    list: Get all beans (with filters and sort)
    retrieve: Get a bean with its open orders
    """

    queryset = CoffeeBean.objects.all()
    serializer_class = CoffeeBeanSerializer
    permission_classes = [AllowAny]
    pagination_class = BeanPagination

    def get_queryset(self):
        """
        Filter beans based on validated query parameters.

        Filters:
        - origin: Exact origin country
        - roast_level: Exact roast label
        - available: true / false
        - sort: name, price, price_desc, moq
        """
        if self.action != 'list':
            return super().get_queryset()

        filter_serializer = BeanFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        return search_beans(
            origin=params.get('origin'),
            roast_level=params.get('roast_level'),
            available=params.get('available'),
            sort=params.get('sort', 'name'),
        )

    def get_serializer_class(self):
        """Use the detail serializer for single beans."""
        if self.action == 'retrieve':
            return CoffeeBeanDetailSerializer
        return CoffeeBeanSerializer

    def retrieve(self, request, pk=None):
        """Get a bean with the orders still collecting bids for it."""
        try:
            bean = get_bean_by_id(bean_id=pk)
        except BeanNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(CoffeeBeanDetailSerializer(bean).data)

    @action(detail=False, methods=['get'])
    def origins(self, request):
        """Get list of all origin countries in the catalog."""
        return Response(get_all_origins())
