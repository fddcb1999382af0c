"""Bean catalog CRUD operations service."""

from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction, IntegrityError

from ..models import CoffeeBean
from .exceptions import BeanNotFoundError, DuplicateBeanError


def create_bean(
    *,
    name: str,
    origin: str,
    roast_level: str,
    moq_kg: int,
    price_per_kg: Decimal,
    region: str = '',
    process: str = '',
    flavor_notes: Optional[list[str]] = None,
    description: str = '',
    image_url: str = '',
    available: bool = True
) -> CoffeeBean:
    """
    Add a bean to the catalog.

    Args:
        name: Catalog name, unique across the catalog
        origin: Country of origin
        roast_level: Roast label, e.g. "Light" or "Medium-Dark"
        moq_kg: Minimum order quantity offered by the importer
        price_per_kg: Price per kilogram
        region: Growing region
        process: Processing method label
        flavor_notes: List of flavor descriptors
        description: Long description
        image_url: Product image
        available: Whether members can see it as orderable

    Returns:
        Created CoffeeBean instance

    Raises:
        DuplicateBeanError: If a bean with this name exists
    """
    try:
        with transaction.atomic():
            bean = CoffeeBean.objects.create(
                name=name,
                origin=origin,
                region=region,
                process=process,
                roast_level=roast_level,
                flavor_notes=list(flavor_notes or []),
                description=description,
                image_url=image_url,
                moq_kg=moq_kg,
                price_per_kg=price_per_kg,
                available=available,
            )
    except IntegrityError:
        raise DuplicateBeanError(f"Bean '{name}' already exists")

    return bean


def get_bean_by_id(*, bean_id: UUID) -> CoffeeBean:
    """
    Get a bean by ID.

    Raises:
        BeanNotFoundError: If bean doesn't exist
    """
    try:
        return CoffeeBean.objects.get(id=bean_id)
    except (CoffeeBean.DoesNotExist, ValueError, DjangoValidationError):
        raise BeanNotFoundError(f"Bean {bean_id} not found")
