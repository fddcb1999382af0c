# ==========================================
# apps/beans/models.py
# ==========================================

from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class CoffeeBean(models.Model):
    """Green coffee offered to the collective, priced per kilogram."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200, unique=True)
    origin = models.CharField(max_length=100, db_index=True)
    region = models.CharField(max_length=200, blank=True)
    process = models.CharField(max_length=100, blank=True)
    roast_level = models.CharField(max_length=50, db_index=True)
    flavor_notes = models.JSONField(default=list, blank=True)
    description = models.TextField(blank=True)
    image_url = models.URLField(blank=True, max_length=500)

    # Commercial terms
    moq_kg = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    price_per_kg = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    available = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'coffeebeans'
        indexes = [
            models.Index(fields=['available', 'name'], name='coffeebeans_avail_name_idx'),
            models.Index(fields=['price_per_kg'], name='coffeebeans_price_idx'),
        ]
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.origin})"
