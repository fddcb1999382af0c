"""
Management command to seed the bean catalog.

Usage:
    python manage.py seed_beans
    python manage.py seed_beans --clear

Beans that already exist (matched by name) are left untouched, so the
command can be re-run safely.
"""

from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.beans.models import CoffeeBean
from apps.beans.services import create_bean, DuplicateBeanError


CATALOG = [
    {
        'name': 'Ethiopian Yirgacheffe',
        'origin': 'Ethiopia',
        'region': 'Yirgacheffe, Gedeo Zone',
        'process': 'Washed',
        'roast_level': 'Light',
        'flavor_notes': ['Blueberry', 'Jasmine', 'Lemon zest', 'Honey'],
        'description': (
            'A classic Ethiopian single-origin known for its bright acidity, '
            'floral aroma, and delicate fruit-forward sweetness.'
        ),
        'moq_kg': 300,
        'price_per_kg': Decimal('18.50'),
    },
    {
        'name': 'Colombian Supremo',
        'origin': 'Colombia',
        'region': 'Huila',
        'process': 'Washed',
        'roast_level': 'Medium',
        'flavor_notes': ['Caramel', 'Red apple', 'Chocolate', 'Nutty'],
        'description': (
            'Grown at high altitudes in Huila, this Supremo-grade bean delivers '
            'a balanced cup with rich caramel sweetness and a clean finish.'
        ),
        'moq_kg': 500,
        'price_per_kg': Decimal('14.00'),
    },
    {
        'name': 'Guatemalan Antigua',
        'origin': 'Guatemala',
        'region': 'Antigua Valley',
        'process': 'Washed',
        'roast_level': 'Medium-Dark',
        'flavor_notes': ['Dark chocolate', 'Spice', 'Smoky', 'Brown sugar'],
        'description': (
            'Volcanic soil produces a full-bodied coffee with rich chocolate '
            'notes and a distinctive smoky finish.'
        ),
        'moq_kg': 250,
        'price_per_kg': Decimal('16.00'),
    },
    {
        'name': 'Kenyan AA',
        'origin': 'Kenya',
        'region': 'Nyeri County',
        'process': 'Washed',
        'roast_level': 'Light-Medium',
        'flavor_notes': ['Blackcurrant', 'Grapefruit', 'Tomato', 'Brown sugar'],
        'description': (
            'AA grade beans from Nyeri, prized for bold, wine-like acidity '
            'and complex fruit flavors.'
        ),
        'moq_kg': 200,
        'price_per_kg': Decimal('22.00'),
    },
    {
        'name': 'Sumatra Mandheling',
        'origin': 'Indonesia',
        'region': 'North Sumatra',
        'process': 'Wet-hulled (Giling Basah)',
        'roast_level': 'Dark',
        'flavor_notes': ['Earthy', 'Cedar', 'Dark chocolate', 'Tobacco'],
        'description': (
            'A heavy-bodied Indonesian classic with low acidity, deep earthy '
            'tones, and a syrupy mouthfeel.'
        ),
        'moq_kg': 400,
        'price_per_kg': Decimal('12.50'),
    },
    {
        'name': 'Brazilian Santos',
        'origin': 'Brazil',
        'region': 'Minas Gerais',
        'process': 'Natural (dry)',
        'roast_level': 'Medium',
        'flavor_notes': ['Peanut', 'Milk chocolate', 'Toffee', 'Low acidity'],
        'description': (
            'Sweet, nutty, and smooth with minimal acidity. An excellent base '
            'for espresso blends.'
        ),
        'moq_kg': 600,
        'price_per_kg': Decimal('10.00'),
    },
    {
        'name': 'Costa Rican Tarrazú',
        'origin': 'Costa Rica',
        'region': 'Tarrazú',
        'process': 'Honey',
        'roast_level': 'Medium',
        'flavor_notes': ['Peach', 'Honey', 'Bright acidity', 'Vanilla'],
        'description': (
            'Honey-processed Tarrazú beans offer a juicy sweetness and vibrant '
            'acidity, grown at 1,500+ meters.'
        ),
        'moq_kg': 200,
        'price_per_kg': Decimal('19.00'),
    },
    {
        'name': 'Rwandan Bourbon',
        'origin': 'Rwanda',
        'region': 'Lake Kivu',
        'process': 'Washed',
        'roast_level': 'Light',
        'flavor_notes': ['Orange', 'Floral', 'Silky body', 'Tea-like'],
        'description': (
            'Tea-like elegance with citrus brightness and a silky, clean finish.'
        ),
        'moq_kg': 150,
        'price_per_kg': Decimal('20.00'),
    },
]


class Command(BaseCommand):
    help = 'Seed the coffee bean catalog'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Delete beans that have no orders before seeding',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            deleted, _ = CoffeeBean.objects.filter(orders__isnull=True).delete()
            self.stdout.write(f'Cleared {deleted} bean(s) without orders.')

        created = 0
        skipped = 0
        for bean_data in CATALOG:
            try:
                create_bean(**bean_data)
                created += 1
            except DuplicateBeanError:
                skipped += 1

        self.stdout.write(self.style.SUCCESS(
            f'Seeded {created} coffee bean(s), {skipped} already present.'
        ))
