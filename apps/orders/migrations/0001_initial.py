# Generated manually for the orders app

import uuid
from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('beans', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Order',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('proposal_id', models.PositiveBigIntegerField(unique=True)),
                ('target_quantity_kg', models.DecimalField(decimal_places=3, max_digits=12, validators=[MinValueValidator(Decimal('0.001'))])),
                ('moq_kg', models.DecimalField(decimal_places=3, max_digits=12, validators=[MinValueValidator(Decimal('0.001'))])),
                ('total_bid_kg', models.DecimalField(decimal_places=3, default=Decimal('0'), editable=False, max_digits=12)),
                ('bidding_ends_at', models.DateTimeField()),
                ('status', models.CharField(choices=[('bidding', 'Bidding'), ('confirmed', 'Confirmed'), ('failed', 'Failed'), ('fulfilled', 'Fulfilled')], default='bidding', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('coffee_bean', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='orders', to='beans.coffeebean')),
            ],
            options={
                'db_table': 'orders',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['status', 'bidding_ends_at'], name='orders_status_ends_idx'),
                    models.Index(fields=['created_at'], name='orders_created_at_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Bid',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('min_kg', models.DecimalField(decimal_places=3, max_digits=12, validators=[MinValueValidator(Decimal('0.001'))])),
                ('max_kg', models.DecimalField(decimal_places=3, max_digits=12, validators=[MinValueValidator(Decimal('0.001'))])),
                ('price_per_kg', models.DecimalField(decimal_places=2, max_digits=10, validators=[MinValueValidator(Decimal('0.01'))])),
                ('status', models.CharField(choices=[('active', 'Active'), ('accepted', 'Accepted'), ('cancelled', 'Cancelled')], default='active', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('order', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='bids', to='orders.order')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='bids', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'bids',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['user', 'created_at'], name='bids_user_created_idx'),
                    models.Index(fields=['order', 'status'], name='bids_order_status_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(condition=models.Q(('status', 'cancelled'), _negated=True), fields=('order', 'user'), name='bids_one_open_bid_per_user'),
                    models.CheckConstraint(condition=models.Q(('min_kg__lte', models.F('max_kg'))), name='bids_min_kg_lte_max_kg'),
                ],
            },
        ),
    ]
