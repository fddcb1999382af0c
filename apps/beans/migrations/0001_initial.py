# Generated manually for the beans app

import uuid
from decimal import Decimal
from django.core.validators import MinValueValidator
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='CoffeeBean',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200, unique=True)),
                ('origin', models.CharField(db_index=True, max_length=100)),
                ('region', models.CharField(blank=True, max_length=200)),
                ('process', models.CharField(blank=True, max_length=100)),
                ('roast_level', models.CharField(db_index=True, max_length=50)),
                ('flavor_notes', models.JSONField(blank=True, default=list)),
                ('description', models.TextField(blank=True)),
                ('image_url', models.URLField(blank=True, max_length=500)),
                ('moq_kg', models.PositiveIntegerField(validators=[MinValueValidator(1)])),
                ('price_per_kg', models.DecimalField(decimal_places=2, max_digits=10, validators=[MinValueValidator(Decimal('0.01'))])),
                ('available', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'coffeebeans',
                'ordering': ['name'],
                'indexes': [
                    models.Index(fields=['available', 'name'], name='coffeebeans_avail_name_idx'),
                    models.Index(fields=['price_per_kg'], name='coffeebeans_price_idx'),
                ],
            },
        ),
    ]
