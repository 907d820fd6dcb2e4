# Generated manually for revenue app

import uuid
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('products', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='RevenueDistribution',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('order_id', models.CharField(max_length=128)),
                ('sale_amount_usd', models.DecimalField(decimal_places=2, max_digits=12)),
                ('manufacturing_cost_usd', models.DecimalField(decimal_places=2, max_digits=12)),
                ('quantity', models.PositiveIntegerField()),
                ('profit_usd', models.DecimalField(decimal_places=2, max_digits=12)),
                ('pool_usd', models.DecimalField(decimal_places=2, max_digits=12)),
                ('distributed_usd', models.DecimalField(decimal_places=2, max_digits=12)),
                ('investor_count', models.PositiveIntegerField()),
                ('revenue_share_percentage', models.PositiveSmallIntegerField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='revenue_distributions', to='products.product')),
            ],
            options={
                'db_table': 'revenue_distributions',
                'ordering': ['-created_at'],
                'constraints': [models.UniqueConstraint(fields=('product', 'order_id'), name='uniq_revenue_distribution_order')],
            },
        ),
    ]
