# Generated migration for Refund model

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('orders', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Refund',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('amount_in_cents', models.BigIntegerField(validators=[django.core.validators.MinValueValidator(0)])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('order', models.ForeignKey(error_messages={'blank': "Order can't be blank", 'null': "Order can't be blank"}, on_delete=django.db.models.deletion.RESTRICT, related_name='refunds', to='orders.order')),
            ],
            options={
                'verbose_name': 'Refund',
                'verbose_name_plural': 'Refunds',
                'db_table': 'refunds',
                'ordering': ('created_at', 'id'),
                'indexes': [models.Index(fields=['order', 'created_at'], name='refunds_order_created_idx')],
            },
        ),
    ]
