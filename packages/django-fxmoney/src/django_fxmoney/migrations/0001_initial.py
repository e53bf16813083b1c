"""Create the ExchangeRateSnapshot table."""

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='ExchangeRateSnapshot',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('base', models.CharField(
                    choices=[
                        ('USD', 'US Dollar'),
                        ('TRY', 'Turkish Lira'),
                        ('SAR', 'Saudi Riyal'),
                        ('EGP', 'Egyptian Pound'),
                        ('EUR', 'Euro'),
                        ('AED', 'UAE Dirham'),
                    ],
                    default='USD',
                    max_length=3,
                )),
                ('date', models.DateField()),
                ('rates', models.JSONField(default=dict)),
                ('fetched_at', models.DateTimeField()),
                ('source', models.CharField(blank=True, default='', max_length=200)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['-date', '-fetched_at'],
                'constraints': [
                    models.UniqueConstraint(
                        fields=('base', 'date'),
                        name='fxmoney_one_snapshot_per_base_day',
                    ),
                ],
            },
        ),
    ]
