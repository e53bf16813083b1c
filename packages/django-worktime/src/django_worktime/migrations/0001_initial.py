"""Create the WorkSession table."""

import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='WorkSession',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('date', models.DateField()),
                ('status', models.CharField(
                    choices=[
                        ('not_started', 'Not started'),
                        ('working', 'Working'),
                        ('on_break', 'On break'),
                        ('ended', 'Ended'),
                    ],
                    default='not_started',
                    max_length=20,
                )),
                ('segments', models.JSONField(blank=True, default=list)),
                ('total_duration', models.PositiveIntegerField(default=0)),
                ('break_duration', models.PositiveIntegerField(default=0)),
                ('started_at', models.DateTimeField(blank=True, null=True)),
                ('ended_at', models.DateTimeField(blank=True, null=True)),
                ('notes', models.TextField(blank=True, default='')),
                ('version', models.PositiveIntegerField(default=0)),
                ('employee', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='work_sessions',
                    to=settings.AUTH_USER_MODEL,
                )),
            ],
            options={
                'ordering': ['-date'],
                'indexes': [models.Index(fields=['date', 'status'], name='worktime_date_status_idx')],
                'constraints': [
                    models.UniqueConstraint(
                        fields=('employee', 'date'),
                        name='worktime_one_session_per_employee_day',
                    ),
                    models.CheckConstraint(
                        condition=models.Q(('status__in', ['not_started', 'working', 'on_break', 'ended'])),
                        name='worktime_status_valid',
                    ),
                ],
            },
        ),
    ]
