from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone

import habits.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('workspaces', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Activity',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('activity_type', models.CharField(max_length=50, verbose_name='activity type')),
                ('activity_data', models.JSONField(blank=True, default=dict, verbose_name='activity data')),
                ('duration_seconds', models.PositiveIntegerField(default=0, verbose_name='duration (seconds)')),
                ('timestamp', models.DateTimeField(default=django.utils.timezone.now, verbose_name='timestamp')),
                ('app', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='activities', to='workspaces.availableapp')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='activities', to=settings.AUTH_USER_MODEL, verbose_name='user')),
                ('workspace', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='activities', to='workspaces.workspace')),
            ],
            options={
                'verbose_name': 'Activity',
                'verbose_name_plural': 'Activities',
                'ordering': ['-timestamp'],
                'indexes': [
                    models.Index(fields=['user', 'timestamp'], name='activity_user_ts_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='WorkHabit',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('analysis_date', models.DateField(verbose_name='analysis date')),
                ('total_tasks', models.PositiveIntegerField(default=0)),
                ('completed_tasks', models.PositiveIntegerField(default=0)),
                ('productivity_score', models.PositiveSmallIntegerField(default=50)),
                ('context_switches', models.PositiveIntegerField(default=0)),
                ('avg_working_hours', models.FloatField(default=0.0)),
                ('overload_indicator', models.BooleanField(default=False)),
                ('ignored_priorities_count', models.IntegerField(default=0)),
                ('insights', models.JSONField(blank=True, default=habits.models.empty_insights)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='work_habits', to=settings.AUTH_USER_MODEL, verbose_name='user')),
            ],
            options={
                'verbose_name': 'Work Habit',
                'verbose_name_plural': 'Work Habits',
                'ordering': ['-analysis_date'],
            },
        ),
        migrations.AddConstraint(
            model_name='workhabit',
            constraint=models.UniqueConstraint(fields=('user', 'analysis_date'), name='unique_work_habit_per_day'),
        ),
    ]
