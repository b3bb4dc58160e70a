from django.conf import settings
import django.core.validators
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone

URGENCY_CHOICES = [('low', 'Low'), ('medium', 'Medium'), ('high', 'High'), ('critical', 'Critical')]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('workspaces', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Task',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255, verbose_name='title')),
                ('description', models.TextField(blank=True, null=True, verbose_name='description')),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('in_progress', 'In progress'), ('completed', 'Completed'), ('cancelled', 'Cancelled')], default='pending', max_length=20, verbose_name='status')),
                ('priority_score', models.IntegerField(default=50, help_text='Heuristic priority, clamped to 0-100 on save.', verbose_name='priority score')),
                ('urgency_level', models.CharField(choices=URGENCY_CHOICES, default='medium', max_length=10, verbose_name='urgency level')),
                ('source_urgency', models.CharField(blank=True, choices=URGENCY_CHOICES, default='', max_length=10, verbose_name='source urgency')),
                ('deadline', models.DateTimeField(blank=True, null=True, verbose_name='deadline')),
                ('completion_percentage', models.PositiveSmallIntegerField(default=0, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(100)], verbose_name='completion percentage')),
                ('estimated_duration', models.PositiveIntegerField(blank=True, help_text='Estimated effort in minutes.', null=True, verbose_name='estimated duration')),
                ('is_ai_generated', models.BooleanField(default=False, verbose_name='is AI generated')),
                ('source_type', models.CharField(blank=True, max_length=50, null=True, verbose_name='source type')),
                ('source_reference', models.CharField(blank=True, max_length=255, null=True, verbose_name='source reference')),
                ('completed_at', models.DateTimeField(blank=True, null=True, verbose_name='completed at')),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('app', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='tasks', to='workspaces.availableapp', verbose_name='source app')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='tasks', to=settings.AUTH_USER_MODEL, verbose_name='user')),
                ('workspace', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='tasks', to='workspaces.workspace', verbose_name='workspace')),
            ],
            options={
                'verbose_name': 'Task',
                'verbose_name_plural': 'Tasks',
                'ordering': ['-priority_score', 'deadline', '-created_at'],
                'indexes': [
                    models.Index(fields=['user', 'status'], name='task_user_status_idx'),
                    models.Index(fields=['user', 'created_at'], name='task_user_created_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='AIExplanation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('entity_type', models.CharField(max_length=50)),
                ('entity_id', models.CharField(max_length=64)),
                ('explanation', models.TextField()),
                ('factors', models.JSONField(blank=True, default=dict)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='ai_explanations', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'AI Explanation',
                'verbose_name_plural': 'AI Explanations',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['entity_type', 'entity_id'], name='explanation_entity_idx'),
                ],
            },
        ),
    ]
