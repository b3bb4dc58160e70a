from django.db import migrations

CATALOG = [
    ('Gmail', 'mail', 'communication', True, 'https://mail.google.com'),
    ('Google Calendar', 'calendar', 'productivity', True, 'https://calendar.google.com'),
    ('Slack', 'message-square', 'communication', False, 'https://app.slack.com'),
    ('Notion', 'file-text', 'productivity', False, 'https://www.notion.so'),
    ('Trello', 'trello', 'productivity', False, 'https://trello.com'),
    ('GitHub', 'github', 'development', False, 'https://github.com'),
]


def seed_catalog(apps, schema_editor):
    AvailableApp = apps.get_model('workspaces', 'AvailableApp')
    for name, icon, category, is_default, url in CATALOG:
        AvailableApp.objects.get_or_create(
            name=name,
            defaults={'icon': icon, 'category': category, 'is_default': is_default, 'redirect_url': url},
        )


def unseed_catalog(apps, schema_editor):
    AvailableApp = apps.get_model('workspaces', 'AvailableApp')
    AvailableApp.objects.filter(name__in=[row[0] for row in CATALOG]).delete()


class Migration(migrations.Migration):

    dependencies = [
        ('workspaces', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(seed_catalog, unseed_catalog),
    ]
