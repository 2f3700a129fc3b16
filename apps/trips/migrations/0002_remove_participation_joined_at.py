from django.db import migrations


class Migration(migrations.Migration):

    dependencies = [
        ('trips', '0001_initial'),
    ]

    operations = [
        migrations.AlterModelOptions(
            name='participation',
            options={'ordering': ['created_at']},
        ),
        migrations.RemoveField(
            model_name='participation',
            name='joined_at',
        ),
    ]
