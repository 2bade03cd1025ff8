from django.db import migrations, models

import donors.models


class Migration(migrations.Migration):

    dependencies = [
        ('campaigns', '0001_initial'),
    ]

    operations = [
        migrations.AlterField(
            model_name='campaign',
            name='location',
            field=models.JSONField(blank=True, null=True, validators=[donors.models.validate_geojson_point]),
        ),
    ]
