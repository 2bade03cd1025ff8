from django.db import migrations, models

import donors.models


class Migration(migrations.Migration):

    dependencies = [
        ('donors', '0001_initial'),
    ]

    operations = [
        migrations.AlterField(
            model_name='donor',
            name='location',
            field=models.JSONField(validators=[donors.models.validate_geojson_point]),
        ),
    ]
