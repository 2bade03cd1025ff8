from django.db import migrations, models

import donors.models


class Migration(migrations.Migration):

    dependencies = [
        ('bloodrequests', '0001_initial'),
    ]

    operations = [
        migrations.AlterField(
            model_name='bloodrequest',
            name='location',
            field=models.JSONField(validators=[donors.models.validate_geojson_point]),
        ),
    ]
