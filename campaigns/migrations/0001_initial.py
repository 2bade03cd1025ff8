import campaigns.models
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('donors', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Campaign',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('location', models.JSONField(blank=True, null=True)),
                ('title', models.CharField(max_length=200)),
                ('description', models.TextField()),
                ('city', models.CharField(db_index=True, max_length=100)),
                ('address', models.TextField()),
                ('date', models.DateField()),
                ('time', models.CharField(help_text='e.g. "09:00 AM - 05:00 PM"', max_length=50)),
                ('organizer', models.CharField(max_length=200)),
                ('blood_groups_needed', models.JSONField(blank=True, default=campaigns.models.default_blood_groups)),
                ('poster_image_url', models.URLField(blank=True, default=campaigns.models.DEFAULT_POSTER_URL, max_length=500)),
                ('type', models.CharField(choices=[('Blood Drive', 'Blood Drive'), ('Emergency Camp', 'Emergency Camp'), ('Awareness', 'Awareness')], max_length=20)),
                ('status', models.CharField(choices=[('Upcoming', 'Upcoming'), ('Ongoing', 'Ongoing'), ('Completed', 'Completed')], default='Upcoming', max_length=10)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='campaigns', to='donors.donor')),
            ],
            options={
                'ordering': ['date'],
            },
        ),
    ]
