from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Proposal',
            fields=[
                ('id', models.CharField(max_length=64, primary_key=True, serialize=False)),
                ('type', models.CharField(blank=True, max_length=255)),
                ('height', models.BigIntegerField(db_index=True)),
                ('alerted', models.BooleanField(db_index=True, default=False)),
                ('title', models.TextField(blank=True)),
                ('description', models.TextField(blank=True)),
                ('proposal_type', models.CharField(blank=True, max_length=255)),
                ('proposal_status', models.CharField(blank=True, max_length=64)),
                ('voting_start_block', models.CharField(blank=True, max_length=64)),
            ],
            options={
                'verbose_name': 'Governance Proposal',
                'verbose_name_plural': 'Governance Proposals',
                'db_table': 'proposals',
                'ordering': ['height', 'id'],
            },
        ),
    ]
