from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='BlockInfo',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('block_id', models.CharField(max_length=200)),
                ('height', models.BigIntegerField(unique=True)),
                ('proposer', models.CharField(max_length=64)),
                ('time', models.DateTimeField()),
            ],
            options={
                'verbose_name': 'Block',
                'verbose_name_plural': 'Blocks',
                'db_table': 'block_infos',
                'ordering': ['-height'],
            },
        ),
        migrations.CreateModel(
            name='EvidenceInfo',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('address', models.CharField(db_index=True, max_length=64)),
                ('height', models.BigIntegerField(db_index=True)),
            ],
            options={
                'verbose_name': 'Evidence',
                'verbose_name_plural': 'Evidence',
                'db_table': 'evidence_infos',
                'ordering': ['height'],
            },
        ),
        migrations.CreateModel(
            name='MissInfo',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('address', models.CharField(max_length=64)),
                ('height', models.BigIntegerField(db_index=True)),
                ('alerted', models.BooleanField(default=False)),
                ('proposer', models.CharField(max_length=64)),
                ('time', models.DateTimeField()),
            ],
            options={
                'verbose_name': 'Missed Signature',
                'verbose_name_plural': 'Missed Signatures',
                'db_table': 'miss_infos',
                'ordering': ['height', 'id'],
                'indexes': [models.Index(fields=['alerted', 'address'], name='miss_infos_alerted_idx')],
            },
        ),
    ]
