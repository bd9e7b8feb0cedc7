from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='PeerInfo',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('timestamp', models.DateTimeField(db_index=True)),
                ('node', models.CharField(db_index=True, max_length=255)),
                ('peer_id', models.CharField(max_length=64)),
                ('listen_addr', models.CharField(blank=True, max_length=255)),
                ('network', models.CharField(blank=True, max_length=64)),
                ('version', models.CharField(blank=True, max_length=64)),
                ('channels', models.CharField(blank=True, max_length=64)),
                ('moniker', models.CharField(blank=True, max_length=255)),
                ('is_outbound', models.BooleanField(default=False)),
                ('send_data', models.JSONField(blank=True, default=dict)),
                ('recv_data', models.JSONField(blank=True, default=dict)),
                ('channel_data', models.JSONField(blank=True, default=list)),
            ],
            options={
                'verbose_name': 'Peer Snapshot',
                'verbose_name_plural': 'Peer Snapshots',
                'db_table': 'peer_infos',
                'ordering': ['-timestamp', 'node'],
                'indexes': [models.Index(fields=['node', '-timestamp'], name='peer_infos_node_ts_idx')],
            },
        ),
    ]
