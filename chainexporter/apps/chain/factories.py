from datetime import datetime, timedelta, timezone

import factory

from .models import BlockInfo, MissInfo

GENESIS_TIME = datetime(2019, 3, 13, 23, 0, tzinfo=timezone.utc)


class BlockInfoFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = BlockInfo

    height = factory.Sequence(lambda n: n + 2)
    block_id = factory.LazyAttribute(lambda o: f"{o.height:064X}:1:{o.height:064X}")
    proposer = factory.Sequence(lambda n: f"{n:040X}")
    time = factory.LazyAttribute(lambda o: GENESIS_TIME + timedelta(seconds=6 * o.height))


class MissInfoFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = MissInfo

    address = factory.Sequence(lambda n: f"{n:040X}")
    height = factory.Sequence(lambda n: n + 1)
    alerted = False
    proposer = "PROPOSER"
    time = factory.LazyAttribute(lambda o: GENESIS_TIME + timedelta(seconds=6 * o.height))
