"""Unit tests for the legacy deviceId migration."""

import pytest

from unheard.application.services import LegacyDeviceMigration
from unheard.domain.entities import Comment, Reaction, ReactionType


@pytest.fixture
def migration(confession_repo, comment_repo, reaction_repo, identity) -> LegacyDeviceMigration:
    return LegacyDeviceMigration(confession_repo, comment_repo, reaction_repo, identity)


@pytest.mark.asyncio
async def test_records_without_device_get_shared_legacy_id(
    migration, confession_repo, comment_repo, reaction_repo, make_confession
):
    legacy = make_confession(device_id=None)
    owned = make_confession(device_id="device-a")
    comment = comment_repo.add(
        Comment(confession_id=legacy.id, username="old", text="hi", avatar="", device_id=None)
    )
    reaction = reaction_repo.add(
        Reaction(confession_id=legacy.id, device_id=None, type=ReactionType.HEART)
    )

    report = await migration.run()

    assert report.legacy_device_id.startswith("legacy-")
    assert (report.confessions_migrated, report.comments_migrated, report.reactions_migrated) == (1, 1, 1)
    assert confession_repo.items[legacy.id].device_id == report.legacy_device_id
    assert confession_repo.items[owned.id].device_id == "device-a"
    assert comment_repo.items[comment.id].device_id == report.legacy_device_id
    assert reaction_repo.items[reaction.id].device_id == report.legacy_device_id


@pytest.mark.asyncio
async def test_second_run_is_a_no_op(migration, make_confession):
    make_confession(device_id=None)
    await migration.run()

    report = await migration.run()

    assert report.confessions_migrated == 0


@pytest.mark.asyncio
async def test_legacy_id_is_not_this_devices_id(migration, make_confession, device_id):
    make_confession(device_id=None)

    report = await migration.run()

    assert report.legacy_device_id != device_id
