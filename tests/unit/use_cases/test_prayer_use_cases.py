from uuid import uuid4

import pytest

from congregation.app.use_cases.prayers import (
    CreatePrayerCommand,
    CreatePrayerUseCase,
    GetPrayerUseCase,
    ListPrayersUseCase,
    PrayForPrayerUseCase,
    UpdatePrayerCommand,
    UpdatePrayerUseCase,
)
from congregation.domain.entities import (
    Prayer,
    PrayerSupporter,
    PrayerVisibility,
    UserRole,
)
from congregation.domain.exceptions import DuplicatePrayerSupporterError
from congregation.shared_kernel import error_codes

CHURCH_ID = uuid4()


def _prayer(owner_id, **fields) -> Prayer:
    return Prayer(
        user_id=owner_id,
        church_id=fields.pop("church_id", CHURCH_ID),
        title="Healing for my mother",
        content="Please pray for her recovery",
        **fields,
    )


@pytest.fixture
def member(make_user):
    return make_user(role=UserRole.member, church_id=CHURCH_ID, display_name="Mary")


@pytest.mark.asyncio
async def test_church_prayer_without_church_is_stored_private(
    mock_uow, audit, rate_limiter, make_user
):
    # Arrange
    guest = make_user(role=UserRole.guest, church_id=None)
    mock_uow.users.get_by_id.return_value = guest
    mock_uow.prayers.create.side_effect = lambda prayer: prayer

    # Act
    result = await CreatePrayerUseCase(mock_uow, audit, rate_limiter).execute(
        guest.id,
        CreatePrayerCommand(title="Guidance", content="New job", visibility=PrayerVisibility.church),
    )

    # Assert
    assert result.is_ok()
    assert result.value.visibility == PrayerVisibility.private
    assert result.value.church_id is None


@pytest.mark.asyncio
async def test_create_prayer_keeps_church_of_member(mock_uow, audit, rate_limiter, member):
    mock_uow.users.get_by_id.return_value = member
    mock_uow.prayers.create.side_effect = lambda prayer: prayer

    result = await CreatePrayerUseCase(mock_uow, audit, rate_limiter).execute(
        member.id, CreatePrayerCommand(title="Thanks", content="For the harvest")
    )

    assert result.is_ok()
    assert result.value.visibility == PrayerVisibility.church
    assert result.value.church_id == CHURCH_ID
    assert result.value.user_name == "Mary"
    assert result.value.prayer_count == 0


@pytest.mark.asyncio
async def test_private_prayer_hidden_from_others(mock_uow, audit, member):
    prayer = _prayer(uuid4(), visibility=PrayerVisibility.private)
    mock_uow.prayers.get_by_id.return_value = prayer
    mock_uow.users.get_by_id.return_value = member

    result = await GetPrayerUseCase(mock_uow, audit).execute(member.id, prayer.id)

    assert result.is_err()
    assert result.error.code == error_codes.PERMISSION_DENIED
    assert result.error.message == "Cannot view private prayers"


@pytest.mark.asyncio
async def test_private_prayer_visible_to_owner(mock_uow, audit, member):
    prayer = _prayer(member.id, visibility=PrayerVisibility.private)
    mock_uow.prayers.get_by_id.return_value = prayer
    mock_uow.users.get_by_id.return_value = member

    result = await GetPrayerUseCase(mock_uow, audit).execute(member.id, prayer.id)

    assert result.is_ok()
    assert result.value.id == prayer.id


@pytest.mark.asyncio
async def test_church_prayer_hidden_from_other_church(mock_uow, audit, make_user):
    outsider = make_user(role=UserRole.member, church_id=uuid4())
    prayer = _prayer(uuid4(), visibility=PrayerVisibility.church)
    mock_uow.prayers.get_by_id.return_value = prayer
    mock_uow.users.get_by_id.return_value = outsider

    result = await GetPrayerUseCase(mock_uow, audit).execute(outsider.id, prayer.id)

    assert result.is_err()
    assert result.error.message == "Cannot view prayers from another church"
    audit.record_data_access.assert_not_awaited()


@pytest.mark.asyncio
async def test_public_prayer_visible_to_anyone(mock_uow, audit, make_user):
    outsider = make_user(role=UserRole.guest, church_id=None)
    prayer = _prayer(uuid4(), visibility=PrayerVisibility.public)
    mock_uow.prayers.get_by_id.return_value = prayer
    mock_uow.users.get_by_id.return_value = outsider

    result = await GetPrayerUseCase(mock_uow, audit).execute(outsider.id, prayer.id)

    assert result.is_ok()


@pytest.mark.asyncio
async def test_only_owner_updates_prayer(mock_uow, audit, rate_limiter, member):
    prayer = _prayer(uuid4())
    mock_uow.prayers.get_by_id.return_value = prayer

    result = await UpdatePrayerUseCase(mock_uow, audit, rate_limiter).execute(
        member.id, UpdatePrayerCommand(prayer_id=prayer.id, changes={"title": "Mine now"})
    )

    assert result.is_err()
    assert result.error.code == error_codes.PERMISSION_DENIED
    assert prayer.title == "Healing for my mother"


@pytest.mark.asyncio
async def test_marking_answered_sets_answered_at_once(mock_uow, audit, rate_limiter, member):
    # Arrange
    prayer = _prayer(member.id)
    mock_uow.prayers.get_by_id.return_value = prayer
    mock_uow.prayers.update.side_effect = lambda p: p
    use_case = UpdatePrayerUseCase(mock_uow, audit, rate_limiter)

    # Act
    first = await use_case.execute(
        member.id, UpdatePrayerCommand(prayer_id=prayer.id, changes={"is_answered": True})
    )
    answered_at = prayer.answered_at
    await use_case.execute(
        member.id,
        UpdatePrayerCommand(prayer_id=prayer.id, changes={"answered_note": "She recovered"}),
    )

    # Assert
    assert first.is_ok()
    assert answered_at is not None
    assert prayer.answered_at == answered_at
    assert prayer.answered_note == "She recovered"


@pytest.mark.asyncio
async def test_list_prayers_rejects_unknown_visibility(mock_uow, audit, member):
    result = await ListPrayersUseCase(mock_uow, audit).execute(member.id, visibility="secret")

    assert result.is_err()
    assert result.error.code == error_codes.INVALID_ARGUMENT
    assert result.error.message == "Invalid visibility option"


@pytest.mark.asyncio
async def test_list_church_prayers_requires_church(mock_uow, audit, make_user):
    guest = make_user(role=UserRole.guest, church_id=None)
    mock_uow.users.get_by_id.return_value = guest

    result = await ListPrayersUseCase(mock_uow, audit).execute(guest.id, visibility="church")

    assert result.is_err()
    assert result.error.code == error_codes.FAILED_PRECONDITION
    mock_uow.prayers.list_for_church.assert_not_called()


@pytest.mark.asyncio
async def test_list_my_prayers_drops_answered(mock_uow, audit, member):
    open_prayer = _prayer(member.id)
    answered = _prayer(member.id, is_answered=True)
    mock_uow.users.get_by_id.return_value = member
    mock_uow.prayers.list_by_user.return_value = [open_prayer, answered]

    result = await ListPrayersUseCase(mock_uow, audit).execute(member.id, visibility="my")

    assert [p.id for p in result.value.prayers] == [open_prayer.id]
    mock_uow.prayers.list_by_user.assert_awaited_once_with(member.id, 20)


@pytest.mark.asyncio
async def test_first_prayer_increments_count(mock_uow, audit, member):
    prayer = _prayer(uuid4(), prayer_count=2)
    mock_uow.prayers.get_by_id.return_value = prayer
    mock_uow.users.get_by_id.return_value = member
    mock_uow.prayer_supporters.get.return_value = None

    result = await PrayForPrayerUseCase(mock_uow, audit).execute(member.id, prayer.id)

    assert result.is_ok()
    assert prayer.prayer_count == 3
    supporter = mock_uow.prayer_supporters.create.call_args[0][0]
    assert supporter.user_name == "Mary"


@pytest.mark.asyncio
async def test_repeat_prayer_only_refreshes_timestamp(mock_uow, audit, member):
    """Praying twice counts once"""
    prayer = _prayer(uuid4(), prayer_count=1)
    supporter = PrayerSupporter(prayer_id=prayer.id, user_id=member.id)
    first_prayed_at = supporter.prayed_at
    mock_uow.prayers.get_by_id.return_value = prayer
    mock_uow.users.get_by_id.return_value = member
    mock_uow.prayer_supporters.get.return_value = supporter

    result = await PrayForPrayerUseCase(mock_uow, audit).execute(member.id, prayer.id)

    assert result.is_ok()
    assert prayer.prayer_count == 1
    assert supporter.prayed_at >= first_prayed_at
    mock_uow.prayer_supporters.create.assert_not_called()
    mock_uow.prayer_supporters.update.assert_awaited_once_with(supporter)


@pytest.mark.asyncio
async def test_first_prayer_losing_insert_race_refreshes_timestamp(mock_uow, audit, member):
    """A concurrent first prayer already added the supporter row; count it once"""
    prayer = _prayer(uuid4(), prayer_count=1)
    supporter = PrayerSupporter(prayer_id=prayer.id, user_id=member.id)
    first_prayed_at = supporter.prayed_at
    mock_uow.prayers.get_by_id.return_value = prayer
    mock_uow.users.get_by_id.return_value = member
    mock_uow.prayer_supporters.get.side_effect = [None, supporter]
    mock_uow.prayer_supporters.create.side_effect = DuplicatePrayerSupporterError(
        prayer.id, member.id
    )

    result = await PrayForPrayerUseCase(mock_uow, audit).execute(member.id, prayer.id)

    assert result.is_ok()
    assert prayer.prayer_count == 1
    assert supporter.prayed_at >= first_prayed_at
    mock_uow.rollback.assert_awaited_once()
    mock_uow.prayer_supporters.update.assert_awaited_once_with(supporter)
    mock_uow.prayers.update.assert_not_called()
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_supporter_conflict_without_visible_row_propagates(mock_uow, audit, member):
    prayer = _prayer(uuid4())
    mock_uow.prayers.get_by_id.return_value = prayer
    mock_uow.users.get_by_id.return_value = member
    mock_uow.prayer_supporters.get.return_value = None
    mock_uow.prayer_supporters.create.side_effect = DuplicatePrayerSupporterError(
        prayer.id, member.id
    )

    with pytest.raises(DuplicatePrayerSupporterError):
        await PrayForPrayerUseCase(mock_uow, audit).execute(member.id, prayer.id)

    mock_uow.commit.assert_not_called()
