from uuid import UUID

import pytest
from httpx import AsyncClient

from congregation.domain.entities import UserRole

VERSE = {
    "reference": "John 3:16",
    "text": "For God so loved the world...",
    "version": "NIV",
    "theme": "Love",
    "reflection": "God's love is unconditional",
}


def _verses_url(church, suffix=""):
    return f"/api/churches/{church['church_id']}/verses{suffix}"


@pytest.mark.asyncio
async def test_pastor_saves_and_member_reads_verse(client: AsyncClient, church):
    """Daily Verse

    Given I am the pastor of a church
    When I save the verse for 2030-03-15
    Then members of my church can read it by day and in the monthly calendar
    """
    saved = await client.put(
        _verses_url(church, "/2030-03-15"), json=VERSE, headers=church["pastor_headers"]
    )
    assert saved.status_code == 200
    assert saved.json()["verse"]["reference"] == "John 3:16"

    read = await client.get(_verses_url(church, "/2030-03-15"), headers=church["member_headers"])
    assert read.status_code == 200
    assert read.json()["verse"]["id"] == f"{church['church_id']}_2030-03-15"
    assert read.json()["verse"]["theme"] == "Love"

    calendar = await client.get(
        _verses_url(church, "/calendar/2030/3"), headers=church["member_headers"]
    )
    assert calendar.status_code == 200
    assert calendar.json()["verses"] == {
        "2030-03-15": {"reference": "John 3:16", "theme": "Love", "has_reflection": True}
    }


@pytest.mark.asyncio
async def test_saving_again_overwrites(client: AsyncClient, church):
    await client.put(_verses_url(church, "/2030-03-15"), json=VERSE, headers=church["pastor_headers"])

    await client.put(
        _verses_url(church, "/2030-03-15"),
        json={"reference": "Psalm 23:1", "text": "The Lord is my shepherd"},
        headers=church["pastor_headers"],
    )

    read = await client.get(_verses_url(church, "/2030-03-15"), headers=church["member_headers"])
    verse = read.json()["verse"]
    assert verse["reference"] == "Psalm 23:1"
    assert verse["reflection"] is None


@pytest.mark.asyncio
async def test_day_without_verse(client: AsyncClient, church):
    response = await client.get(
        _verses_url(church, "/2030-01-01"), headers=church["member_headers"]
    )

    assert response.status_code == 200
    assert response.json()["verse"] is None


@pytest.mark.asyncio
async def test_member_cannot_save_verse(client: AsyncClient, church):
    response = await client.put(
        _verses_url(church, "/2030-03-15"), json=VERSE, headers=church["member_headers"]
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_super_admin_cannot_manage_verses(client: AsyncClient, church, create_user):
    """Verse management is limited to pastors and admins, even inside the church"""
    _, headers = await create_user(UserRole.super_admin, church_id=UUID(church["church_id"]))

    response = await client.put(_verses_url(church, "/2030-03-15"), json=VERSE, headers=headers)

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_outsider_cannot_read_verses(client: AsyncClient, church, create_user):
    _, headers = await create_user(UserRole.member)

    response = await client.get(_verses_url(church, "/calendar/2030/3"), headers=headers)

    assert response.status_code == 403
    assert response.json()["error"]["message"] == "You do not belong to this church"


@pytest.mark.asyncio
async def test_calendar_rejects_out_of_range_month(client: AsyncClient, church):
    response = await client.get(
        _verses_url(church, "/calendar/2030/13"), headers=church["member_headers"]
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_delete_verse(client: AsyncClient, church):
    await client.put(_verses_url(church, "/2030-03-15"), json=VERSE, headers=church["pastor_headers"])

    deleted = await client.delete(
        _verses_url(church, "/2030-03-15"), headers=church["pastor_headers"]
    )
    read = await client.get(_verses_url(church, "/2030-03-15"), headers=church["member_headers"])

    assert deleted.status_code == 200
    assert read.json()["verse"] is None


@pytest.mark.asyncio
async def test_theme_and_auto_generate_settings(client: AsyncClient, church):
    """Settings

    Given no settings exist, defaults are returned
    When I set a weekly theme and enable auto generation
    Then the settings show both and leave the monthly theme empty
    """
    defaults = await client.get(_verses_url(church, "/settings"), headers=church["member_headers"])
    assert defaults.status_code == 200
    assert defaults.json() == {
        "weekly": None,
        "monthly": None,
        "auto_generate": False,
        "preferred_version": "NIV",
    }

    theme = await client.put(
        _verses_url(church, "/settings/theme"),
        json={
            "type": "weekly",
            "theme": "Hope",
            "start_date": "2030-03-10",
            "end_date": "2030-03-16",
            "suggested_verses": ["Romans 15:13"],
        },
        headers=church["pastor_headers"],
    )
    assert theme.status_code == 200

    toggle = await client.put(
        _verses_url(church, "/settings/auto-generate"),
        json={"enabled": True, "preferred_version": "ESV"},
        headers=church["pastor_headers"],
    )
    assert toggle.json() == {"enabled": True}

    settings = (await client.get(
        _verses_url(church, "/settings"), headers=church["member_headers"]
    )).json()
    assert settings["weekly"] == {
        "theme": "Hope",
        "start_date": "2030-03-10",
        "end_date": "2030-03-16",
        "verses": ["Romans 15:13"],
    }
    assert settings["monthly"] is None
    assert settings["auto_generate"] is True
    assert settings["preferred_version"] == "ESV"


@pytest.mark.asyncio
async def test_theme_with_reversed_dates(client: AsyncClient, church):
    response = await client.put(
        _verses_url(church, "/settings/theme"),
        json={
            "type": "monthly",
            "theme": "Grace",
            "start_date": "2030-03-31",
            "end_date": "2030-03-01",
        },
        headers=church["pastor_headers"],
    )

    assert response.status_code == 400
