"""
End-to-end tests through the DataPortal facade.
"""

import pytest

from portal.api import DataPortal
from portal.domain.errors import InvalidCredentialsError, PortalError
from portal.domain.models import PortalOptions
from portal.services.latency import SimulatedLatency


@pytest.mark.asyncio
async def test_login_dashboard_toggle_logout(portal):
    await portal.login("john@company.com", "demo123")
    session = await portal.get_current_session()

    view = await portal.open_dashboard(session)
    assert view.stats.total_items == 5

    await view.toggle("john_1", True)
    trail = await portal.get_audit_trail("john_1")
    assert len(trail) == 1
    assert trail[0].checked is True

    await portal.logout()
    assert await portal.get_current_user() is None


@pytest.mark.asyncio
async def test_new_user_has_empty_dashboard(portal):
    await portal.register("alice@x.com", "secret1")
    session = await portal.get_current_session()
    view = await portal.open_dashboard(session)
    assert view.items == []
    assert view.stats.completion_rate == 0


@pytest.mark.asyncio
async def test_state_survives_new_portal_instance(store, options):
    first = DataPortal(store=store, options=options)
    await first.register("alice@x.com", "secret1")
    await first.set_state("mike@company.com", "mike_2", True)

    second = DataPortal(store=store, options=options)
    assert (await second.get_current_user()).email == "alice@x.com"
    assert (await second.get_states_for_user("mike@company.com"))["mike_2"].checked is True
    with pytest.raises(InvalidCredentialsError):
        await second.login("alice@x.com", "secret2")


@pytest.mark.asyncio
async def test_logs_and_query_through_facade(portal):
    await portal.set_state("john@company.com", "john_1", True)
    await portal.set_state("sarah@company.com", "sarah_1", True)

    assert len(await portal.get_logs()) == 2
    assert len(await portal.get_logs("sarah@company.com")) == 1
    assert len(await portal.get_history()) == 2
    assert len(await portal.run_query("anything", "sarah@company.com")) == 5
    assert len(await portal.get_all_items()) == 15


@pytest.mark.asyncio
async def test_latency_is_scaled():
    slept = []

    async def fake_sleep(seconds):
        slept.append(seconds)

    await SimulatedLatency(0.0, sleep=fake_sleep).wait(1.0)
    assert slept == []

    await SimulatedLatency(0.5, sleep=fake_sleep).wait(1.0)
    assert slept == [0.5]


@pytest.mark.asyncio
async def test_services_wait_for_latency(store):
    slept = []

    async def fake_sleep(seconds):
        slept.append(seconds)

    portal = DataPortal(store=store, options=PortalOptions(latency_scale=1.0, bcrypt_rounds=4))
    portal.auth.latency = SimulatedLatency(1.0, sleep=fake_sleep)
    portal.catalog.latency = SimulatedLatency(1.0, sleep=fake_sleep)
    await portal.login("john@company.com", "demo123")
    await portal.get_user_items("john@company.com")
    assert slept == [1.0, 0.8]


@pytest.mark.asyncio
async def test_bad_registration_surfaces_as_portal_error(portal):
    with pytest.raises(PortalError):
        await portal.register("", "secret1")
