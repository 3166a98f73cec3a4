import asyncio

import pytest

from famspend.actions.family import FamilyActions
from famspend.actions.notify import Notifier
from famspend.core.errors import BackendError, NoFamilyError, ValidationFailure
from famspend.state.family import FamilyState
from famspend.state.session import SessionResolver
from tests.conftest import FakeGateway, context_row, member_row


def _setup(auth, gw):
    state = FamilyState(SessionResolver(auth, gw), gw)
    asyncio.run(state.mount())
    gw.calls.clear()
    notifier = Notifier()
    return state, FamilyActions(gw, state, notifier), notifier


@pytest.fixture
def no_family_gw():
    return FakeGateway({"get_my_context": [context_row(family=False)], "create_family": "f9"})


def test_create_with_limit_updates_then_refetches(auth, no_family_gw):
    state, actions, notifier = _setup(auth, no_family_gw)
    no_family_gw.responses["get_my_context"] = [context_row(family_id="f9", family_name="Smiths")]
    no_family_gw.responses["get_family_members"] = [member_row("u1", "admin")]

    family_id = asyncio.run(actions.create_family("  Smiths ", monthly_spending_limit=1000))

    assert family_id == "f9"
    assert no_family_gw.calls == [
        ("create_family", {"family_name": "Smiths"}),
        ("update_family", {"new_name": None, "new_limit": 1000}),
        ("get_my_context", None),
        ("get_family_members", None),
    ]
    assert [n.message for n in notifier.notifications] == ["Family created successfully!"]
    assert state.family.id == "f9"


def test_create_without_limit_is_a_single_call(auth, no_family_gw):
    state, actions, notifier = _setup(auth, no_family_gw)
    asyncio.run(actions.create_family("Smiths"))

    assert no_family_gw.names()[0] == "create_family"
    assert "update_family" not in no_family_gw.names()


def test_create_reports_failure_when_limit_update_rejects(auth, no_family_gw):
    state, actions, notifier = _setup(auth, no_family_gw)
    no_family_gw.responses["update_family"] = BackendError("limit must be positive", code="P0001")

    with pytest.raises(BackendError):
        asyncio.run(actions.create_family("Smiths", monthly_spending_limit=1000))

    # the family exists server-side; nothing is rolled back and nothing refetched
    assert no_family_gw.names() == ["create_family", "update_family"]
    assert len(notifier.notifications) == 1
    assert notifier.notifications[0].level == "error"
    assert notifier.notifications[0].message == "Failed to update family: limit must be positive"


def test_blank_name_is_rejected_locally(auth, no_family_gw):
    state, actions, notifier = _setup(auth, no_family_gw)

    with pytest.raises(ValidationFailure):
        asyncio.run(actions.create_family("   "))
    assert no_family_gw.calls == []
    assert notifier.notifications == []


def test_regenerate_without_family_fails_fast(auth, no_family_gw):
    state, actions, notifier = _setup(auth, no_family_gw)

    with pytest.raises(NoFamilyError):
        asyncio.run(actions.regenerate_join_code())
    assert no_family_gw.calls == []
    assert notifier.notifications == []


def test_regenerate_returns_new_code_and_refetches(auth, gateway):
    state, actions, notifier = _setup(auth, gateway)
    gateway.responses["regenerate_family_code"] = "NEWCODE"
    gateway.responses["get_my_context"] = [context_row(join_code="NEWCODE")]

    code = asyncio.run(actions.regenerate_join_code())

    assert code == "NEWCODE"
    assert state.family.join_code == "NEWCODE"
    assert gateway.names() == ["regenerate_family_code", "get_my_context", "get_family_members"]


def test_change_role_on_self_is_forwarded_unmodified(auth, gateway):
    state, actions, notifier = _setup(auth, gateway)
    asyncio.run(actions.change_member_role("u1", "member"))

    assert gateway.calls[0] == ("update_member_role", {"target_user_id": "u1", "new_role": "member"})
    assert notifier.notifications[0].message == "Member role updated to member"


def test_kick_failure_is_notified_and_raised(auth, gateway):
    state, actions, notifier = _setup(auth, gateway)
    gateway.responses["kick_member"] = BackendError("Only admins can remove members")

    with pytest.raises(BackendError) as exc:
        asyncio.run(actions.kick_member("u2"))
    assert "Only admins" in exc.value.message
    assert notifier.notifications[0].message == "Failed to remove member: Only admins can remove members"
    assert not actions.is_pending("kick_member")


def test_join_trims_code(auth, no_family_gw):
    state, actions, notifier = _setup(auth, no_family_gw)
    no_family_gw.responses["join_family"] = "f1"
    asyncio.run(actions.join_family("  ABC123 "))

    assert no_family_gw.calls[0] == ("join_family", {"input_join_code": "ABC123"})
    assert notifier.notifications[0].message == "Successfully joined the family!"


def test_update_and_delete_need_a_family(auth, no_family_gw):
    state, actions, notifier = _setup(auth, no_family_gw)

    with pytest.raises(NoFamilyError):
        asyncio.run(actions.update_family(name="New"))
    with pytest.raises(NoFamilyError):
        asyncio.run(actions.delete_family())
    assert no_family_gw.calls == []


def test_leave_refetches_into_empty_state(auth, gateway):
    state, actions, notifier = _setup(auth, gateway)
    gateway.responses["get_my_context"] = [context_row(family=False)]

    asyncio.run(actions.leave_family())

    assert state.family is None
    assert state.members == []
    assert notifier.notifications[0].message == "You have left the family"


def test_pending_flag_is_per_action(auth, gateway):
    state, actions, notifier = _setup(auth, gateway)

    async def run():
        release = asyncio.Event()

        async def slow(args):
            await release.wait()

        gateway.responses["leave_family"] = slow
        task = asyncio.ensure_future(actions.leave_family())
        await asyncio.sleep(0.01)
        during = (actions.is_pending("leave_family"), actions.is_pending("kick_member"))
        release.set()
        await task
        return during

    assert asyncio.run(run()) == (True, False)
    assert actions.is_pending("leave_family") is False
