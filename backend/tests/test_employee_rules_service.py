"""Tests for EmployeeRulesService invariants."""

import pytest

from employee_api.exceptions import (
    EmailAlreadyExistsError,
    EmployeeNotFoundError,
    InvalidManagerError,
    ManagerNotFoundError,
)
from employee_api.services.employee_rules_service import EmployeeRulesService


@pytest.fixture
def rules(db_session) -> EmployeeRulesService:
    return EmployeeRulesService(db_session)


@pytest.fixture
async def org(employee_factory):
    """A (active), B (active, reports to A), C (inactive)."""
    a = await employee_factory(first_name="Anna", email="a@x.com")
    b = await employee_factory(first_name="Ben", email="b@x.com", manager_id=a.id)
    c = await employee_factory(first_name="Cleo", email="c@x.com", is_active=False)
    return a, b, c


class TestValidateManager:
    """Manager references must resolve to active employees."""

    async def test_active_manager_is_returned(self, rules, org) -> None:
        a, _, _ = org
        manager = await rules.validate_manager(a.id)
        assert manager.id == a.id

    async def test_inactive_manager_is_not_found(self, rules, org) -> None:
        _, _, c = org
        with pytest.raises(ManagerNotFoundError) as exc_info:
            await rules.validate_manager(c.id)
        assert exc_info.value.message == f"Manager with id {c.id} is inactive"

    async def test_missing_manager_is_not_found(self, rules, org) -> None:
        with pytest.raises(ManagerNotFoundError) as exc_info:
            await rules.validate_manager(9999)
        assert exc_info.value.message == "Manager not found with id: 9999"


class TestEmailAvailability:
    """Emails are unique across active and inactive employees."""

    async def test_inactive_owner_still_blocks_email(self, rules, org) -> None:
        with pytest.raises(EmailAlreadyExistsError):
            await rules.check_email_available("C@X.COM")

    async def test_free_email_passes(self, rules, org) -> None:
        await rules.check_email_available("new@x.com")

    async def test_own_email_is_ignored(self, rules, org) -> None:
        a, _, _ = org
        await rules.check_email_available("A@x.com", excluding_id=a.id)


class TestRequireActive:
    """Absent and inactive employees both surface as not-found."""

    async def test_active_employee_is_returned(self, rules, org) -> None:
        _, b, _ = org
        employee = await rules.require_active_by_id(b.id)
        assert employee.manager_id == org[0].id

    async def test_missing_employee(self, rules, org) -> None:
        with pytest.raises(EmployeeNotFoundError) as exc_info:
            await rules.require_active_by_id(9999)
        assert exc_info.value.message == "Employee not found with id: 9999"

    @pytest.mark.parametrize(
        "action,expected",
        [
            (None, "Employee with id {id} is inactive"),
            ("update", "Cannot update inactive employee with id: {id}"),
            ("delete", "Employee with id {id} is already inactive"),
        ],
    )
    async def test_inactive_employee_message_names_action(self, rules, org, action, expected) -> None:
        _, _, c = org
        with pytest.raises(EmployeeNotFoundError) as exc_info:
            await rules.require_active_by_id(c.id, action=action)
        assert exc_info.value.message == expected.format(id=c.id)


class TestSelfManagement:
    def test_self_reference_rejected(self) -> None:
        with pytest.raises(InvalidManagerError):
            EmployeeRulesService.validate_not_self_managed(7, 7)

    def test_other_manager_or_none_allowed(self) -> None:
        EmployeeRulesService.validate_not_self_managed(7, 8)
        EmployeeRulesService.validate_not_self_managed(7, None)
