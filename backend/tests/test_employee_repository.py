"""Tests for EmployeeRepository query building."""

from datetime import date
from decimal import Decimal

import pytest

from employee_api.exceptions import InvalidSortFieldError
from employee_api.repositories.employee_repository import EmployeeRepository


@pytest.fixture
def repo(db_session) -> EmployeeRepository:
    return EmployeeRepository(db_session)


@pytest.fixture
async def staff(employee_factory):
    """Five employees across two departments, one inactive."""
    return {
        "alice": await employee_factory(
            first_name="Alice", last_name="Smith", email="alice@example.com",
            department="Engineering", position="Engineer", salary=Decimal("90000.00"),
            hire_date=date(2019, 5, 1),
        ),
        "bob": await employee_factory(
            first_name="Bob", last_name="Jones", email="bob@example.com",
            department="Sales", position="Account Executive", salary=Decimal("60000.00"),
            hire_date=date(2021, 2, 1),
        ),
        "carol": await employee_factory(
            first_name="Carol", last_name="Smith", email="carol@example.com",
            department="engineering", position="Manager", salary=None,
            hire_date=date(2022, 8, 1),
        ),
        "dave": await employee_factory(
            first_name="Dave", last_name="Brown", email="dave@example.com",
            department="Sales", position="Engineer", salary=Decimal("75000.00"),
            hire_date=date(2023, 1, 1),
        ),
        "erin": await employee_factory(
            first_name="Erin", last_name="Gone", email="erin@example.com",
            department="Engineering", position="Engineer", is_active=False,
        ),
    }


class TestSearch:
    """Filtered, sorted and paged search."""

    async def test_no_filters_returns_active_only(self, repo, staff) -> None:
        employees, total = await repo.search()

        assert total == 4
        assert staff["erin"].id not in {e.id for e in employees}

    async def test_search_term_is_case_insensitive_substring(self, repo, staff) -> None:
        employees, total = await repo.search(search_term="SMI")

        assert total == 2
        assert {e.first_name for e in employees} == {"Alice", "Carol"}

    async def test_search_term_matches_email_department_and_position(self, repo, staff) -> None:
        _, by_email = await repo.search(search_term="bob@")
        _, by_department = await repo.search(search_term="sal")
        _, by_position = await repo.search(search_term="account")

        assert by_email == 1
        assert by_department == 2
        assert by_position == 1

    async def test_blank_search_term_is_ignored(self, repo, staff) -> None:
        _, total = await repo.search(search_term="   ")
        assert total == 4

    async def test_department_is_exact_and_case_insensitive(self, repo, staff) -> None:
        employees, total = await repo.search(department="ENGINEERING")

        assert total == 2
        assert {e.first_name for e in employees} == {"Alice", "Carol"}

        _, partial = await repo.search(department="Engineer")
        assert partial == 0

    async def test_filters_combine_with_and(self, repo, staff) -> None:
        employees, total = await repo.search(department="sales", position="engineer")

        assert total == 1
        assert employees[0].first_name == "Dave"

    async def test_inactive_never_matches_filters(self, repo, staff) -> None:
        _, total = await repo.search(search_term="erin")
        assert total == 0

    async def test_default_sort_is_last_name_ascending(self, repo, staff) -> None:
        employees, _ = await repo.search()
        assert [e.first_name for e in employees] == ["Dave", "Bob", "Alice", "Carol"]

    async def test_sort_descending(self, repo, staff) -> None:
        employees, _ = await repo.search(sort_by="hireDate", sort_direction="desc")
        assert [e.first_name for e in employees] == ["Dave", "Carol", "Bob", "Alice"]

    async def test_unknown_direction_sorts_ascending(self, repo, staff) -> None:
        employees, _ = await repo.search(sort_by="hire_date", sort_direction="sideways")
        assert [e.first_name for e in employees] == ["Alice", "Bob", "Carol", "Dave"]

    async def test_null_salaries_sort_last_both_ways(self, repo, staff) -> None:
        ascending, _ = await repo.search(sort_by="salary", sort_direction="ASC")
        descending, _ = await repo.search(sort_by="salary", sort_direction="DESC")

        assert ascending[-1].first_name == "Carol"
        assert descending[-1].first_name == "Carol"
        assert [e.first_name for e in descending[:3]] == ["Alice", "Dave", "Bob"]

    async def test_invalid_sort_field_raises(self, repo, staff) -> None:
        with pytest.raises(InvalidSortFieldError):
            await repo.search(sort_by="password")

    async def test_paging(self, repo, staff) -> None:
        first, total = await repo.search(page=0, size=3)
        second, _ = await repo.search(page=1, size=3)

        assert total == 4
        assert len(first) == 3
        assert len(second) == 1
        assert {e.id for e in first}.isdisjoint({e.id for e in second})

    async def test_page_past_the_end_is_empty_with_total(self, repo, staff) -> None:
        employees, total = await repo.search(page=5, size=2)

        assert employees == []
        assert total == 4

    async def test_offset_beyond_integer_range_is_empty(self, repo, staff) -> None:
        employees, total = await repo.search(page=10**19, size=200)

        assert employees == []
        assert total == 4

    async def test_huge_page_on_empty_table(self, db_session) -> None:
        employees, total = await EmployeeRepository(db_session).search(page=10**18)

        assert employees == []
        assert total == 0


class TestFinders:
    """Single-criterion list queries."""

    async def test_find_active_excludes_inactive(self, repo, staff) -> None:
        employees = await repo.find_active()
        assert [e.last_name for e in employees] == ["Brown", "Jones", "Smith", "Smith"]

    async def test_find_by_department(self, repo, staff) -> None:
        employees = await repo.find_by_department("sales")
        assert {e.first_name for e in employees} == {"Bob", "Dave"}

    async def test_find_by_position(self, repo, staff) -> None:
        employees = await repo.find_by_position("ENGINEER")
        assert {e.first_name for e in employees} == {"Alice", "Dave"}

    async def test_find_by_manager_and_top_level(self, repo, employee_factory) -> None:
        boss = await employee_factory(first_name="Boss")
        report = await employee_factory(first_name="Report", manager_id=boss.id)
        await employee_factory(first_name="Former", manager_id=boss.id, is_active=False)

        reports = await repo.find_by_manager(boss.id)
        top_level = await repo.find_top_level()

        assert [e.id for e in reports] == [report.id]
        assert [e.id for e in top_level] == [boss.id]

    async def test_find_hired_between_is_inclusive(self, repo, staff) -> None:
        employees = await repo.find_hired_between(date(2019, 5, 1), date(2021, 2, 1))
        assert {e.first_name for e in employees} == {"Alice", "Bob"}

    async def test_find_by_salary_range_skips_missing_salary(self, repo, staff) -> None:
        employees = await repo.find_by_salary_range(Decimal("0"), Decimal("1000000"))
        assert "Carol" not in {e.first_name for e in employees}
        assert len(employees) == 3

    async def test_search_by_name_matches_full_name(self, repo, staff) -> None:
        employees = await repo.search_by_name("bob jon")
        assert [e.first_name for e in employees] == ["Bob"]


class TestAggregates:
    """Distinct values and counts over active employees."""

    async def test_distinct_departments_are_sorted(self, repo, staff) -> None:
        departments = await repo.get_distinct_departments()
        assert departments == ["Engineering", "Sales", "engineering"]

    async def test_distinct_positions(self, repo, staff) -> None:
        positions = await repo.get_distinct_positions()
        assert positions == ["Account Executive", "Engineer", "Manager"]

    async def test_count_by_department(self, repo, staff) -> None:
        counts = await repo.count_by_department()
        assert counts == {"Engineering": 1, "Sales": 2, "engineering": 1}


class TestEmailExists:
    """Email uniqueness checks see inactive rows too."""

    async def test_case_insensitive(self, repo, staff) -> None:
        assert await repo.email_exists("ALICE@example.com") is True
        assert await repo.email_exists("nobody@example.com") is False

    async def test_includes_inactive(self, repo, staff) -> None:
        assert await repo.email_exists("erin@example.com") is True

    async def test_excluding_own_id(self, repo, staff) -> None:
        alice = staff["alice"]
        assert await repo.email_exists("alice@example.com", exclude_id=alice.id) is False
        assert await repo.email_exists("alice@example.com", exclude_id=staff["bob"].id) is True
