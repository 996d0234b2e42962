"""
Integration tests for EmployeeRepository example queries.

Runs against the demo dataset in an in-memory SQLite database.
Tests follow AAA pattern (Arrange, Act, Assert).
"""

from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from employee_search.core.exceptions import (
    IncorrectResultSizeError,
    InvalidExampleError,
    UnsupportedMatcherError,
)
from employee_search.models.employee import Employee
from employee_search.repositories.employee import EmployeeRepository
from employee_search.repositories.example import (
    Example,
    ExampleMatcher,
    StringMatcher,
)
from employee_search.services.employee_seeder import DEMO_EMPLOYEES


class TestFindAllByExample:
    """Tests for find_all with the default and custom matchers."""

    @pytest.mark.anyio
    async def test_find_all_it_developers(self, seeded_session: AsyncSession):
        """
        Test exact match on department and position.

        Arrange: Probe with department IT and position Developer
        Act: find_all with default matcher
        Assert: Jane Doe and Mike Johnson only
        """
        # Arrange
        repo = EmployeeRepository(seeded_session)
        probe = Employee(department="IT", position="Developer")

        # Act
        developers = await repo.find_all(Example.of(probe))

        # Assert
        assert len(developers) == 2
        assert {e.first_name for e in developers} == {"Jane", "Mike"}
        assert {e.last_name for e in developers} == {"Doe", "Johnson"}
        for dev in developers:
            assert dev.department == "IT"
            assert dev.position == "Developer"

    @pytest.mark.anyio
    async def test_find_all_smiths(self, seeded_session: AsyncSession):
        """Test exact match on last name returns every Smith."""
        # Arrange
        repo = EmployeeRepository(seeded_session)

        # Act
        smiths = await repo.find_all(Example.of(Employee(last_name="Smith")))

        # Assert
        assert sorted(e.first_name for e in smiths) == ["Anna", "John", "Robert", "Thomas"]
        assert all(e.last_name == "Smith" for e in smiths)

    @pytest.mark.anyio
    async def test_find_all_john_variations_ignoring_case(self, seeded_session: AsyncSession):
        """
        Test case-insensitive containment on first name.

        Arrange: Lower-case "john" probe, ignore-case CONTAINING matcher
        Act: find_all
        Assert: John and Johnny
        """
        # Arrange
        repo = EmployeeRepository(seeded_session)
        matcher = (
            ExampleMatcher.matching()
            .with_ignore_case()
            .with_string_matcher(StringMatcher.CONTAINING)
        )

        # Act
        johns = await repo.find_all(Example.of(Employee(first_name="john"), matcher))

        # Assert
        assert sorted(e.first_name for e in johns) == ["John", "Johnny"]
        assert all("john" in e.first_name.lower() for e in johns)

    @pytest.mark.anyio
    async def test_exact_ignoring_case_finds_non_ascii_name(self, async_session: AsyncSession):
        """
        Test case-insensitive exact match on a stored accented name.

        Arrange: Save ÉMILE Zola and Jean Valjean
        Act: find_all with the identical and a mixed-case probe
        Assert: ÉMILE is found by both, count agrees
        """
        # Arrange
        repo = EmployeeRepository(async_session)
        await repo.save_all([
            Employee(
                first_name="ÉMILE",
                last_name="Zola",
                department="Editorial",
                position="Writer",
                salary=Decimal("64000.00"),
            ),
            Employee(
                first_name="Jean",
                last_name="Valjean",
                department="Operations",
                position="Mayor",
                salary=Decimal("71000.00"),
            ),
        ])
        matcher = ExampleMatcher.matching().with_ignore_case()

        # Act
        identical = await repo.find_all(Example.of(Employee(first_name="ÉMILE"), matcher))
        mixed_case = await repo.find_all(Example.of(Employee(first_name="Émile"), matcher))
        count = await repo.count(Example.of(Employee(first_name="ÉMILE"), matcher))

        # Assert
        assert [e.last_name for e in identical] == ["Zola"]
        assert [e.last_name for e in mixed_case] == ["Zola"]
        assert count == 1

    @pytest.mark.anyio
    async def test_containing_is_case_sensitive_by_default(self, seeded_session: AsyncSession):
        """Test CONTAINING without ignore-case does not match different case."""
        # Arrange
        repo = EmployeeRepository(seeded_session)
        matcher = ExampleMatcher.matching().with_string_matcher(StringMatcher.CONTAINING)

        # Act
        results = await repo.find_all(Example.of(Employee(first_name="john"), matcher))

        # Assert
        assert results == []

    @pytest.mark.anyio
    async def test_find_all_managers(self, seeded_session: AsyncSession):
        """Test every Manager across departments is found."""
        # Arrange
        repo = EmployeeRepository(seeded_session)

        # Act
        managers = await repo.find_all(Example.of(Employee(position="Manager")))

        # Assert
        assert sorted(e.department for e in managers) == ["HR", "Marketing", "Operations", "Sales"]
        assert all(e.position == "Manager" for e in managers)

    @pytest.mark.anyio
    async def test_find_engineers_with_complex_matcher(self, seeded_session: AsyncSession):
        """Test containment matcher across two properties."""
        # Arrange
        repo = EmployeeRepository(seeded_session)
        probe = Employee(department="Engineering", position="Engineer")
        matcher = (
            ExampleMatcher.matching()
            .with_ignore_case()
            .with_string_matcher(StringMatcher.CONTAINING)
            .with_ignore_null_values()
        )

        # Act
        engineers = await repo.find_all(Example.of(probe, matcher))

        # Assert
        assert len(engineers) == 4
        for engineer in engineers:
            assert engineer.department == "Engineering"
            assert "Engineer" in engineer.position

    @pytest.mark.anyio
    async def test_no_matches_for_non_existent_criteria(self, seeded_session: AsyncSession):
        """Test unknown values produce an empty list."""
        # Arrange
        repo = EmployeeRepository(seeded_session)
        probe = Employee(department="Non-Existent", position="Imaginary Position")

        # Act
        results = await repo.find_all(Example.of(probe))

        # Assert
        assert results == []

    @pytest.mark.anyio
    async def test_null_values_in_probe_are_ignored(self, seeded_session: AsyncSession):
        """
        Test None fields do not constrain the query.

        Arrange: Probe with only department set, others explicitly None
        Act: find_all with ignore-null matcher
        Assert: Every IT employee is returned
        """
        # Arrange
        repo = EmployeeRepository(seeded_session)
        probe = Employee(department="IT", first_name=None, last_name=None, position=None)
        matcher = ExampleMatcher.matching().with_ignore_null_values()

        # Act
        it_employees = await repo.find_all(Example.of(probe, matcher))

        # Assert
        all_employees = await repo.find_all()
        expected = [e for e in all_employees if e.department == "IT"]
        assert it_employees
        assert all(e.department == "IT" for e in it_employees)
        assert len(it_employees) == len(expected)

    @pytest.mark.anyio
    async def test_custom_per_property_matcher(self, seeded_session: AsyncSession):
        """
        Test exact, case-insensitive per-property matchers.

        Arrange: Upper/lower-cased probe values, exact matchers per property
        Act: find_all
        Assert: Only John Smith from IT
        """
        # Arrange
        repo = EmployeeRepository(seeded_session)
        probe = Employee(first_name="JOHN", department="it")
        matcher = (
            ExampleMatcher.matching()
            .with_ignore_case()
            .with_matcher("first_name", lambda m: m.exact())
            .with_matcher("department", lambda m: m.exact())
            .with_ignore_null_values()
        )

        # Act
        matches = await repo.find_all(Example.of(probe, matcher))

        # Assert
        assert len(matches) == 1
        assert matches[0].first_name.lower() == "john"
        assert matches[0].department.lower() == "it"

    @pytest.mark.anyio
    async def test_starting_and_ending_matchers(self, seeded_session: AsyncSession):
        """Test STARTING on one property and ENDING on another."""
        # Arrange
        repo = EmployeeRepository(seeded_session)
        probe = Employee(first_name="Jo", position="Engineer")
        matcher = (
            ExampleMatcher.matching()
            .with_matcher("first_name", lambda m: m.starts_with())
            .with_matcher("position", lambda m: m.ends_with())
        )

        # Act
        results = await repo.find_all(Example.of(probe, matcher))

        # Assert
        assert [(e.first_name, e.position) for e in results] == [("Johnny", "Software Engineer")]

    @pytest.mark.anyio
    async def test_like_wildcards_in_probe_are_escaped(self, seeded_session: AsyncSession):
        """Test % in a probe value is matched literally."""
        # Arrange
        repo = EmployeeRepository(seeded_session)
        matcher = ExampleMatcher.matching().with_string_matcher(StringMatcher.CONTAINING)

        # Act
        results = await repo.find_all(Example.of(Employee(department="%"), matcher))

        # Assert
        assert results == []

    @pytest.mark.anyio
    async def test_match_any(self, seeded_session: AsyncSession):
        """Test ANY mode ORs the criteria."""
        # Arrange
        repo = EmployeeRepository(seeded_session)
        probe = Employee(department="HR", position="Analyst")

        # Act
        results = await repo.find_all(Example.of(probe, ExampleMatcher.matching_any()))

        # Assert
        assert sorted(e.first_name for e in results) == ["Kevin", "Sarah"]

    @pytest.mark.anyio
    async def test_ignored_paths_do_not_constrain(self, seeded_session: AsyncSession):
        """Test a populated but ignored property contributes no criterion."""
        # Arrange
        repo = EmployeeRepository(seeded_session)
        probe = Employee(department="IT", position="Nobody")
        matcher = ExampleMatcher.matching().with_ignore_paths("position")

        # Act
        results = await repo.find_all(Example.of(probe, matcher))

        # Assert
        assert len(results) == 3

    @pytest.mark.anyio
    async def test_value_transformer(self, seeded_session: AsyncSession):
        """Test a transformer rewrites the probe value before matching."""
        # Arrange
        repo = EmployeeRepository(seeded_session)
        matcher = ExampleMatcher.matching().with_transformer(
            "department", lambda v: v.strip() if v else v
        )

        # Act
        results = await repo.find_all(Example.of(Employee(department="  Finance  "), matcher))

        # Assert
        assert [e.first_name for e in results] == ["Kevin"]

    @pytest.mark.anyio
    async def test_non_string_property_matches_exactly(self, seeded_session: AsyncSession):
        """Test Decimal salary is compared with equality."""
        # Arrange
        repo = EmployeeRepository(seeded_session)
        matcher = ExampleMatcher.matching().with_string_matcher(StringMatcher.CONTAINING)

        # Act
        results = await repo.find_all(Example.of(Employee(salary=Decimal("85000.00")), matcher))

        # Assert
        assert [e.first_name for e in results] == ["Jane"]

    @pytest.mark.anyio
    async def test_include_null_values(self, seeded_session: AsyncSession):
        """Test INCLUDE null handler adds IS NULL criteria."""
        # Arrange
        repo = EmployeeRepository(seeded_session)
        matcher = ExampleMatcher.matching().with_include_null_values()

        # Act
        results = await repo.find_all(Example.of(Employee(department="IT"), matcher))

        # Assert
        # Every column is NOT NULL, so IS NULL on the others matches nothing
        assert results == []

    @pytest.mark.anyio
    async def test_empty_probe_returns_everything(self, seeded_session: AsyncSession):
        """Test a probe with no values matches every row, ordered by id."""
        # Arrange
        repo = EmployeeRepository(seeded_session)

        # Act
        results = await repo.find_all(Example.of(Employee()))

        # Assert
        assert len(results) == len(DEMO_EMPLOYEES)
        assert [e.id for e in results] == sorted(e.id for e in results)

    @pytest.mark.anyio
    async def test_regex_matcher_is_unsupported(self, seeded_session: AsyncSession):
        """Test REGEX raises UnsupportedMatcherError."""
        # Arrange
        repo = EmployeeRepository(seeded_session)
        matcher = ExampleMatcher.matching().with_string_matcher(StringMatcher.REGEX)

        # Act & Assert
        with pytest.raises(UnsupportedMatcherError):
            await repo.find_all(Example.of(Employee(first_name="^J"), matcher))

    @pytest.mark.anyio
    async def test_unknown_property_path_rejected(self, seeded_session: AsyncSession):
        """Test matcher configured for a missing property raises InvalidExampleError."""
        # Arrange
        repo = EmployeeRepository(seeded_session)
        matcher = ExampleMatcher.matching().with_ignore_paths("firstName")

        # Act & Assert
        with pytest.raises(InvalidExampleError) as exc_info:
            await repo.find_all(Example.of(Employee(department="IT"), matcher))

        assert "firstName" in str(exc_info.value)


class TestSingleResultQueries:
    """Tests for find_one, exists and count."""

    @pytest.mark.anyio
    async def test_find_single_employee_by_exact_match(self, seeded_session: AsyncSession):
        """
        Test exists and find_one on a fully specified probe.

        Arrange: Probe with four populated fields
        Act: exists and find_one
        Assert: Exactly Jane Doe
        """
        # Arrange
        repo = EmployeeRepository(seeded_session)
        example = Example.of(
            Employee(first_name="Jane", last_name="Doe", department="IT", position="Developer")
        )

        # Act
        exists = await repo.exists(example)
        employee = await repo.find_one(example)

        # Assert
        assert exists is True
        assert employee is not None
        assert employee.first_name == "Jane"
        assert employee.last_name == "Doe"
        assert employee.department == "IT"
        assert employee.position == "Developer"

    @pytest.mark.anyio
    async def test_find_one_returns_none_when_nothing_matches(self, seeded_session: AsyncSession):
        """Test find_one with no matching row."""
        # Arrange
        repo = EmployeeRepository(seeded_session)

        # Act
        employee = await repo.find_one(Example.of(Employee(first_name="Nobody")))

        # Assert
        assert employee is None

    @pytest.mark.anyio
    async def test_find_one_raises_on_multiple_matches(self, seeded_session: AsyncSession):
        """Test find_one with several matches raises IncorrectResultSizeError."""
        # Arrange
        repo = EmployeeRepository(seeded_session)

        # Act & Assert
        with pytest.raises(IncorrectResultSizeError) as exc_info:
            await repo.find_one(Example.of(Employee(last_name="Smith")))

        assert exc_info.value.expected_size == 1
        assert exc_info.value.actual_size == 4

    @pytest.mark.anyio
    async def test_exists_false(self, seeded_session: AsyncSession):
        """Test exists returns False when nothing matches."""
        # Arrange
        repo = EmployeeRepository(seeded_session)

        # Act
        exists = await repo.exists(Example.of(Employee(department="Non-Existent")))

        # Assert
        assert exists is False

    @pytest.mark.anyio
    async def test_count_by_example(self, seeded_session: AsyncSession):
        """Test count for a department and for all rows."""
        # Arrange
        repo = EmployeeRepository(seeded_session)

        # Act
        engineering = await repo.count(Example.of(Employee(department="Engineering")))
        total = await repo.count()

        # Assert
        assert engineering == 4
        assert total == len(DEMO_EMPLOYEES)


class TestCrudOperations:
    """Tests for save, save_all and get."""

    @pytest.mark.anyio
    async def test_save_assigns_id(self, async_session: AsyncSession):
        """Test save flushes and populates the primary key."""
        # Arrange
        repo = EmployeeRepository(async_session)
        employee = Employee(
            first_name="Grace",
            last_name="Hopper",
            department="Research",
            position="Scientist",
            salary=Decimal("120000.00"),
        )

        # Act
        saved = await repo.save(employee)
        fetched = await repo.get(saved.id)

        # Assert
        assert saved.id is not None
        assert fetched is not None
        assert fetched.last_name == "Hopper"
        assert fetched.salary == Decimal("120000.00")

    @pytest.mark.anyio
    async def test_probe_of_wrong_type_rejected(self, async_session: AsyncSession):
        """Test an example of a non-Employee probe is rejected."""
        # Arrange
        repo = EmployeeRepository(async_session)

        class NotAnEmployee:
            pass

        # Act & Assert
        with pytest.raises(InvalidExampleError):
            await repo.find_all(Example.of(NotAnEmployee()))
