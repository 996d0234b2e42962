"""
Query by example: probes, matchers and their translation to SQL criteria.

An ``Example`` pairs a probe (a transient, partially populated model
instance) with an ``ExampleMatcher`` describing how the probe's values
turn into WHERE criteria:

    probe = Employee(first_name="john")
    matcher = (
        ExampleMatcher.matching()
        .with_ignore_case()
        .with_string_matcher(StringMatcher.CONTAINING)
    )
    stmt = select(Employee).where(build_criteria(Example.of(probe, matcher)))

Matchers are immutable; every ``with_*`` call returns a new matcher.
Property paths are the model's mapped attribute names.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, Generic, List, Optional, TypeVar, Union

from sqlalchemy import and_, func, or_, true
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import NoInspectionAvailable
from sqlalchemy.sql.elements import ColumnElement

from employee_search.core.exceptions import InvalidExampleError, UnsupportedMatcherError


T = TypeVar("T")

ValueTransformer = Callable[[Any], Any]


class StringMatcher(str, Enum):
    """How a string probe value is compared with the column."""
    DEFAULT = "default"  # same as EXACT
    EXACT = "exact"
    STARTING = "starting"
    ENDING = "ending"
    CONTAINING = "containing"
    REGEX = "regex"


class NullHandler(str, Enum):
    """What a None probe value means."""
    IGNORE = "ignore"
    INCLUDE = "include"  # column IS NULL


class MatchMode(str, Enum):
    """How the per-property criteria are combined."""
    ALL = "all"  # AND
    ANY = "any"  # OR


@dataclass(frozen=True)
class GenericPropertyMatcher:
    """
    Matching options for a single property.

    Unset options (None) fall back to the owning ExampleMatcher's defaults.

    Attributes:
        string_matcher: String comparison to use for this property
        ignore_case: Case-insensitive comparison for this property
        value_transformer: Applied to the probe value before matching;
            returning None drops the value
    """
    string_matcher: Optional[StringMatcher] = None
    ignore_case: Optional[bool] = None
    value_transformer: Optional[ValueTransformer] = None

    @classmethod
    def of(
        cls,
        string_matcher: StringMatcher,
        ignore_case: Optional[bool] = None
    ) -> "GenericPropertyMatcher":
        return cls(string_matcher=string_matcher, ignore_case=ignore_case)

    def exact(self) -> "GenericPropertyMatcher":
        return replace(self, string_matcher=StringMatcher.EXACT)

    def starts_with(self) -> "GenericPropertyMatcher":
        return replace(self, string_matcher=StringMatcher.STARTING)

    def ends_with(self) -> "GenericPropertyMatcher":
        return replace(self, string_matcher=StringMatcher.ENDING)

    def contains(self) -> "GenericPropertyMatcher":
        return replace(self, string_matcher=StringMatcher.CONTAINING)

    def regex(self) -> "GenericPropertyMatcher":
        return replace(self, string_matcher=StringMatcher.REGEX)

    def ignoring_case(self, ignore_case: bool = True) -> "GenericPropertyMatcher":
        return replace(self, ignore_case=ignore_case)

    def case_sensitive(self) -> "GenericPropertyMatcher":
        return replace(self, ignore_case=False)

    def transform(self, transformer: ValueTransformer) -> "GenericPropertyMatcher":
        return replace(self, value_transformer=transformer)


MatcherConfigurer = Callable[[GenericPropertyMatcher], GenericPropertyMatcher]


@dataclass(frozen=True)
class ExampleMatcher:
    """
    Immutable configuration for turning a probe into criteria.

    Defaults (``ExampleMatcher.matching()``): all criteria must hold,
    None values are ignored, strings match exactly and case-sensitively.
    """
    match_mode: MatchMode = MatchMode.ALL
    null_handler: NullHandler = NullHandler.IGNORE
    default_string_matcher: StringMatcher = StringMatcher.DEFAULT
    default_ignore_case: bool = False
    ignored_paths: FrozenSet[str] = frozenset()
    ignore_case_paths: FrozenSet[str] = frozenset()
    property_specifiers: Dict[str, GenericPropertyMatcher] = field(default_factory=dict, hash=False)

    @classmethod
    def matching(cls) -> "ExampleMatcher":
        return cls.matching_all()

    @classmethod
    def matching_all(cls) -> "ExampleMatcher":
        return cls(match_mode=MatchMode.ALL)

    @classmethod
    def matching_any(cls) -> "ExampleMatcher":
        return cls(match_mode=MatchMode.ANY)

    def with_ignore_case(self, *paths: str) -> "ExampleMatcher":
        """Ignore case for the given paths, or by default when none are given."""
        if not paths:
            return replace(self, default_ignore_case=True)
        return replace(self, ignore_case_paths=self.ignore_case_paths | frozenset(paths))

    def with_string_matcher(self, string_matcher: StringMatcher) -> "ExampleMatcher":
        return replace(self, default_string_matcher=string_matcher)

    def with_null_handler(self, null_handler: NullHandler) -> "ExampleMatcher":
        return replace(self, null_handler=null_handler)

    def with_ignore_null_values(self) -> "ExampleMatcher":
        return self.with_null_handler(NullHandler.IGNORE)

    def with_include_null_values(self) -> "ExampleMatcher":
        return self.with_null_handler(NullHandler.INCLUDE)

    def with_ignore_paths(self, *paths: str) -> "ExampleMatcher":
        return replace(self, ignored_paths=self.ignored_paths | frozenset(paths))

    def with_matcher(
        self,
        path: str,
        spec: Union[GenericPropertyMatcher, MatcherConfigurer]
    ) -> "ExampleMatcher":
        """
        Configure matching for one property.

        Args:
            path: Mapped attribute name
            spec: A GenericPropertyMatcher, or a callable that receives a
                fresh GenericPropertyMatcher and returns the configured one

        Example:
            matcher.with_matcher("first_name", lambda m: m.exact().ignoring_case())
        """
        if not isinstance(spec, GenericPropertyMatcher):
            spec = spec(GenericPropertyMatcher())
        specifiers = dict(self.property_specifiers)
        specifiers[path] = spec
        return replace(self, property_specifiers=specifiers)

    def with_transformer(self, path: str, transformer: ValueTransformer) -> "ExampleMatcher":
        current = self.property_specifiers.get(path, GenericPropertyMatcher())
        return self.with_matcher(path, current.transform(transformer))

    @property
    def is_ignore_case_enabled(self) -> bool:
        return self.default_ignore_case

    def is_all_matching(self) -> bool:
        return self.match_mode is MatchMode.ALL

    def is_any_matching(self) -> bool:
        return self.match_mode is MatchMode.ANY

    def is_ignored_path(self, path: str) -> bool:
        return path in self.ignored_paths

    def property_specifier(self, path: str) -> Optional[GenericPropertyMatcher]:
        return self.property_specifiers.get(path)

    def string_matcher_for(self, path: str) -> StringMatcher:
        spec = self.property_specifiers.get(path)
        if spec is not None and spec.string_matcher is not None:
            return spec.string_matcher
        return self.default_string_matcher

    def ignore_case_for(self, path: str) -> bool:
        spec = self.property_specifiers.get(path)
        if spec is not None and spec.ignore_case is not None:
            return spec.ignore_case
        if path in self.ignore_case_paths:
            return True
        return self.default_ignore_case

    def configured_paths(self) -> FrozenSet[str]:
        return self.ignored_paths | self.ignore_case_paths | frozenset(self.property_specifiers)


@dataclass(frozen=True)
class Example(Generic[T]):
    """A probe plus the matcher that says how to compare it."""
    probe: T
    matcher: ExampleMatcher = field(default_factory=ExampleMatcher.matching)

    @classmethod
    def of(cls, probe: T, matcher: Optional[ExampleMatcher] = None) -> "Example[T]":
        if probe is None:
            raise InvalidExampleError("Probe must not be None")
        return cls(probe=probe, matcher=matcher or ExampleMatcher.matching())

    @property
    def probe_type(self) -> type:
        return type(self.probe)


def _string_criterion(
    column: Any,
    value: str,
    string_matcher: StringMatcher,
    ignore_case: bool,
    path: str
) -> ColumnElement[bool]:
    if string_matcher in (StringMatcher.DEFAULT, StringMatcher.EXACT):
        if ignore_case:
            return func.lower(column) == func.lower(value)
        return column == value
    if string_matcher is StringMatcher.STARTING:
        if ignore_case:
            return column.istartswith(value, autoescape=True)
        return column.startswith(value, autoescape=True)
    if string_matcher is StringMatcher.ENDING:
        if ignore_case:
            return column.iendswith(value, autoescape=True)
        return column.endswith(value, autoescape=True)
    if string_matcher is StringMatcher.CONTAINING:
        if ignore_case:
            return column.icontains(value, autoescape=True)
        return column.contains(value, autoescape=True)
    raise UnsupportedMatcherError(
        f"String matcher {string_matcher.name} is not supported for property '{path}'"
    )


def collect_criteria(example: Example) -> List[ColumnElement[bool]]:
    """
    Translate an example into one criterion per contributing property.

    Raises:
        InvalidExampleError: If the probe is not a mapped model instance or
            the matcher names a property the model does not have
        UnsupportedMatcherError: If a string property uses REGEX
    """
    model = example.probe_type
    try:
        mapper = sa_inspect(model)
    except NoInspectionAvailable:
        raise InvalidExampleError(f"{model.__name__} is not a mapped model")

    known_paths = {attr.key for attr in mapper.column_attrs}
    unknown = example.matcher.configured_paths() - known_paths
    if unknown:
        raise InvalidExampleError(
            f"Unknown propert{'y' if len(unknown) == 1 else 'ies'} for "
            f"{model.__name__}: {', '.join(sorted(unknown))}"
        )

    matcher = example.matcher
    criteria: List[ColumnElement[bool]] = []

    for attr in mapper.column_attrs:
        path = attr.key
        if matcher.is_ignored_path(path):
            continue

        column = getattr(model, path)
        value = getattr(example.probe, path)

        spec = matcher.property_specifier(path)
        if spec is not None and spec.value_transformer is not None:
            value = spec.value_transformer(value)

        if value is None:
            if matcher.null_handler is NullHandler.INCLUDE:
                criteria.append(column.is_(None))
            continue

        if isinstance(value, str):
            criteria.append(
                _string_criterion(
                    column,
                    value,
                    matcher.string_matcher_for(path),
                    matcher.ignore_case_for(path),
                    path,
                )
            )
        else:
            criteria.append(column == value)

    return criteria


def combine_criteria(
    criteria: List[ColumnElement[bool]],
    match_mode: MatchMode
) -> ColumnElement[bool]:
    """AND/OR the criteria together; no criteria matches every row."""
    if not criteria:
        return true()
    if match_mode is MatchMode.ANY:
        return or_(*criteria)
    return and_(*criteria)


def build_criteria(example: Example) -> ColumnElement[bool]:
    """Single WHERE clause for an example."""
    return combine_criteria(collect_criteria(example), example.matcher.match_mode)
