"""Rule filter construction from caller-supplied conditions.

This module turns an ordered list of ``(field, pattern)`` pairs into a
``RuleFilter``. Every pair is checked so a caller can report all
problems at once; the filter is only produced when no pair failed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

from core.data_category import DataCategoryField
from core.errors import InvalidPatternError, UnknownFieldError
from core.logging_config import get_logger
from core.vocabulary import Vocabulary
from rules.matchers import Matcher, NumericMatcher, RegexMatcher, new_matcher
from rules.rule_filter import RuleFilter
from rules.rule_matcher import RuleMatcher

_LOGGER = get_logger(__name__)

FieldRef = Union[DataCategoryField, str]
Condition = tuple[FieldRef, str]


@dataclass(frozen=True)
class ConditionProblem:
    """One rejected condition.

    Attributes:
        index: Zero-based position of the condition in the input list.
        field_name: Field name as supplied or resolved.
        reason: Human-readable rejection reason.
    """

    index: int
    field_name: str
    reason: str


@dataclass(frozen=True)
class RuleFilterBuildResult:
    """Outcome of building a rule filter.

    Attributes:
        rule_filter: Built filter, or None when any condition was rejected.
        problems: Every rejected condition, in input order.
    """

    rule_filter: RuleFilter | None
    problems: tuple[ConditionProblem, ...]

    @property
    def ok(self) -> bool:
        """Whether every condition was accepted."""
        return not self.problems

    def require(self) -> RuleFilter:
        """Return the built filter or raise with every problem listed.

        Raises:
            InvalidPatternError: If any condition was rejected.
        """
        if self.rule_filter is None:
            details = "; ".join(
                f"#{problem.index + 1} {problem.field_name}: {problem.reason}"
                for problem in self.problems
            )
            raise InvalidPatternError(f"Rule filter has invalid conditions: {details}")
        return self.rule_filter


def resolve_field(field_ref: FieldRef) -> DataCategoryField:
    """Resolve a field enum member, enum name, or display name.

    Raises:
        UnknownFieldError: If the reference names no known field.
    """
    if isinstance(field_ref, DataCategoryField):
        return field_ref
    if not isinstance(field_ref, str):
        raise UnknownFieldError(f"Field reference must be a string, got {type(field_ref).__name__}.")
    normalized = field_ref.strip()
    for data_field in DataCategoryField:
        if normalized.upper() == data_field.name or normalized == data_field.display_name:
            return data_field
    supported_rows = ", ".join(data_field.name for data_field in DataCategoryField)
    raise UnknownFieldError(f"Unknown field '{field_ref}'. Use one of: {supported_rows}.")


def build_rule_filter(
    conditions: Sequence[Condition],
    vocabulary: Vocabulary | None = None,
) -> RuleFilterBuildResult:
    """Validate conditions and build a rule filter.

    Args:
        conditions: Ordered ``(field, pattern)`` pairs.
        vocabulary: Optional value vocabulary used to bound numeric ranges.

    Returns:
        Build result with the filter or the full list of problems.
    """
    rule_matchers: list[RuleMatcher] = []
    problems: list[ConditionProblem] = []
    for index, (field_ref, pattern) in enumerate(conditions):
        try:
            data_field = resolve_field(field_ref)
        except UnknownFieldError as error:
            problems.append(ConditionProblem(index, str(field_ref), str(error)))
            continue
        matcher = new_matcher(data_field.matcher_kind)
        if not matcher.validate_pattern(pattern):
            reason = f"Invalid {matcher.kind} pattern '{pattern}'. {matcher.pattern_hint()}"
            problems.append(ConditionProblem(index, data_field.name, reason))
            continue
        matcher.set_pattern(pattern)
        range_reason = _range_problem(data_field, matcher, vocabulary)
        if range_reason is not None:
            problems.append(ConditionProblem(index, data_field.name, range_reason))
            continue
        if vocabulary is not None:
            _warn_on_unknown_lqi_type(data_field, matcher, vocabulary)
        rule_matchers.append(RuleMatcher(data_field, matcher))
    for problem in problems:
        _LOGGER.warning(
            "rule_condition_rejected",
            index=problem.index,
            field=problem.field_name,
            reason=problem.reason,
        )
    if problems:
        return RuleFilterBuildResult(rule_filter=None, problems=tuple(problems))
    _LOGGER.info("rule_filter_built", condition_count=len(rule_matchers))
    return RuleFilterBuildResult(rule_filter=RuleFilter(rule_matchers), problems=())


def _range_problem(
    data_field: DataCategoryField,
    matcher: Matcher,
    vocabulary: Vocabulary | None,
) -> str | None:
    """Return why a numeric range exceeds the field bounds, or None."""
    if vocabulary is None or not isinstance(matcher, NumericMatcher):
        return None
    known_range = vocabulary.range_for(data_field)
    if known_range is None or matcher.bounds is None:
        return None
    lower, upper = matcher.bounds
    if lower < known_range[0] or upper > known_range[1]:
        return (
            f"Range {lower}-{upper} falls outside {data_field.display_name} "
            f"bounds {known_range[0]}-{known_range[1]}."
        )
    return None


def _warn_on_unknown_lqi_type(
    data_field: DataCategoryField,
    matcher: Matcher,
    vocabulary: Vocabulary,
) -> None:
    if data_field is not DataCategoryField.LQI_TYPE or not isinstance(matcher, RegexMatcher):
        return
    if any(matcher.test(issue_type) for issue_type in vocabulary.lqi_types):
        return
    _LOGGER.warning(
        "rule_condition_matches_no_known_value",
        field=data_field.name,
        pattern=matcher.pattern,
    )
