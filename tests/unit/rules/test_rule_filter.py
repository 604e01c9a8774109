"""Unit tests for segment-level rule filtering."""

from __future__ import annotations

import pytest

from core.data_category import DataCategoryField
from core.segment_types import LanguageQualityIssue, OtherMetadata, Provenance, Segment
from rules.rule_filter import RuleFilter
from rules.rule_matcher import RuleMatcher
from tests.rule_helpers import (
    boolean_matcher,
    lqi,
    lqi_segment,
    numeric_matcher,
    omission_high_severity_filter,
    provenance_segment,
    regex_matcher,
    rule_filter,
)

OMISSION_85 = lqi("omission", 85)
TERMINOLOGY_85 = lqi("terminology", 85)
OMISSION_60 = lqi("omission", 60)


def _mt_segment(confidence: float) -> Segment:
    segment = Segment(segment_number=1)
    segment.add_other_metadata(OtherMetadata(DataCategoryField.MT_CONFIDENCE, confidence))
    return segment


def test_empty_filter_matches_every_segment() -> None:
    """A filter without conditions is a no-op filter."""
    empty_filter = RuleFilter([])

    assert empty_filter.is_empty()
    assert empty_filter.matches(Segment(segment_number=1))
    assert empty_filter.matches(lqi_segment(OMISSION_60))


def test_mt_confidence_at_or_below_threshold() -> None:
    """MT confidence of 75 and below should match."""
    mt_filter = rule_filter(RuleMatcher(DataCategoryField.MT_CONFIDENCE, numeric_matcher(0, 75)))

    assert mt_filter.matches(_mt_segment(50.0))
    assert mt_filter.matches(_mt_segment(75.0))
    assert not mt_filter.matches(_mt_segment(80.0))


@pytest.mark.parametrize(
    ("issues", "expected"),
    [
        ((OMISSION_85, TERMINOLOGY_85, OMISSION_60), True),
        ((OMISSION_85,), True),
        ((TERMINOLOGY_85,), False),
        ((OMISSION_60,), False),
        ((OMISSION_85, TERMINOLOGY_85), True),
        ((TERMINOLOGY_85, OMISSION_60), False),
    ],
)
def test_lqi_type_and_severity_scenarios(
    issues: tuple[LanguageQualityIssue, ...],
    expected: bool,
) -> None:
    """Omissions with severity 85 and up should match per issue."""
    assert omission_high_severity_filter().matches(lqi_segment(*issues)) is expected


def test_conditions_must_hold_on_the_same_issue() -> None:
    """An omission and a separate severe issue should not combine."""
    segment = lqi_segment(lqi("omission", 60), lqi("terminology", 90))

    assert not omission_high_severity_filter().matches(segment)
    assert omission_high_severity_filter().matches(lqi_segment(lqi("omission", 85)))


def test_identical_issue_objects_stay_separate_instances() -> None:
    """The same issue attached twice still counts per position."""
    segment = lqi_segment(OMISSION_85, OMISSION_85)

    assert omission_high_severity_filter().matches(segment)


def test_lqi_enabled_flag_narrows_issue_match() -> None:
    """Disabled omissions should not satisfy an enabled-only rule."""
    enabled_filter = rule_filter(
        RuleMatcher(DataCategoryField.LQI_TYPE, regex_matcher("omission")),
        RuleMatcher(DataCategoryField.LQI_ENABLED, boolean_matcher("true")),
    )
    disabled = LanguageQualityIssue(issue_type="omission", severity=90, enabled=False)
    enabled_other = LanguageQualityIssue(issue_type="grammar", severity=90, enabled=True)

    assert not enabled_filter.matches(lqi_segment(disabled, enabled_other))
    assert enabled_filter.matches(lqi_segment(disabled, OMISSION_60))


def _basic_provenance_filter() -> RuleFilter:
    return rule_filter(
        RuleMatcher(DataCategoryField.PROV_ORG, regex_matcher("^S.*")),
        RuleMatcher(DataCategoryField.PROV_PERSON, regex_matcher("^T.*")),
        RuleMatcher(DataCategoryField.PROV_TOOL, regex_matcher("^U.*")),
    )


@pytest.mark.parametrize(
    ("record", "expected"),
    [
        (Provenance(org="S", person="T", tool="U"), True),
        (Provenance(org="X", person="T", tool="U"), False),
        (Provenance(org="S", person="X", tool="U"), False),
        (Provenance(org="S", person="T", tool="X"), False),
    ],
)
def test_provenance_basic_fields(record: Provenance, expected: bool) -> None:
    """Organization, person, and tool should all match on one record."""
    assert _basic_provenance_filter().matches(provenance_segment(record)) is expected


def _revision_provenance_filter() -> RuleFilter:
    return rule_filter(
        RuleMatcher(DataCategoryField.PROV_REVORG, regex_matcher("^S.*")),
        RuleMatcher(DataCategoryField.PROV_REVPERSON, regex_matcher("^T.*")),
        RuleMatcher(DataCategoryField.PROV_REVTOOL, regex_matcher("^U.*")),
    )


@pytest.mark.parametrize(
    ("record", "expected"),
    [
        (Provenance(rev_org="S", rev_person="T", rev_tool="U"), True),
        (Provenance(rev_org="X", rev_person="T", rev_tool="U"), False),
        (Provenance(rev_org="S", rev_person="X", rev_tool="U"), False),
        (Provenance(rev_org="S", rev_person="T", rev_tool="X"), False),
    ],
)
def test_provenance_revision_fields(record: Provenance, expected: bool) -> None:
    """Revision organization, person, and tool should match on one record."""
    assert _revision_provenance_filter().matches(provenance_segment(record)) is expected


def test_provenance_reference() -> None:
    """Provenance reference should match by regex."""
    ref_filter = rule_filter(RuleMatcher(DataCategoryField.PROV_PROVREF, regex_matcher("^S.*")))

    assert ref_filter.matches(provenance_segment(Provenance(prov_ref="S")))
    assert not ref_filter.matches(provenance_segment(Provenance(prov_ref="T")))


def test_provenance_fields_split_across_records_do_not_match() -> None:
    """Fields satisfied on different records should not combine."""
    segment = provenance_segment(
        Provenance(org="S", person="X", tool="U"),
        Provenance(org="X", person="T", tool="U"),
    )

    assert not _basic_provenance_filter().matches(segment)


def test_categories_combine_by_conjunction() -> None:
    """LQI and MT conditions should both be required."""
    mixed_filter = rule_filter(
        RuleMatcher(DataCategoryField.LQI_TYPE, regex_matcher("omission")),
        RuleMatcher(DataCategoryField.MT_CONFIDENCE, numeric_matcher(0, 75)),
    )
    segment = lqi_segment(OMISSION_60)
    assert not mixed_filter.matches(segment)

    segment.add_other_metadata(OtherMetadata(DataCategoryField.MT_CONFIDENCE, 40.0))
    assert mixed_filter.matches(segment)


def test_lqi_and_provenance_are_not_correlated_by_position() -> None:
    """Instances in different categories should be evaluated independently."""
    mixed_filter = rule_filter(
        RuleMatcher(DataCategoryField.LQI_TYPE, regex_matcher("omission")),
        RuleMatcher(DataCategoryField.PROV_ORG, regex_matcher("^S")),
    )
    segment = lqi_segment(TERMINOLOGY_85, OMISSION_60)
    segment.add_provenance(Provenance(org="Spartan"))

    assert mixed_filter.matches(segment)


def test_category_without_instances_does_not_match() -> None:
    """A constrained category with no instances should fail."""
    assert not omission_high_severity_filter().matches(provenance_segment(Provenance(org="S")))


def test_single_numeric_condition_matches_when_any_instance_in_range() -> None:
    """One in-range instance should be enough for a single condition."""
    severity_filter = rule_filter(
        RuleMatcher(DataCategoryField.LQI_SEVERITY, numeric_matcher(70, 80)),
    )

    assert severity_filter.matches(lqi_segment(lqi("omission", 60), lqi("style", 75)))
    assert not severity_filter.matches(lqi_segment(lqi("omission", 60), lqi("style", 81)))


def test_filter_is_reusable_across_segments() -> None:
    """Evaluations should not leave state behind."""
    severity_filter = omission_high_severity_filter()

    results = [
        severity_filter.matches(lqi_segment(OMISSION_85)),
        severity_filter.matches(lqi_segment(OMISSION_60)),
        severity_filter.matches(lqi_segment(OMISSION_85)),
    ]

    assert results == [True, False, True]


class _UnreadableProvenance:
    """Provenance record whose organization cannot be read."""

    @property
    def org(self) -> str:
        raise KeyError("prov:org")


class _UntaggedEntry:
    """Scalar metadata entry without a field tag."""

    value = 40.0


def test_unreadable_record_is_skipped_next_to_valid_one() -> None:
    """A failing record should not hide a matching record."""
    org_filter = rule_filter(RuleMatcher(DataCategoryField.PROV_ORG, regex_matcher("^S")))
    segment = Segment(segment_number=1)
    segment.provenance.append(_UnreadableProvenance())  # type: ignore[arg-type]
    segment.add_provenance(Provenance(org="Spartan"))

    assert org_filter.matches(segment)


def test_unreadable_record_alone_does_not_match() -> None:
    """A segment whose only record fails should simply not match."""
    org_filter = rule_filter(RuleMatcher(DataCategoryField.PROV_ORG, regex_matcher("^S")))
    segment = Segment(segment_number=1)
    segment.provenance.append(_UnreadableProvenance())  # type: ignore[arg-type]

    assert not org_filter.matches(segment)


def test_untagged_scalar_entry_is_skipped() -> None:
    """Scalar entries without a field tag should be ignored."""
    mt_filter = rule_filter(RuleMatcher(DataCategoryField.MT_CONFIDENCE, numeric_matcher(0, 75)))
    segment = Segment(segment_number=1)
    segment.other_metadata.append(_UntaggedEntry())  # type: ignore[arg-type]

    assert not mt_filter.matches(segment)

    segment.add_other_metadata(OtherMetadata(DataCategoryField.MT_CONFIDENCE, 50.0))
    assert mt_filter.matches(segment)
