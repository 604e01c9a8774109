"""Public SDK surface for Sieve.

This module provides a stable import path for library users.
It re-exports the rule engine, segment models, and configuration.
"""

from __future__ import annotations

from core.config import SieveConfig
from core.data_category import DataCategoryField, MetadataCategory
from core.errors import (
    InvalidPatternError,
    NotConfiguredError,
    SieveConfigError,
    SieveError,
    UnknownFieldError,
    UnsupportedFieldMatcherError,
)
from core.segment_types import LanguageQualityIssue, OtherMetadata, Provenance, Segment
from core.vocabulary import Vocabulary, default_vocabulary, load_configured_vocabulary
from rules.batch_filtering import filter_segments
from rules.filter_builder import ConditionProblem, RuleFilterBuildResult, build_rule_filter
from rules.matchers import BooleanMatcher, Matcher, NumericMatcher, RegexMatcher
from rules.rule_configuration import DisplayFlag, FilterMode, Rule, RuleConfiguration
from rules.rule_filter import RuleFilter
from rules.rule_matcher import RuleMatcher

__all__ = [
    "BooleanMatcher",
    "ConditionProblem",
    "DataCategoryField",
    "DisplayFlag",
    "FilterMode",
    "InvalidPatternError",
    "LanguageQualityIssue",
    "Matcher",
    "MetadataCategory",
    "NotConfiguredError",
    "NumericMatcher",
    "OtherMetadata",
    "Provenance",
    "RegexMatcher",
    "Rule",
    "RuleConfiguration",
    "RuleFilter",
    "RuleFilterBuildResult",
    "RuleMatcher",
    "Segment",
    "SieveConfig",
    "SieveConfigError",
    "SieveError",
    "UnknownFieldError",
    "UnsupportedFieldMatcherError",
    "Vocabulary",
    "build_rule_filter",
    "default_vocabulary",
    "filter_segments",
    "load_configured_vocabulary",
]
