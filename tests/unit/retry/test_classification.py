"""
Unit tests for ClassificationPolicy.

Tests kind-based classification, widening/narrowing and the settings-driven
default.
"""

import pytest

from robust_query.config import Settings
from robust_query.models.enums import Classification, ErrorKind
from robust_query.queries.exceptions import (
    AmbiguousMatchError,
    MissingElementError,
    MissingWindowError,
    QueryError,
    QueryNotSupportedError,
    StaleElementError,
    TransientQueryError,
)
from robust_query.retry.classification import (
    DEFAULT_RETRYABLE_KINDS,
    ClassificationPolicy,
    kinds_from_names,
)


@pytest.mark.parametrize(
    "error",
    [
        MissingElementError("missing"),
        StaleElementError("stale"),
        MissingWindowError("no popup"),
        TransientQueryError("hiccup"),
    ],
)
def test_default_policy_retries_transient_page_state(error):
    assert ClassificationPolicy().classify(error) == Classification.RETRYABLE


@pytest.mark.parametrize(
    "error",
    [
        AmbiguousMatchError("two buttons", match_count=2),
        QueryNotSupportedError("no hover on this driver"),
        ValueError("bug"),
        ZeroDivisionError(),
        QueryError("untagged"),
    ],
)
def test_default_policy_treats_everything_else_as_fatal(error):
    assert ClassificationPolicy().classify(error) == Classification.FATAL


def test_classification_is_idempotent():
    policy = ClassificationPolicy()
    error = MissingElementError("missing")

    results = {policy.classify(error) for _ in range(10)}
    results |= {policy.classify(MissingElementError("another")) for _ in range(10)}

    assert results == {Classification.RETRYABLE}


def test_classification_uses_kind_tag_not_class():
    """An explicitly tagged base error classifies by its tag."""
    error = QueryError("tagged by producer", kind=ErrorKind.STALE_ELEMENT)

    assert ClassificationPolicy().classify(error) == Classification.RETRYABLE


def test_foreign_error_with_kind_attribute():
    class DriverError(Exception):
        kind = ErrorKind.ELEMENT_NOT_FOUND

    assert ClassificationPolicy().classify(DriverError()) == Classification.RETRYABLE


def test_widen_and_narrow_return_new_policies():
    policy = ClassificationPolicy()

    widened = policy.widen(ErrorKind.AMBIGUOUS_MATCH)
    narrowed = policy.narrow(ErrorKind.STALE_ELEMENT)

    assert widened.is_retryable(ErrorKind.AMBIGUOUS_MATCH)
    assert not narrowed.is_retryable(ErrorKind.STALE_ELEMENT)
    # Original unchanged
    assert policy.retryable_kinds == DEFAULT_RETRYABLE_KINDS


def test_not_supported_can_never_be_widened_in():
    policy = ClassificationPolicy().widen(ErrorKind.NOT_SUPPORTED)

    assert not policy.is_retryable(ErrorKind.NOT_SUPPORTED)
    assert policy.classify(QueryNotSupportedError("nope")) == Classification.FATAL


def test_permissive_policy_retries_untagged_errors():
    policy = ClassificationPolicy.permissive()

    assert policy.classify(RuntimeError("anything")) == Classification.RETRYABLE
    assert policy.classify(AmbiguousMatchError("two")) == Classification.RETRYABLE
    assert policy.classify(QueryNotSupportedError("nope")) == Classification.FATAL


def test_policy_accepts_kind_names():
    policy = ClassificationPolicy(retryable_kinds=frozenset({"stale_element"}))

    assert policy.retryable_kinds == frozenset({ErrorKind.STALE_ELEMENT})


def test_from_settings_uses_configured_kinds():
    settings = Settings(RETRYABLE_ERROR_KINDS=["element_not_found", "ambiguous_match"])

    policy = ClassificationPolicy.from_settings(settings)

    assert policy.retryable_kinds == frozenset(
        {ErrorKind.ELEMENT_NOT_FOUND, ErrorKind.AMBIGUOUS_MATCH}
    )


def test_from_settings_default_matches_default_policy():
    assert ClassificationPolicy.from_settings(Settings()) == ClassificationPolicy.default()


def test_unknown_kind_name_rejected():
    with pytest.raises(ValueError):
        kinds_from_names(["element_not_found", "flaky"])


def test_describe_lists_sorted_kind_names():
    assert ClassificationPolicy().describe() == [
        "element_not_found",
        "stale_element",
        "transient",
        "window_not_found",
    ]
