"""Tests for GatedRetrievalService orchestration."""

from unittest.mock import MagicMock

import pytest

from memgate import expand_query_for_risk
from memgate.config.settings import load_settings
from memgate.core.domain import SkipReason
from memgate.core.domain.exceptions import InvalidQueryError, RetrievalBackendError
from memgate.core.services import GatedRetrievalService

pytestmark = pytest.mark.unit


@pytest.fixture
def retriever(sample_hits):
    mock = MagicMock()
    mock.search.return_value = sample_hits
    return mock


def test_skipped_query_never_reaches_store(gate, retriever):
    service = GatedRetrievalService(gate, retriever)

    result = service.retrieve("ok")

    retriever.search.assert_not_called()
    assert result.retrieved is False
    assert result.hits is None
    assert result.decision.reason == SkipReason.TOO_SHORT


def test_plain_query_is_searched_trimmed(gate, retriever, sample_hits):
    service = GatedRetrievalService(gate, retriever)

    result = service.retrieve("  What did we decide about the logo colours?  ", top_k=3)

    retriever.search.assert_called_once_with(
        "What did we decide about the logo colours?", top_k=3
    )
    assert result.retrieved is True
    assert result.hits == sample_hits


def test_risky_query_is_searched_with_anchors(gate, retriever):
    service = GatedRetrievalService(gate, retriever)

    service.retrieve("please delete the config file")

    retriever.search.assert_called_once_with(
        expand_query_for_risk("please delete the config file"), top_k=5
    )


def test_expansion_can_be_disabled(gate, retriever):
    service = GatedRetrievalService(gate, retriever, expand_risky=False)

    result = service.retrieve("please delete the config file")

    retriever.search.assert_called_once_with("please delete the config file", top_k=5)
    assert result.decision.risk is True


def test_store_failure_is_wrapped(gate, retriever):
    failure = ConnectionError("store unreachable")
    retriever.search.side_effect = failure
    service = GatedRetrievalService(gate, retriever)

    with pytest.raises(RetrievalBackendError) as exc_info:
        service.retrieve("What is the capital of France?")

    assert exc_info.value.cause is failure
    assert exc_info.value.extra_context == {"top_k": 5, "risk": False}
    assert exc_info.value.__cause__ is failure


@pytest.mark.parametrize("top_k", [0, -1])
def test_non_positive_top_k_is_rejected(gate, retriever, top_k):
    service = GatedRetrievalService(gate, retriever)

    with pytest.raises(InvalidQueryError):
        service.retrieve("What is the capital of France?", top_k=top_k)

    retriever.search.assert_not_called()


def test_empty_result_is_still_a_retrieval(gate, retriever):
    retriever.search.return_value = []
    service = GatedRetrievalService(gate, retriever)

    result = service.retrieve("What is the capital of France?")

    assert result.retrieved is True
    assert result.hits == []


def test_from_settings_expands_risky_queries_by_default(retriever):
    service = GatedRetrievalService.from_settings(load_settings(), retriever)

    service.retrieve("please delete the config file")

    assert service.expand_risky is True
    retriever.search.assert_called_once_with(
        expand_query_for_risk("please delete the config file"), top_k=5
    )


def test_from_settings_honours_expansion_switch(retriever, monkeypatch):
    monkeypatch.setenv("MEMGATE_EXPAND_RISKY_QUERIES", "false")
    service = GatedRetrievalService.from_settings(load_settings(), retriever)

    service.retrieve("please delete the config file")

    retriever.search.assert_called_once_with("please delete the config file", top_k=5)


def test_from_settings_uses_configured_thresholds(retriever):
    service = GatedRetrievalService.from_settings(
        load_settings(default_min_length=5), retriever
    )

    result = service.retrieve("tell me a joke")

    assert result.retrieved is True
    assert service.gate.default_min_length == 5
