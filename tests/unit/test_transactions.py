"""Tests for the transaction samples.

``firestore.transactional`` is routed through the ``transactional``
fixture, which commits staged writes only when the body returns.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from cloud_snippets.snippets.transactions import (
    PopulationTooBigError,
    _increment_population_within_limit,
    return_info_from_transaction,
    run_simple_transaction,
)


class TestReturnInfoFromTransaction:
    def test_below_limit_writes(
        self, fake_db, transactional, capsys: pytest.CaptureFixture[str]
    ) -> None:
        message = return_info_from_transaction(fake_db, 999_999)

        assert message == "Population increased to 1000000"
        assert fake_db.doc("cities", "SF") == {"population": 1_000_000}
        assert "Population increased to 1000000" in capsys.readouterr().out

    def test_at_limit_aborts_without_write(self, fake_db, transactional) -> None:
        with pytest.raises(PopulationTooBigError, match="Sorry! Population is too big."):
            return_info_from_transaction(fake_db, 1_000_000)

        assert fake_db.doc("cities", "SF") == {"population": 1_000_000}

    def test_custom_limit(self, fake_db, transactional) -> None:
        with pytest.raises(PopulationTooBigError) as exc_info:
            return_info_from_transaction(fake_db, 10, limit=10)

        assert exc_info.value.population == 11
        assert exc_info.value.limit == 10


class TestTransactionBody:
    """The body performs one read and at most one write."""

    def test_single_update_when_allowed(self) -> None:
        transaction = MagicMock()
        doc_ref = MagicMock()
        doc_ref.get.return_value.get.return_value = 41

        message = _increment_population_within_limit(transaction, doc_ref, 100)

        assert message == "Population increased to 42"
        doc_ref.get.assert_called_once_with(transaction=transaction)
        transaction.update.assert_called_once_with(doc_ref, {"population": 42})

    def test_no_update_when_rejected(self) -> None:
        transaction = MagicMock()
        doc_ref = MagicMock()
        doc_ref.get.return_value.get.return_value = 100

        with pytest.raises(PopulationTooBigError):
            _increment_population_within_limit(transaction, doc_ref, 100)

        transaction.update.assert_not_called()


class TestRunSimpleTransaction:
    def test_increments_seeded_population(self, fake_db, transactional) -> None:
        assert run_simple_transaction(fake_db) == 860_001
        assert fake_db.doc("cities", "SF") == {
            "name": "SF",
            "country": "USA",
            "population": 860_001,
        }
