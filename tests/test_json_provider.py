"""Tests for the data providers."""

import json

import pytest

from finsight.data import InMemoryProvider, JsonFileProvider, create_json_provider
from finsight.data.factories import DATA_PATH_ENV
from finsight.domain.entities import Bucket
from finsight.domain.errors import NotFoundError, ValidationError


def _write(path, payload):
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


class TestJsonFileProvider:
    """Tests for the JSON snapshot provider."""

    def test_loads_all_record_kinds(self, data_file):
        """Test that every list in the snapshot is mapped."""
        provider = JsonFileProvider(data_file)

        assert len(provider.list_transactions()) == 8
        assert len(provider.list_wallets()) == 2
        assert [c.id for c in provider.list_categories()] == ["food", "fun", "salary"]
        assert provider.list_categories()[1].bucket == Bucket.WANTS
        assert [b.category_id for b in provider.list_budgets()] == ["food", "fun"]
        assert [g.name for g in provider.list_goals()] == ["Viagem", "Reserva"]

    def test_lists_are_copies(self, data_file):
        """Test that callers cannot mutate the cached records."""
        provider = JsonFileProvider(data_file)
        provider.list_transactions().clear()

        assert len(provider.list_transactions()) == 8

    def test_missing_lists_are_empty(self, tmp_path):
        """Test that absent keys load as empty lists."""
        path = _write(tmp_path / "data.json", {"wallets": [{"balance": 10}]})
        provider = JsonFileProvider(path)

        assert provider.list_transactions() == []
        assert provider.list_budgets() == []
        assert provider.list_goals() == []
        assert len(provider.list_wallets()) == 1

    def test_missing_file(self, tmp_path):
        """Test that a missing snapshot raises NotFoundError."""
        provider = JsonFileProvider(tmp_path / "nope.json")

        with pytest.raises(NotFoundError, match="not found"):
            provider.list_transactions()

    def test_invalid_json(self, tmp_path):
        """Test that unreadable JSON raises ValidationError."""
        path = tmp_path / "data.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ValidationError, match="Could not read data file"):
            JsonFileProvider(path).load()

    @pytest.mark.parametrize(
        "payload, reason",
        [
            ([1, 2, 3], "top-level value must be an object"),
            ({"transactions": {"amount": 1}}, "'transactions' must be a list"),
            ({"wallets": ["oops"]}, r"wallets\[0\] must be an object"),
        ],
    )
    def test_malformed_structure(self, tmp_path, payload, reason):
        """Test that structural problems are reported."""
        path = _write(tmp_path / "data.json", payload)

        with pytest.raises(ValidationError, match=reason):
            JsonFileProvider(path).load()

    def test_bad_record_fails_whole_load(self, tmp_path, sample_records):
        """Test that one invalid record rejects the snapshot with its position."""
        sample_records["transactions"][3]["amount"] = -1
        path = _write(tmp_path / "data.json", sample_records)

        with pytest.raises(ValidationError, match=r"^transactions\[3\]: Invalid transaction amount"):
            JsonFileProvider(path).list_wallets()


class TestInMemoryProvider:
    """Tests for the in-memory provider."""

    def test_defaults_to_empty(self):
        """Test that an empty provider lists nothing."""
        provider = InMemoryProvider()

        assert provider.list_transactions() == []
        assert provider.list_wallets() == []
        assert provider.list_categories() == []
        assert provider.list_budgets() == []
        assert provider.list_goals() == []

    def test_returns_given_records(self, make_txn, make_wallet):
        """Test that records are handed back in order."""
        transactions = [make_txn(1), make_txn(2)]
        provider = InMemoryProvider(transactions=iter(transactions), wallets=[make_wallet(5)])

        assert provider.list_transactions() == transactions
        assert provider.list_transactions() == transactions
        assert len(provider.list_wallets()) == 1


class TestCreateJsonProvider:
    """Tests for the provider factory."""

    def test_explicit_path(self, tmp_path, monkeypatch):
        """Test that an explicit path wins over the environment."""
        monkeypatch.setenv(DATA_PATH_ENV, str(tmp_path / "env.json"))

        provider = create_json_provider(str(tmp_path / "explicit.json"))

        assert provider.path == tmp_path / "explicit.json"

    def test_environment_path(self, tmp_path, monkeypatch):
        """Test that the environment variable is used when no path is given."""
        monkeypatch.setenv(DATA_PATH_ENV, str(tmp_path / "env.json"))

        assert create_json_provider().path == tmp_path / "env.json"

    def test_default_path(self, tmp_path, monkeypatch):
        """Test the home directory default."""
        monkeypatch.delenv(DATA_PATH_ENV, raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))

        assert create_json_provider().path == tmp_path / ".finsight" / "data.json"
