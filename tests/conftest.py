"""Shared pytest fixtures for finsight tests."""

import json
from datetime import datetime
from decimal import Decimal

import pytest

from finsight.domain.entities import Transaction, TransactionType, Wallet


@pytest.fixture
def reference_date():
    """Fixed 'now' used across the analytics tests."""
    return datetime(2024, 6, 15, 12, 0)


@pytest.fixture
def make_txn():
    """Build a Transaction from short arguments."""

    def _make(
        amount,
        txn_type="expense",
        when="2024-06-10",
        description=None,
        category_id=None,
        is_recurring=False,
    ):
        when = datetime.fromisoformat(when) if isinstance(when, str) else when
        return Transaction(
            amount=Decimal(str(amount)),
            type=TransactionType(txn_type),
            date=when,
            description=description,
            is_recurring=is_recurring,
            category_id=category_id,
        )

    return _make


@pytest.fixture
def make_wallet():
    """Build a Wallet with the given balance."""

    def _make(balance, name="Main"):
        return Wallet(balance=Decimal(str(balance)), name=name)

    return _make


@pytest.fixture
def sample_records():
    """Raw records as the data provider would hand them over."""
    return {
        "wallets": [
            {"id": "w1", "name": "Conta Corrente", "balance": 8000},
            {"id": "w2", "name": "Poupança", "balance": "2000.00"},
        ],
        "categories": [
            {"id": "food", "name": "Alimentação", "type": "expense"},
            {"id": "fun", "name": "Lazer", "type": "expense", "bucket": "wants"},
            {"id": "salary", "name": "Salário", "type": "income"},
        ],
        "budgets": [
            {"category_id": "food", "amount": 500, "month": "2024-06"},
            {"category_id": "fun", "amount": 1000, "month": "2024-06"},
        ],
        "goals": [
            {"id": "g1", "name": "Viagem", "target_amount": 10000, "current_amount": 4000, "deadline": "2024-12-20"},
            {"id": "g2", "name": "Reserva", "target_amount": "3000", "current_amount": 3500},
        ],
        "transactions": [
            {"amount": 5000, "type": "income", "date": "2024-06-05", "category_id": "salary", "is_recurring": True},
            {"amount": 2000, "type": "expense", "date": "2024-06-02", "description": "Aluguel", "is_recurring": True},
            {"amount": 100, "type": "expense", "date": "2024-03-10", "category_id": "food", "description": "Mercado"},
            {"amount": 100, "type": "expense", "date": "2024-04-10", "category_id": "food", "description": "Mercado"},
            {"amount": 100, "type": "expense", "date": "2024-05-10", "category_id": "food", "description": "Mercado"},
            {"amount": 700, "type": "expense", "date": "2024-06-08", "category_id": "food", "description": "Mercado"},
            {"amount": 300, "type": "expense", "date": "2024-06-09", "category_id": "fun", "description": "Cinema"},
            {"amount": 1500, "type": "income", "date": "2024-05-20", "description": "Freela"},
        ],
    }


@pytest.fixture
def data_file(tmp_path, sample_records):
    """Write the sample records to a JSON snapshot and return its path."""
    path = tmp_path / "data.json"
    path.write_text(json.dumps(sample_records), encoding="utf-8")
    return path


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
