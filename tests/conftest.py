"""Pytest fixtures for testing"""

import pytest
from fastapi.testclient import TestClient
from groupsplit.api.main import create_app
from groupsplit.domain.models import Expense, MemberInfo, Split


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def trio() -> list[MemberInfo]:
    """Alice, Bob and Carol"""
    return [
        MemberInfo(id="alice", name="Alice"),
        MemberInfo(id="bob", name="Bob"),
        MemberInfo(id="carol", name="Carol"),
    ]


@pytest.fixture
def dinner(trio: list[MemberInfo]) -> Expense:
    """$90 dinner paid by Alice, split evenly"""
    return Expense(
        amount=90.0,
        payer_id="alice",
        description="Dinner",
        splits=[Split(member_id=m.id, amount=30.0) for m in trio],
    )


@pytest.fixture
def trip_payload() -> dict:
    """Request body for a weekend trip with a partial settlement"""
    return {
        "members": [
            {"id": "alice", "name": "Alice", "email": "alice@example.com"},
            {"id": "bob", "name": None, "email": "bob@example.com"},
            {"id": "carol", "name": "Carol", "email": "carol@example.com"},
        ],
        "expenses": [
            {
                "description": "Cabin",
                "date": "2026-10-01",
                "amount": 300.0,
                "payer_id": "alice",
                "splits": [
                    {"member_id": "alice", "amount": 100.0},
                    {"member_id": "bob", "amount": 100.0},
                    {"member_id": "carol", "amount": 100.0},
                ],
            },
            {
                "description": "Groceries",
                "amount": 60.0,
                "payer_id": "bob",
                "splits": [
                    {"member_id": "alice", "amount": 20.0},
                    {"member_id": "bob", "amount": 20.0},
                    {"member_id": "carol", "amount": 20.0},
                ],
            },
        ],
        "settlements": [
            {
                "from_id": "carol",
                "to_id": "alice",
                "amount": 50.0,
                "note": "Venmo",
                "settled_at": "2026-10-05T12:00:00Z",
            }
        ],
    }
