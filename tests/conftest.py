import pytest

from groupsplit.models import Event


@pytest.fixture
def participants():
    return [
        {"id": "a", "name": "Alex"},
        {"id": "b", "name": "Blair"},
        {"id": "c", "name": "Casey"},
        {"id": "d", "name": "Drew"},
    ]


@pytest.fixture
def trip(participants):
    return Event(
        id="event-1",
        name="Test event",
        participants=participants,
        expenses=[
            {
                "id": "exp-1",
                "amount": 400,
                "paid_by": [{"participant_id": "a", "amount": 400}],
                "split": {"type": "even", "participant_ids": ["a", "b", "c", "d"]},
            },
            {
                "id": "exp-2",
                "amount": 120,
                "paid_by": [{"participant_id": "b", "amount": 120}],
                "split": {
                    "type": "shares",
                    "shares": [
                        {"participant_id": "a", "weight": 1},
                        {"participant_id": "b", "weight": 1},
                        {"participant_id": "c", "weight": 1},
                    ],
                },
            },
            {
                "id": "exp-3",
                "amount": 90,
                "paid_by": [{"participant_id": "c", "amount": 90}],
                "split": {
                    "type": "exact",
                    "allocations": [
                        {"participant_id": "a", "amount": 20},
                        {"participant_id": "b", "amount": 20},
                        {"participant_id": "c", "amount": 25},
                        {"participant_id": "d", "amount": 25},
                    ],
                },
            },
        ],
    )
