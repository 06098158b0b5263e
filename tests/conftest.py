"""Shared fixtures for measure-agi tests.

Provides:
- a representative campaign payload covering duplicates, malformed
  entries and dangling prediction references
- the parsed RecordSet for that payload
- a default Config
"""

import copy
from typing import Any

import pytest

from measure_agi.config import Config
from measure_agi.state import RecordSet

SAMPLE_PAYLOAD: dict[str, Any] = {
    "meta": {
        "campaignStart": "2024-07-01",
        "currentDay": 4,
        "nextDeadlineUTC": "2024-07-05T00:00:00Z",
    },
    "calendarDays": [
        {
            "day": 1,
            "date": "2024-07-01",
            "status": "agi",
            "correct": 9,
            "topPerformer": "Atlas",
            "note": "Strong start",
        },
        {"day": 2, "date": "2024-07-02", "status": "agi", "correct": 8},
        {"day": 3, "date": "2024-07-03", "status": "missed", "correct": 4},
        {"day": 4, "date": "2024-07-04", "status": "evaluating"},
        {"day": 2, "date": "2024-07-02", "status": "agi", "correct": 10},
        {"day": "5", "status": "agi"},
    ],
    "dailyChallenges": [
        {
            "id": "c-1",
            "day": 1,
            "title": "Sequence completion",
            "category": "Reasoning",
            "question": "What comes next: 2, 6, 12, 20, ?",
            "correctAnswer": "30",
            "answerOptions": ["28", "30", "32"],
            "timestamp": "2024-07-01T09:00:00Z",
            "predictions": [
                {
                    "participantId": "p-atlas",
                    "isCorrect": True,
                    "confidence": 0.9,
                    "latencyMs": 850,
                },
                {"participantId": "p-nova", "isCorrect": False, "confidence": 0.4},
                {"participantId": "a-relay", "isCorrect": True, "output": "30"},
            ],
        },
        {
            "id": "c-4",
            "day": 4,
            "title": "Unit conversion",
            "category": "Math",
            "question": "How many seconds are in a week?",
            "correctAnswer": "604800",
            "timestamp": "2024-07-04T09:00:00Z",
            "predictions": [
                {"participantId": "p-atlas", "isCorrect": True},
                {"participantId": "a-probe"},
                {"participantId": "ghost", "isCorrect": False},
            ],
        },
    ],
    "participants": [
        {
            "id": "p-atlas",
            "name": "Atlas",
            "type": "LLM",
            "agiDays": 12,
            "longestStreak": 5,
            "lastSubmission": "2024-07-04T10:00:00Z",
            "performance": [{"day": 2, "solved": 8}, {"day": 1, "solved": 9}],
        },
        {
            "id": "p-nova",
            "name": "Nova",
            "type": "LLM",
            "agiDays": 7,
            "longestStreak": 3,
            "performance": [{"day": 1, "solved": 6}],
        },
        {
            "id": "a-relay",
            "name": "Relay",
            "type": "Agent",
            "agiDays": 12,
            "longestStreak": 100,
            "performance": [{"day": 1, "solved": 5}],
        },
        {
            "id": "a-probe",
            "name": "Probe",
            "type": "Agent",
            "agiDays": 3,
            "longestStreak": 1,
            "performance": [],
        },
    ],
}


@pytest.fixture
def sample_payload() -> dict[str, Any]:
    """Return a fresh copy of the sample campaign payload."""
    return copy.deepcopy(SAMPLE_PAYLOAD)


@pytest.fixture
def record_set(sample_payload: dict[str, Any]) -> RecordSet:
    """Return the sample payload parsed into a snapshot."""
    return RecordSet.from_payload(sample_payload)


@pytest.fixture
def config() -> Config:
    """Return the default configuration."""
    return Config()
