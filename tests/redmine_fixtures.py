from __future__ import annotations

from typing import Any


def time_entry(issue_id: int, hours: float, comments: str = "") -> dict[str, Any]:
    return {
        "id": issue_id * 100,
        "project": {"id": 1, "name": "Core"},
        "issue": {"id": issue_id},
        "user": {"id": 5, "name": "Dev"},
        "hours": hours,
        "comments": comments,
        "spent_on": "2024-06-10",
    }


def issue_payload(issue_id: int, subject: str, tracker: str) -> dict[str, Any]:
    return {
        "issue": {
            "id": issue_id,
            "subject": subject,
            "tracker": {"id": 1, "name": tracker},
            "status": {"id": 2, "name": "In Progress"},
        }
    }
