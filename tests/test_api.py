from __future__ import annotations

from io import BytesIO

import openpyxl
import pytest
from fastapi.testclient import TestClient

from main import app
from tests.utils import make_names

SMALL = {"two_person_rooms": 1, "one_person_rooms": 1, "days": 2}

VALID_DAYS = [
    {"day": 1, "rooms": {"Room 1": ["A", "B"], "Room 2": ["C"]}},
    {"day": 2, "rooms": {"Room 1": ["C", "D"], "Room 2": ["A"]}},
]


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def test_root_points_at_docs(client: TestClient) -> None:
    body = client.get("/").json()

    assert body["docs"] == "/docs"


def test_default_config(client: TestClient) -> None:
    body = client.get("/api/distribution/config").json()

    assert body == {
        "two_person_rooms": 15,
        "one_person_rooms": 11,
        "days": 4,
        "max_attempts": 100,
        "room_prefix": "Room",
    }


def test_distribute_returns_days_and_table(client: TestClient) -> None:
    names = make_names(10)
    config = {"two_person_rooms": 2, "one_person_rooms": 1, "days": 2}

    resp = client.post("/api/distribution/", json={"candidates": names, "config": config, "seed": 3})

    assert resp.status_code == 200
    body = resp.json()
    assert [d["day"] for d in body["days"]] == [1, 2]
    assert list(body["days"][0]["rooms"]) == ["Room 1", "Room 2", "Room 3"]
    assert body["seed"] == 3
    assert body["attempts"] >= 1
    assert [row[0] for row in body["table"]] == names


def test_exhausted_search_is_unprocessable(client: TestClient) -> None:
    config = {"two_person_rooms": 0, "one_person_rooms": 1, "days": 3, "max_attempts": 5}

    resp = client.post("/api/distribution/", json={"candidates": ["A", "B"], "config": config})

    assert resp.status_code == 422
    detail = resp.json()["detail"]
    assert "No valid distribution" in detail["message"]
    assert detail["conflicts"]


def test_duplicate_names_are_rejected(client: TestClient) -> None:
    resp = client.post("/api/distribution/", json={"candidates": ["A", "A", "B"]})

    assert resp.status_code == 400


def test_upload_csv_returns_names_for_review(client: TestClient) -> None:
    resp = client.post(
        "/api/candidates/upload",
        files={"file": ("names.csv", b"Alice\nBob\nnull\nAlice\nCarol\n", "text/csv")},
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["candidates"] == ["Alice", "Bob", "Carol"]
    assert body["count"] == 3
    assert body["slots_per_day"] == 41
    assert body["warnings"]


def test_upload_with_small_facility_has_no_warnings(client: TestClient) -> None:
    content = "\n".join(make_names(6)).encode("utf-8")

    resp = client.post(
        "/api/candidates/upload",
        params=SMALL,
        files={"file": ("names.csv", content, "text/csv")},
    )

    assert resp.status_code == 200
    assert resp.json()["warnings"] == []


@pytest.mark.parametrize("content", [b"", b"null\nundefined\n"])
def test_upload_without_names_is_rejected(client: TestClient, content: bytes) -> None:
    resp = client.post(
        "/api/candidates/upload",
        files={"file": ("names.csv", content, "text/csv")},
    )

    assert resp.status_code == 400


def test_export_returns_a_workbook(client: TestClient) -> None:
    resp = client.post(
        "/api/export/excel",
        json={"candidates": ["A", "B", "C", "D"], "days": VALID_DAYS, "config": SMALL},
    )

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet")
    wb = openpyxl.load_workbook(BytesIO(resp.content))
    assert wb.sheetnames == ["DISTRIBUTION", "ROOMS"]
    assert wb["DISTRIBUTION"].cell(2, 1).value == "A"


def test_export_refuses_a_broken_distribution(client: TestClient) -> None:
    days = [
        {"day": 1, "rooms": {"Room 1": ["A", "B"], "Room 2": ["C"]}},
        {"day": 2, "rooms": {"Room 1": ["A", "D"], "Room 2": ["B"]}},
    ]

    resp = client.post(
        "/api/export/excel",
        json={"candidates": ["A", "B", "C", "D"], "days": days, "config": SMALL},
    )

    assert resp.status_code == 400
    assert "A: Room 1 on day 1 and day 2" in resp.json()["detail"]["violations"]
