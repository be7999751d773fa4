"""
Tests for EnergySampleStore append and range queries
"""

from datetime import datetime, timedelta

import pytest

from core.errors import ValidationError
from models.energy_model import EnergySampleStore, energy_filter


@pytest.fixture
def store(database):
    return EnergySampleStore(database)


def test_append_coerces_watts_and_timestamp(store):
    sample = store.append("d1", "42.5", "2024-01-01T00:00:00Z")

    assert sample["deviceId"] == "d1"
    assert sample["watts"] == 42.5
    assert sample["timestamp"] == datetime(2024, 1, 1)
    assert sample["createdAt"] == sample["updatedAt"]
    assert isinstance(sample["_id"], str)


def test_append_converts_offsets_to_utc(store):
    sample = store.append("d1", 10, "2024-01-01T05:30:00+05:30")
    assert sample["timestamp"] == datetime(2024, 1, 1)


@pytest.mark.parametrize(
    "device_id, watts, timestamp",
    [
        (None, 1.0, "2024-01-01T00:00:00Z"),
        ("", 1.0, "2024-01-01T00:00:00Z"),
        ("d1", None, "2024-01-01T00:00:00Z"),
        ("d1", 1.0, None),
    ],
)
def test_append_missing_field(store, device_id, watts, timestamp):
    with pytest.raises(ValidationError, match="Missing required fields"):
        store.append(device_id, watts, timestamp)


@pytest.mark.parametrize("watts", ["abc", "nan", "inf", True, [1]])
def test_append_rejects_non_numeric_watts(store, watts):
    with pytest.raises(ValidationError, match="watts"):
        store.append("d1", watts, "2024-01-01T00:00:00Z")


def test_append_rejects_unparseable_timestamp(store):
    with pytest.raises(ValidationError, match="timestamp"):
        store.append("d1", 5, "not a date")


def test_append_zero_watts_is_valid(store):
    assert store.append("d1", 0, "2024-01-01T00:00:00Z")["watts"] == 0.0


def test_append_does_not_deduplicate(store, database):
    store.append("d1", 5, "2024-01-01T00:00:00Z")
    store.append("d1", 5, "2024-01-01T00:00:00Z")
    assert database.energy_samples.count_documents({}) == 2


def test_query_newest_first(store):
    store.append("d1", 1, "2024-01-01T00:00:00Z")
    store.append("d1", 2, "2024-01-02T00:00:00Z")

    samples = store.query(device_id="d1", start="2023-12-31", end="2024-01-03")

    assert [s["watts"] for s in samples] == [2.0, 1.0]


def test_query_bounds_are_inclusive(store):
    for day in range(1, 6):
        store.append("d1", day, f"2024-01-0{day}T00:00:00Z")

    samples = store.query(start="2024-01-02T00:00:00Z", end="2024-01-04T00:00:00Z")
    assert [s["watts"] for s in samples] == [4.0, 3.0, 2.0]

    assert [s["watts"] for s in store.query(start="2024-01-04T00:00:00Z")] == [5.0, 4.0]
    assert [s["watts"] for s in store.query(end="2024-01-02T00:00:00Z")] == [2.0, 1.0]


def test_query_filters_by_device(store):
    store.append("d1", 1, "2024-01-01T00:00:00Z")
    store.append("d2", 2, "2024-01-01T00:00:00Z")

    samples = store.query(device_id="d2")

    assert len(samples) == 1
    assert samples[0]["deviceId"] == "d2"


def test_query_caps_at_1000_most_recent(store, database):
    base = datetime(2024, 1, 1)
    database.energy_samples.insert_many([
        {"deviceId": "d1", "watts": float(i), "timestamp": base + timedelta(minutes=i)}
        for i in range(1001)
    ])

    samples = store.query(device_id="d1")

    assert len(samples) == 1000
    assert samples[0]["watts"] == 1000.0
    assert samples[-1]["watts"] == 1.0


def test_query_rejects_bad_bound(store):
    with pytest.raises(ValidationError, match="start"):
        store.query(start="yesterday-ish")


def test_energy_filter_ignores_blank_values():
    assert energy_filter("", "", None) == {}
    assert energy_filter("d1") == {"deviceId": "d1"}
    assert energy_filter(end="2024-01-01") == {"timestamp": {"$lte": datetime(2024, 1, 1)}}
