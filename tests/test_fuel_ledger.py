#!/usr/bin/env python3
"""Tests for FuelLedger."""
import random
from dataclasses import replace
from datetime import datetime

import pytest

from carledger import FuelEntry, FuelLedger


@pytest.fixture
def ledger():
    return FuelLedger()


@pytest.fixture
def entry():
    return FuelEntry(fuel_quantity=10, cost=35, date=datetime(2024, 3, 5, 8, 30))


class TestAdd:
    """Tests for FuelLedger.add."""

    def test_round_trip(self, ledger, entry):
        """Stored entry equals the input except for id and stamped car model."""
        entry_id = ledger.add(entry, "Civic")
        stored = ledger.list()[0]
        assert stored.id == entry_id
        assert stored.car_model == "Civic"
        assert replace(stored, id=None, car_model="") == entry

    def test_stamps_car_model_over_input(self, ledger, entry):
        ledger.add(replace(entry, car_model="Accord"), "Civic")
        assert ledger.list()[0].car_model == "Civic"

    def test_input_is_not_modified(self, ledger, entry):
        ledger.add(entry, "Civic")
        assert entry.id is None
        assert entry.car_model == ""


class TestUpdate:
    """Tests for FuelLedger.update."""

    def test_partial_update(self, ledger, entry):
        """Only the given fields change; car model is fixed."""
        entry_id = ledger.add(entry, "Civic")
        assert ledger.update(entry_id, cost=40) is True
        stored = ledger.get(entry_id)
        assert stored.cost == 40
        assert stored.fuel_quantity == 10
        assert stored.date == datetime(2024, 3, 5, 8, 30)
        assert stored.car_model == "Civic"

    def test_update_all_mutable_fields(self, ledger, entry):
        entry_id = ledger.add(entry, "Civic")
        ledger.update(
            entry_id, date=datetime(2024, 4, 1), fuel_quantity=12.5, cost=44.0
        )
        stored = ledger.get(entry_id)
        assert (stored.date, stored.fuel_quantity, stored.cost) == (
            datetime(2024, 4, 1),
            12.5,
            44.0,
        )

    def test_unknown_id(self, ledger, entry):
        ledger.add(entry, "Civic")
        before = ledger.list()
        other = FuelLedger()
        stray = other.add(entry, "Civic")
        assert ledger.update(stray, cost=1) is False
        assert ledger.list() == before


class TestRemove:
    """Tests for FuelLedger removal."""

    def test_remove_by_id_and_index(self, ledger, entry):
        first = ledger.add(entry, "Civic")
        ledger.add(entry, "Accord")
        ledger.add(entry, "Fit")
        assert ledger.remove(first) is True
        assert ledger.remove_at(1) is True
        assert [e.car_model for e in ledger.list()] == ["Accord"]

    def test_remove_missing(self, ledger, entry):
        entry_id = ledger.add(entry, "Civic")
        ledger.remove(entry_id)
        assert ledger.remove(entry_id) is False
        assert ledger.remove_at(0) is False
        assert len(ledger) == 0

    def test_remove_offsets(self, ledger, entry):
        for model in ("Civic", "Accord", "Fit", "Prius"):
            ledger.add(entry, model)
        assert ledger.remove_offsets([3, 1]) == 2
        assert [e.car_model for e in ledger.list()] == ["Civic", "Fit"]

    def test_ids_unique_after_removals(self, ledger, entry):
        """Ids are never reused, even after removals."""
        ids = [ledger.add(entry, "Civic") for _ in range(3)]
        ledger.remove(ids[0])
        ledger.remove_at(0)
        ids.append(ledger.add(entry, "Accord"))
        assert len(set(ids)) == 4

    def test_length_tracks_adds_and_removes(self, ledger, entry):
        """len == adds - successful removes, never negative."""
        rng = random.Random(11)
        adds = removes = 0
        for _ in range(200):
            if rng.random() < 0.5:
                ledger.add(entry, "Civic")
                adds += 1
            elif rng.random() < 0.5:
                entries = ledger.list()
                target = rng.choice(entries).id if entries else None
                if target is not None and ledger.remove(target):
                    removes += 1
            elif ledger.remove_at(rng.randrange(-2, 5)):
                removes += 1
            assert len(ledger.list()) == adds - removes >= 0
