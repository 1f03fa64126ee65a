#!/usr/bin/env python3
"""Tests for VehicleStore."""
import random
from dataclasses import replace
from datetime import date

import pytest

from carledger import Vehicle, VehicleStore


@pytest.fixture
def store():
    return VehicleStore()


def make_vehicle(model: str, mileage: int = 10000) -> Vehicle:
    return Vehicle(model, mileage, date(2024, 1, 15), "good")


class TestAdd:
    """Tests for VehicleStore.add."""

    def test_assigns_id_and_appends(self, store):
        vehicle_id = store.add(make_vehicle("Civic"))
        vehicles = store.list()
        assert len(vehicles) == 1
        assert vehicles[0].id == vehicle_id
        assert vehicles[0].model == "Civic"

    def test_input_is_not_modified(self, store):
        """The store keeps its own copy; the caller's object keeps id=None."""
        vehicle = make_vehicle("Civic")
        store.add(vehicle)
        assert vehicle.id is None

    def test_insertion_order(self, store):
        for model in ("Civic", "Accord", "Fit"):
            store.add(make_vehicle(model))
        assert [v.model for v in store.list()] == ["Civic", "Accord", "Fit"]

    def test_ids_unique_after_removals(self, store):
        """Ids are never reused, even after removals."""
        ids = [store.add(make_vehicle("Civic")) for _ in range(3)]
        store.remove(ids[1])
        ids.append(store.add(make_vehicle("Accord")))
        assert len(set(ids)) == 4


class TestUpdate:
    """Tests for VehicleStore.update."""

    def test_replaces_by_id(self, store):
        vehicle_id = store.add(make_vehicle("Civic", 42000))
        edited = replace(store.get(vehicle_id), mileage=43000, tire_condition="worn")
        assert store.update(edited) is True
        stored = store.get(vehicle_id)
        assert stored.mileage == 43000
        assert stored.tire_condition == "worn"

    def test_unknown_id_leaves_store_unchanged(self, store):
        """update with a non-existent id changes neither content nor order."""
        store.add(make_vehicle("Civic"))
        store.add(make_vehicle("Accord"))
        before = store.list()
        stray = store.add(make_vehicle("Fit"))
        store.remove(stray)
        assert store.update(replace(make_vehicle("Prius"), id=stray)) is False
        assert store.update(make_vehicle("Prius")) is False
        assert store.list() == before


class TestRemove:
    """Tests for VehicleStore.remove and friends."""

    def test_remove_by_id(self, store):
        civic = store.add(make_vehicle("Civic"))
        store.add(make_vehicle("Accord"))
        assert store.remove(civic) is True
        assert [v.model for v in store.list()] == ["Accord"]

    def test_remove_twice_is_harmless(self, store):
        civic = store.add(make_vehicle("Civic"))
        assert store.remove(civic) is True
        assert store.remove(civic) is False
        assert len(store) == 0

    def test_remove_at(self, store):
        store.add(make_vehicle("Civic"))
        store.add(make_vehicle("Accord"))
        assert store.remove_at(0) is True
        assert [v.model for v in store.list()] == ["Accord"]

    def test_remove_at_out_of_range(self, store):
        store.add(make_vehicle("Civic"))
        assert store.remove_at(1) is False
        assert store.remove_at(-1) is False
        assert len(store) == 1

    def test_remove_offsets(self, store):
        """Positions refer to the list before removal; bad ones are ignored."""
        for model in ("Civic", "Accord", "Fit"):
            store.add(make_vehicle(model))
        assert store.remove_offsets([0, 2, 2, 5]) == 2
        assert [v.model for v in store.list()] == ["Accord"]

    def test_length_tracks_adds_and_removes(self, store):
        """len == adds - successful removes, never negative."""
        rng = random.Random(7)
        adds = removes = 0
        ids = []
        for _ in range(200):
            if rng.random() < 0.5:
                ids.append(store.add(make_vehicle("Civic")))
                adds += 1
            elif ids and rng.random() < 0.5:
                if store.remove(ids.pop(rng.randrange(len(ids)))):
                    removes += 1
            else:
                if store.remove_at(rng.randrange(-2, 5)):
                    removes += 1
                    ids = [v.id for v in store.list()]
            assert len(store.list()) == adds - removes >= 0


class TestQueries:
    """Tests for list/get snapshots."""

    def test_list_is_a_snapshot(self, store):
        """Changing a returned vehicle does not change the store."""
        store.add(make_vehicle("Civic"))
        snapshot = store.list()
        snapshot[0].model = "Changed"
        store.add(make_vehicle("Accord"))
        assert len(snapshot) == 1
        assert store.list()[0].model == "Civic"

    def test_get_unknown(self, store):
        assert store.get(None) is None

    def test_iteration(self, store):
        store.add(make_vehicle("Civic"))
        assert [v.model for v in store] == ["Civic"]
