#!/usr/bin/env python3
"""Tests for UnitMode enum."""
import pytest

from carledger import UnitMode


class TestUnitMode:
    """Tests for UnitMode labels and lookup."""

    def test_labels(self):
        """Values are the labels shown to the user."""
        assert UnitMode.DISTANCE_PER_VOLUME.value == "Miles per Gallon"
        assert UnitMode.VOLUME_PER_DISTANCE.value == "Kilometers per Liter"

    def test_short_names(self):
        assert UnitMode.DISTANCE_PER_VOLUME.short_name == "mpg"
        assert UnitMode.VOLUME_PER_DISTANCE.short_name == "kpl"

    def test_from_short_name_case_insensitive(self):
        assert UnitMode.from_name("MPG") is UnitMode.DISTANCE_PER_VOLUME
        assert UnitMode.from_name(" kpl ") is UnitMode.VOLUME_PER_DISTANCE

    def test_from_label(self):
        assert UnitMode.from_name("Kilometers per Liter") is UnitMode.VOLUME_PER_DISTANCE

    def test_unknown_name_raises(self):
        with pytest.raises(ValueError, match="Unknown unit"):
            UnitMode.from_name("furlongs")
