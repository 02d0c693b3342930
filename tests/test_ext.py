"""Tests for collection helpers."""

import pytest

from hamachi import Interval, types
from hamachi.ext import freq, index_by, where, wherent


@pytest.fixture
def people(model):
    return [
        model({"name": "Anna", "gender": "female", "age": 29}),
        model({"name": "Sophie", "gender": "female", "age": 32}),
        model({"name": "Bob", "gender": "male", "age": 45}),
    ]


class TestIndexBy:
    def test_maps_key_to_item(self, people):
        index = index_by(people, lambda person: person.name)
        assert list(index) == ["Anna", "Sophie", "Bob"]
        assert index["Bob"].age == 45

    def test_later_items_win(self):
        assert index_by(["apple", "avocado"], lambda word: word[0]) == {"a": "avocado"}


class TestFreq:
    def test_orders_least_to_most_frequent(self):
        counts = freq("aaabbc")
        assert list(counts) == ["c", "b", "a"]
        assert counts == {"a": 3, "b": 2, "c": 1}

    def test_with_key(self, people):
        assert freq(people, key=lambda person: person.gender) == {"male": 1, "female": 2}


class TestWhere:
    def test_literal_pattern(self, people):
        assert [p.name for p in where(people, gender="female")] == ["Anna", "Sophie"]

    def test_interval_pattern(self, people):
        assert [p.name for p in where(people, age=Interval(30, 50))] == ["Sophie", "Bob"]

    def test_multiple_patterns(self, people):
        matched = where(people, gender="female", age=Interval(30, 50))
        assert [p.name for p in matched] == ["Sophie"]

    def test_class_and_field_patterns(self, people):
        assert len(where(people, name=str)) == 3
        assert len(where(people, gender=types.enum("male"))) == 1

    def test_missing_attribute_matches_none(self, people):
        assert where(people, nickname=None) == people

    def test_wherent_is_complement(self, people):
        assert [p.name for p in wherent(people, gender="female")] == ["Bob"]
        assert [p.name for p in wherent(people, gender="female", age=Interval(30, 50))] == [
            "Anna",
            "Bob",
        ]
