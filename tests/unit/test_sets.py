"""
Unit tests for practice set partitioning and the hide-mastered filter.
"""

import pytest

from kanadrill.core.mastery import compute_mastered
from kanadrill.study.sets import filter_sets, mastered_count, partition_sets


def _ids(n):
    return [f"k{i}" for i in range(n)]


class TestPartitionSets:
    def test_sizes_and_names(self):
        sets = partition_sets(_ids(25), set(), items_per_set=10)
        assert [s.name for s in sets] == ["Set 1", "Set 2", "Set 3"]
        assert [len(s.item_ids) for s in sets] == [10, 10, 5]

    def test_prev_length_offsets_names(self):
        sets = partition_sets(_ids(10), set(), items_per_set=10, prev_length=4)
        assert sets[0].name == "Set 5"

    def test_set_mastered_only_when_every_item_mastered(self):
        ids = _ids(20)
        ledger = {i: {"correct": 10, "incorrect": 0} for i in ids[:10]}
        ledger[ids[10]] = {"correct": 10, "incorrect": 0}

        sets = partition_sets(ids, compute_mastered(ledger), items_per_set=10)

        assert sets[0].is_mastered is True
        assert sets[1].is_mastered is False

    def test_empty_collection(self):
        assert partition_sets([], set()) == []

    def test_rejects_zero_set_size(self):
        with pytest.raises(ValueError):
            partition_sets(_ids(3), set(), items_per_set=0)


class TestFilterSets:
    def test_hide_mastered(self):
        ids = _ids(30)
        mastered = set(ids[10:20])
        sets = partition_sets(ids, mastered, items_per_set=10)

        visible = filter_sets(sets, hide_mastered=True)

        assert [s.name for s in visible] == ["Set 1", "Set 3"]
        assert mastered_count(sets) == 1

    def test_show_all(self):
        sets = partition_sets(_ids(30), set(_ids(30)), items_per_set=10)
        assert len(filter_sets(sets, hide_mastered=False)) == 3
        assert mastered_count(sets) == 3
