"""Unit tests for in-memory sequence store operations."""

from __future__ import annotations

import io

import pytest

from core.errors import StatDataInputError, StatDataNotLoadedError
from core.types import SlotSummary
from store.sequence_store import SequenceStore


def test_load_then_access_returns_same_values() -> None:
    """Loading one sequence should round-trip through access."""
    store = SequenceStore()

    store.load([3, "x", None, 4.5])

    assert store.access() == [3, "x", None, 4.5]


def test_load_flat_values_creates_one_anonymous_slot() -> None:
    """Scalar arguments should load into slot 0."""
    store = SequenceStore()

    store.load(1, 2, 3)

    assert store.list_slots() == (SlotSummary(index=0, label=None, count=3),)


def test_load_clears_all_previous_slots() -> None:
    """A second load should drop every slot regardless of labels."""
    store = SequenceStore()
    store.load(first=[1, 2], second=[3])

    store.load(first=[9])

    assert store.ndata() == 1 and store.access(label="first") == [9]


def test_load_without_arguments_empties_store(labelled_store) -> None:
    """Load without data should leave an empty store."""
    labelled_store.load()

    assert labelled_store.ndata() == 0


def test_load_with_invalid_input_keeps_previous_slots(labelled_store) -> None:
    """Rejected input should not clear the store."""
    with pytest.raises(StatDataInputError):
        labelled_store.load([1], 2)

    assert labelled_store.labels() == ("aname", "anothername")


def test_add_under_existing_label_appends() -> None:
    """Adding twice under one label should concatenate the sequences."""
    store = SequenceStore()

    store.add(aname=[1, 2])
    store.add(aname=[3])

    assert store.access(label="aname") == [1, 2, 3] and store.ndata() == 1


def test_add_new_label_creates_slot_after_existing(labelled_store) -> None:
    """A fresh label should be bound to a new slot at the end."""
    labelled_store.add("third", [7, 8])

    assert labelled_store.list_slots()[-1] == SlotSummary(index=2, label="third", count=2)


def test_add_anonymous_sequences_append_by_position() -> None:
    """Anonymous sequences should extend slots at matching positions."""
    store = SequenceStore()
    store.load([1], [10])

    store.add([2], [20], [200])

    assert [store.access(index=i) for i in range(3)] == [[1, 2], [10, 20], [200]]


def test_add_flat_values_appends_to_first_slot(labelled_store) -> None:
    """Flat values should be appended to slot 0 even when labeled."""
    labelled_store.add(4, 5)

    assert labelled_store.access(label="aname") == [1, 2, 3, 4, 5]


def test_add_mixed_known_and_new_labels() -> None:
    """One call may append to a bound label and create another."""
    store = SequenceStore()
    store.load(a=[1])

    store.add({"a": [2], "b": [3]})

    assert store.access(label="a") == [1, 2] and store.access(label="b") == [3]


def test_add_rejects_non_sequence_map_values_without_mutation(labelled_store) -> None:
    """Invalid labeled data should not partially apply."""
    with pytest.raises(StatDataInputError):
        labelled_store.add({"aname": [9], "broken": 5})

    assert labelled_store.access(label="aname") == [1, 2, 3]


def test_stored_data_is_isolated_from_caller_lists() -> None:
    """Editing the loaded list or an accessed copy should not change the store."""
    store = SequenceStore()
    values = [1, 2]
    store.load(values)
    values.append(3)

    store.access().append(4)

    assert store.access() == [1, 2]


def test_access_index_takes_precedence_over_label(labelled_store) -> None:
    """An explicit index should win over a label."""
    values = labelled_store.access(index=1, label="aname")

    assert values == ["a", "b"]


def test_access_blank_label_defaults_to_first_slot(labelled_store) -> None:
    """A blank label should behave like no selector."""
    assert labelled_store.access(label=" ") == [1, 2, 3]


@pytest.mark.parametrize("selector", [{"index": 5}, {"index": -1}, {"label": "missing"}])
def test_access_raises_for_unknown_selector(labelled_store, selector: dict) -> None:
    """Unresolvable selectors should raise not-loaded errors."""
    with pytest.raises(StatDataNotLoadedError):
        labelled_store.access(**selector)


def test_access_raises_on_empty_store() -> None:
    """Default access should fail when nothing is loaded."""
    with pytest.raises(StatDataNotLoadedError):
        SequenceStore().access()


def test_access_rejects_non_integer_index(labelled_store) -> None:
    """Index selectors must be integers."""
    with pytest.raises(StatDataInputError):
        labelled_store.access(index="1")


def test_unload_without_selector_empties_store(labelled_store) -> None:
    """Unload without arguments should remove every slot."""
    labelled_store.unload()

    assert labelled_store.ndata() == 0


def test_unload_label_removes_only_that_slot(labelled_store) -> None:
    """Unloading by label should keep the other slots."""
    labelled_store.unload(label="anothername")

    assert labelled_store.labels() == ("aname",)


def test_unload_shifts_later_slots_and_labels() -> None:
    """Later slots should move down and stay reachable by label."""
    store = SequenceStore()
    store.load(a=[1], b=[2], c=[3])

    store.unload(index=0)

    assert store.access(index=0) == [2] and store.access(label="c") == [3]


def test_unload_raises_for_unknown_label(labelled_store) -> None:
    """Unloading an unknown label should fail without changes."""
    with pytest.raises(StatDataNotLoadedError):
        labelled_store.unload(label="missing")

    assert labelled_store.ndata() == 2


def test_label_can_be_reused_after_unload() -> None:
    """An unloaded label should be free to bind a new slot."""
    store = SequenceStore()
    store.load(a=[1], b=[2])
    store.unload(label="a")

    store.add(a=[5])

    assert store.labels() == ("b", "a") and store.access(label="a") == [5]


def test_copy_is_independent(labelled_store) -> None:
    """Mutating a copy should not affect the original."""
    duplicate = labelled_store.copy()

    duplicate.add(aname=[4])
    duplicate.unload(label="anothername")

    assert labelled_store.access(label="aname") == [1, 2, 3] and labelled_store.ndata() == 2


def test_clone_alias_matches_copy(labelled_store) -> None:
    """The clone alias should produce the same listing."""
    assert labelled_store.clone().list_slots() == labelled_store.list_slots()


def test_share_into_empty_store_reproduces_slots() -> None:
    """Sharing should keep slot count, labels, and content."""
    source = SequenceStore()
    source.load([1, 2], [3])
    source.add(named=[4, 5])
    target = SequenceStore()

    target.share(source)

    assert target.list_slots() == source.list_slots() and [
        target.access(index=i) for i in range(3)
    ] == [[1, 2], [3], [4, 5]]


def test_share_appends_to_matching_labels(labelled_store) -> None:
    """Shared labeled slots should append to slots bound to the same label."""
    other = SequenceStore()
    other.load(aname=[4], extra=[0])

    labelled_store.share(other)

    assert labelled_store.access(label="aname") == [1, 2, 3, 4] and labelled_store.ndata() == 3


def test_validity_checks_resolve_selectors(labelled_store) -> None:
    """Predicates should check stored sequences selected by label."""
    assert labelled_store.all_numeric(label="aname") and not labelled_store.all_numeric(
        label="anothername"
    )


def test_validity_checks_accept_literal_sequences(labelled_store) -> None:
    """Predicates should check a literal sequence when one is given."""
    assert labelled_store.all_proportions([0, 0.5, 1]) and not labelled_store.all_full([1, ""])


def test_validity_checks_reject_scalar_data(labelled_store) -> None:
    """Literal data must be a sequence."""
    with pytest.raises(StatDataInputError):
        labelled_store.all_full("abc")


def test_crosslag_uses_stored_slots() -> None:
    """Store crosslag should realign slot 0 against slot 1 by default."""
    store = SequenceStore()
    store.load(list("cpwps"), list("psswr"))

    target, response = store.crosslag(1)

    assert target == list("pwps") and response == list("pssw")


def test_crosslag_leaves_stored_slots_untouched() -> None:
    """Looping realignment should not rotate the stored target."""
    store = SequenceStore()
    store.load(target=list("cpwps"), response=list("psswr"))

    rotated, _ = store.crosslag(1, loop=True, target="target", response="response")

    assert rotated == list("scpwp") and store.access(label="target") == list("cpwps")


def test_crosslag_rejects_invalid_selector(labelled_store) -> None:
    """Selectors must be sequences, indices, or labels."""
    with pytest.raises(StatDataInputError):
        labelled_store.crosslag(1, target=1.5)


def test_dump_vals_joins_with_delimiter(labelled_store) -> None:
    """Value dumps should join values and write one line."""
    stream = io.StringIO()

    line = labelled_store.dump_vals(label="aname", delim=",", file=stream)

    assert line == "1,2,3" and stream.getvalue() == "1,2,3\n"


def test_dump_vals_defaults_to_space_delimiter(capsys) -> None:
    """An empty delimiter should fall back to a single space."""
    store = SequenceStore()
    store.load([1, None, "x"])

    store.dump_vals(delim="")

    assert capsys.readouterr().out == "1  x\n"


def test_dump_list_renders_table(labelled_store) -> None:
    """The slot table should list each slot with its value count."""
    stream = io.StringIO()

    labelled_store.dump_list(file=stream)

    assert "| 1     | anothername | 2 |" in stream.getvalue().splitlines()


def test_aliases_share_add_semantics() -> None:
    """Legacy aliases should behave like the primary methods."""
    store = SequenceStore()
    store.load_data(a=[1])

    store.update(a=[2])
    store.append_data(a=[3])

    assert store.get_data(label="a") == [1, 2, 3]


def test_listing_and_numeric_aliases_match_primary_methods(labelled_store) -> None:
    """The dump_data, list_data and all_numerical aliases should mirror their targets."""
    line = labelled_store.dump_data(label="aname", file=io.StringIO())

    table = labelled_store.list_data(file=io.StringIO())

    assert (
        line == "1 2 3"
        and table == labelled_store.dump_list(file=io.StringIO())
        and labelled_store.all_numerical(label="aname") is True
    )
