"""Argument shape classification for load and add.

This module turns the loosely shaped arguments accepted by the store
into one tagged variant, then resolves that variant into a change set
keyed by target slot index. It never touches store state directly.

Accepted shapes, first match wins:

1. labeled map: one mapping, keyword arguments, or an even-length
   alternating ``label, sequence, ...`` argument list
2. sequence list: one or more sequences, or one sequence of sequences
3. flat values: scalars only, forming a single anonymous sequence
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence

from core.errors import StatDataInputError
from core.types import FlatValues, LabeledMap, NormalizedEntry, ParsedInput, SequenceList


def is_sequence(value: object) -> bool:
    """Return whether a value can be stored as a sequence.

    Args:
        value: Candidate value.

    Returns:
        True for non-string sequences such as lists and tuples.
    """
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def is_label(value: object) -> bool:
    """Return whether a value is usable as a slot label."""
    return isinstance(value, str) and bool(value.strip())


def classify_arguments(args: tuple[Any, ...], kwargs: Mapping[str, Any]) -> ParsedInput:
    """Classify call arguments into one accepted input shape.

    Args:
        args: Positional arguments of a load/add call.
        kwargs: Keyword arguments of a load/add call.

    Returns:
        Parsed input variant.

    Raises:
        StatDataInputError: If the arguments match no accepted shape.
    """
    if kwargs:
        if args:
            raise StatDataInputError(
                "Cannot mix positional and keyword arguments when loading data. "
                "Pass either labeled sequences or anonymous sequences."
            )
        return _labeled_map(kwargs.items(), "keyword arguments")
    if len(args) == 1 and isinstance(args[0], Mapping):
        return _labeled_map(args[0].items(), "mapping")
    if _is_hash_of_sequences(args):
        return LabeledMap(items=tuple(_collapse_pairs(args).items()))
    if not args:
        return SequenceList(sequences=())
    if all(is_sequence(arg) for arg in args):
        if len(args) == 1 and _is_sequence_of_sequences(args[0]):
            return SequenceList(sequences=tuple(tuple(item) for item in args[0]))
        return SequenceList(sequences=tuple(tuple(arg) for arg in args))
    if any(is_sequence(arg) or isinstance(arg, Mapping) for arg in args):
        raise StatDataInputError(
            "Don't know how to load/add data: arguments mix sequences with other values. "
            "Pass scalars only, sequences only, or label/sequence pairs."
        )
    return FlatValues(values=tuple(args))


def resolve_targets(
    parsed: ParsedInput,
    slot_count: int,
    label_index: Mapping[str, int],
) -> dict[int, NormalizedEntry]:
    """Resolve a parsed input into entries keyed by target index.

    Args:
        parsed: Classified input.
        slot_count: Number of slots currently in the store.
        label_index: Current label to slot position mapping.

    Returns:
        Change set in application order. Entries with a label create a
        new slot; entries without one append to the slot at their index.
    """
    if isinstance(parsed, FlatValues):
        return {0: NormalizedEntry(sequence=parsed.values)}
    if isinstance(parsed, SequenceList):
        return {
            index: NormalizedEntry(sequence=sequence)
            for index, sequence in enumerate(parsed.sequences)
        }
    entries: dict[int, NormalizedEntry] = {}
    next_index = slot_count
    for label, sequence in parsed.items:
        existing_index = label_index.get(label)
        if existing_index is not None:
            # known label: append, keep the existing binding
            entries[existing_index] = NormalizedEntry(sequence=sequence)
            continue
        entries[next_index] = NormalizedEntry(sequence=sequence, label=label)
        next_index += 1
    return entries


def normalize_arguments(
    args: tuple[Any, ...],
    kwargs: Mapping[str, Any],
    slot_count: int,
    label_index: Mapping[str, int],
) -> dict[int, NormalizedEntry]:
    """Classify and resolve call arguments in one step.

    Args:
        args: Positional arguments of a load/add call.
        kwargs: Keyword arguments of a load/add call.
        slot_count: Number of slots currently in the store.
        label_index: Current label to slot position mapping.

    Returns:
        Change set keyed by target index.

    Raises:
        StatDataInputError: If the arguments match no accepted shape.
    """
    parsed = classify_arguments(args, kwargs)
    return resolve_targets(parsed, slot_count, label_index)


def _labeled_map(items: Iterable[tuple[object, object]], context: str) -> LabeledMap:
    """Validate label/sequence pairs from a mapping.

    Args:
        items: Key/value pairs.
        context: Argument form named in error messages.

    Returns:
        Labeled map variant.

    Raises:
        StatDataInputError: If the mapping is empty or holds invalid pairs.
    """
    pairs: list[tuple[str, tuple[Any, ...]]] = []
    for label, sequence in items:
        if not is_label(label):
            raise StatDataInputError(
                f"Invalid label {label!r} in {context}: labels must be non-empty strings."
            )
        if not is_sequence(sequence):
            raise StatDataInputError(
                f"Invalid data for label '{label}' in {context}: "
                f"expected a sequence, got {type(sequence).__name__}."
            )
        pairs.append((str(label), tuple(sequence)))
    if not pairs:
        raise StatDataInputError(f"No labeled sequences found in {context}.")
    return LabeledMap(items=tuple(pairs))


def _is_hash_of_sequences(args: tuple[Any, ...]) -> bool:
    if not args or len(args) % 2:
        return False
    labels = args[0::2]
    values = args[1::2]
    return all(is_label(label) for label in labels) and all(is_sequence(value) for value in values)


def _collapse_pairs(args: tuple[Any, ...]) -> dict[str, tuple[Any, ...]]:
    # a repeated label keeps its first position and its last value
    collapsed: dict[str, tuple[Any, ...]] = {}
    for label, sequence in zip(args[0::2], args[1::2]):
        collapsed[label] = tuple(sequence)
    return collapsed


def _is_sequence_of_sequences(value: Sequence[Any]) -> bool:
    return len(value) > 0 and all(is_sequence(item) for item in value)
