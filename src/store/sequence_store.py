"""In-memory sequence store.

This module holds an ordered collection of slots, each wrapping one
sequence and an optional unique label. It provides load, add, access,
and unload operations plus validity checks, lag realignment, listing,
and save/restore through the serializer.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Mapping, Sequence, TextIO

from core.config import StatDataConfig
from core.errors import StatDataInputError, StatDataIOError, StatDataNotLoadedError
from core.logging_config import configure_logging, get_logger
from core.types import NormalizedEntry, Slot, SlotSummary
from store import validity
from store.lag_transform import crosslag as realign
from store.serializer import (
    read_store_file,
    resolve_compression,
    resolve_serializer,
    write_store_file,
)
from store.shape_normalizer import is_label, is_sequence, normalize_arguments
from store.table_renderer import render_slot_table

_LOGGER = get_logger(__name__)


class SequenceStore:
    """Ordered store of anonymous and labeled sequences.

    Slots keep load/add order. Anonymous slots are addressed by position,
    labeled slots by position or label. Index 0 is the default target.
    Read operations return copies; the store owns its sequences.
    """

    def __init__(self, config: StatDataConfig | None = None) -> None:
        """Create an empty store.

        Args:
            config: Optional runtime configuration.
        """
        if config is None:
            config = StatDataConfig.from_env()
            configure_logging(config.log_level)
        self._config = config
        self._slots: list[Slot] = []
        self._label_index: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._slots)

    def __repr__(self) -> str:
        return f"SequenceStore(ndata={len(self._slots)}, labels={list(self.labels())})"

    @property
    def config(self) -> StatDataConfig:
        return self._config

    def load(self, *args: Any, **kwargs: Any) -> None:
        """Replace all slots with newly supplied data.

        Every existing slot is removed, whatever its label, before the
        arguments are added. Calling without arguments empties the store.

        Raises:
            StatDataInputError: If the arguments match no accepted shape;
                the store is left unchanged.
        """
        entries = normalize_arguments(args, kwargs, 0, {})
        self._clear()
        self._apply(entries)

    def add(self, *args: Any, **kwargs: Any) -> None:
        """Add sequences to the store.

        A new label creates a slot at the end of the store. A label that
        is already bound appends to that slot rather than replacing it.
        Anonymous sequences append to the slots at positions 0, 1, ...
        in argument order, creating slots where none exist yet.

        Accepted argument shapes:
            add(1, 2, 3)                    one anonymous sequence
            add([1, 2], [3, 4])             anonymous sequences by position
            add({"a": [1, 2]}) or add(a=[1, 2])
            add("a", [1, 2], "b", [3])      alternating labels and sequences

        Raises:
            StatDataInputError: If the arguments match no accepted shape;
                the store is left unchanged.
        """
        entries = normalize_arguments(args, kwargs, len(self._slots), self._label_index)
        self._apply(entries)

    def access(self, index: int | None = None, label: str | None = None) -> list[Any]:
        """Return a copy of one slot's sequence.

        Args:
            index: Slot position; takes precedence over label.
            label: Slot label.

        Returns:
            Copy of the resolved sequence; slot 0 when no selector is given.

        Raises:
            StatDataNotLoadedError: If the selector resolves to no slot.
        """
        position = self._resolve(index, label, "access")
        return list(self._slots[position].sequence)

    def unload(self, index: int | None = None, label: str | None = None) -> None:
        """Remove one slot, or every slot when no selector is given.

        Removing a slot shifts the positions of all later slots down by one.

        Args:
            index: Slot position; takes precedence over label.
            label: Slot label.

        Raises:
            StatDataNotLoadedError: If the selector resolves to no slot.
        """
        if index is None and label is None:
            self._clear()
            return
        position = self._resolve(index, label, "unload")
        removed = self._slots.pop(position)
        self._rebuild_label_index()
        _LOGGER.debug("slot_unloaded", index=position, label=removed.label, ndata=len(self._slots))

    def ndata(self) -> int:
        """Return the number of slots."""
        return len(self._slots)

    def labels(self) -> tuple[str, ...]:
        """Return bound labels in slot order."""
        return tuple(slot.label for slot in self._slots if slot.label is not None)

    def list_slots(self) -> tuple[SlotSummary, ...]:
        """Return a read-only listing of the slots in store order."""
        return tuple(
            SlotSummary(index=position, label=slot.label, count=len(slot.sequence))
            for position, slot in enumerate(self._slots)
        )

    def copy(self) -> "SequenceStore":
        """Return an independent store holding copies of all slots."""
        duplicate = SequenceStore(self._config)
        duplicate._slots = [
            Slot(sequence=list(slot.sequence), label=slot.label) for slot in self._slots
        ]
        duplicate._rebuild_label_index()
        return duplicate

    def share(self, other: "SequenceStore") -> None:
        """Import all slots of another store with add semantics.

        Labeled slots are added under their label. The anonymous slot at
        position i of the other store is appended to position i here.

        Args:
            other: Store to import from; it is not modified.
        """
        self._import_slots(other._slots, keep=True)
        _LOGGER.debug("store_shared", imported=len(other._slots), ndata=len(self._slots))

    def all_full(
        self,
        data: Sequence[Any] | None = None,
        index: int | None = None,
        label: str | None = None,
    ) -> bool:
        """Return whether every value carries content.

        Args:
            data: Literal sequence to check instead of a stored one.
            index: Slot position.
            label: Slot label.

        Returns:
            False on the first empty value; True for an empty sequence.
        """
        return validity.all_full(self._select(data, index, label))

    def all_numeric(
        self,
        data: Sequence[Any] | None = None,
        index: int | None = None,
        label: str | None = None,
    ) -> bool:
        """Return whether every value is numeric; see ``all_full`` for arguments."""
        return validity.all_numeric(self._select(data, index, label))

    def all_proportions(
        self,
        data: Sequence[Any] | None = None,
        index: int | None = None,
        label: str | None = None,
    ) -> bool:
        """Return whether every value is a number within [0, 1]."""
        return validity.all_proportions(self._select(data, index, label))

    def crosslag(
        self,
        lag: int,
        loop: bool = False,
        target: Sequence[Any] | int | str = 0,
        response: Sequence[Any] | int | str = 1,
    ) -> tuple[list[Any], list[Any]]:
        """Realign two sequences by a signed lag.

        Args:
            lag: Signed shift of target against response.
            loop: Rotate the target instead of trimming both.
            target: Literal sequence, slot index, or slot label.
            response: Literal sequence, slot index, or slot label.

        Returns:
            Realigned target and response; stored slots are not modified.

        Raises:
            StatDataInputError: If lag or a selector is invalid.
            StatDataNotLoadedError: If a selector resolves to no slot.
        """
        target_values = self._sequence_for(target)
        response_values = self._sequence_for(response)
        return realign(target_values, response_values, lag, loop)

    def dump_vals(
        self,
        index: int | None = None,
        label: str | None = None,
        delim: str | None = None,
        file: TextIO | None = None,
    ) -> str:
        """Write one sequence as a delimited line.

        Args:
            index: Slot position.
            label: Slot label.
            delim: Value delimiter; the configured default when empty.
            file: Output stream, stdout by default.

        Returns:
            The written line without its newline.
        """
        separator = delim or self._config.delimiter
        values = self.access(index=index, label=label)
        line = separator.join("" if value is None else str(value) for value in values)
        print(line, file=file or sys.stdout)
        return line

    def dump_list(self, file: TextIO | None = None) -> str:
        """Write a table of slot index, label and value count.

        Args:
            file: Output stream, stdout by default.

        Returns:
            The rendered table.
        """
        table = render_slot_table(self.list_slots())
        (file or sys.stdout).write(table)
        return table

    def save(
        self,
        path: str | Path,
        serializer: str | None = None,
        compress: bool | None = None,
    ) -> Path:
        """Save every slot to a file.

        Args:
            path: Destination file path.
            serializer: ``json`` or ``yaml``; inferred from the suffix,
                then the configured default, when omitted.
            compress: Gzip the file; a ``.gz`` suffix or the configured
                default decides when omitted.

        Returns:
            Resolved destination path.

        Raises:
            StatDataIOError: If the path is blank or the file cannot be written.
        """
        target_path = _require_path(path, "saving")
        serializer_name = resolve_serializer(target_path, serializer, self._config.serializer)
        compressed = resolve_compression(target_path, compress, self._config.compress)
        write_store_file(target_path, self._slots, serializer_name, compressed)
        _LOGGER.info(
            "store_saved",
            path=str(target_path),
            serializer=serializer_name,
            compressed=compressed,
            ndata=len(self._slots),
        )
        return target_path

    def load_from_file(
        self,
        path: str | Path,
        serializer: str | None = None,
        keep: bool = False,
    ) -> None:
        """Restore slots from a file written by ``save``.

        Args:
            path: Source file path.
            serializer: ``json`` or ``yaml``; inferred when omitted.
                Gzip compression is detected from the file content.
            keep: Merge into the current slots instead of replacing them.

        Raises:
            StatDataIOError: If the path is blank, missing, or malformed;
                the store is left unchanged.
        """
        source_path = _require_path(path, "loading")
        serializer_name = resolve_serializer(source_path, serializer, self._config.serializer)
        slots = read_store_file(source_path, serializer_name)
        self._import_slots(slots, keep=keep)
        _LOGGER.info(
            "store_restored",
            path=str(source_path),
            serializer=serializer_name,
            keep=keep,
            ndata=len(self._slots),
        )

    load_data = load
    add_data = add
    append_data = add
    update = add
    get_data = access
    clone = copy
    dump_line = dump_vals
    dump_data = dump_vals
    list_data = dump_list
    save_to_file = save
    read = load_from_file
    open = load_from_file
    all_numerical = all_numeric

    def _apply(self, entries: Mapping[int, NormalizedEntry]) -> None:
        """Apply a normalized change set.

        Args:
            entries: Changes keyed by target slot index.
        """
        for position, entry in entries.items():
            if entry.label is not None:
                self._ensure_slot(position)
                self._slots[position] = Slot(sequence=list(entry.sequence), label=entry.label)
                self._label_index[entry.label] = position
                continue
            self._ensure_slot(position)
            self._slots[position].sequence.extend(entry.sequence)
        if entries:
            _LOGGER.debug(
                "sequences_added",
                targets=sorted(entries),
                labeled=sum(1 for entry in entries.values() if entry.label is not None),
                ndata=len(self._slots),
            )

    def _ensure_slot(self, position: int) -> None:
        while len(self._slots) <= position:
            self._slots.append(Slot())

    def _clear(self) -> None:
        cleared = len(self._slots)
        self._slots = []
        self._label_index = {}
        if cleared:
            _LOGGER.debug("store_cleared", removed=cleared)

    def _rebuild_label_index(self) -> None:
        self._label_index = {
            slot.label: position
            for position, slot in enumerate(self._slots)
            if slot.label is not None
        }

    def _import_slots(self, slots: Sequence[Slot], keep: bool) -> None:
        """Import slots with add semantics, keeping labels and anonymous positions.

        The import runs against a staged copy that replaces the current
        slots only once every slot has been applied.

        Args:
            slots: Slots to import in order.
            keep: Merge into the current slots instead of replacing them.
        """
        staged = self.copy() if keep else SequenceStore(self._config)
        for position, slot in enumerate(slots):
            if slot.label is not None:
                staged.add({slot.label: slot.sequence})
            else:
                staged._apply({position: NormalizedEntry(sequence=tuple(slot.sequence))})
        if not keep:
            self._clear()
        self._slots = staged._slots
        self._label_index = staged._label_index

    def _resolve(self, index: int | None, label: str | None, operation: str) -> int:
        """Resolve a selector to a slot position.

        Args:
            index: Slot position; takes precedence over label.
            label: Slot label.
            operation: Operation name for error messages.

        Returns:
            Valid slot position.

        Raises:
            StatDataInputError: If index is not an integer.
            StatDataNotLoadedError: If nothing is loaded at the selector.
        """
        if index is not None:
            if isinstance(index, bool) or not isinstance(index, int):
                raise StatDataInputError(
                    f"Invalid index {index!r} for {operation}: expected an integer position."
                )
            if 0 <= index < len(self._slots):
                return index
            raise StatDataNotLoadedError(
                f"Data for {operation} need to be loaded: no slot at index {index} "
                f"(store holds {len(self._slots)})."
            )
        if is_label(label):
            position = self._label_index.get(str(label))
            if position is None:
                raise StatDataNotLoadedError(
                    f"Data for {operation} need to be loaded: no slot labeled '{label}'."
                )
            return position
        if not self._slots:
            raise StatDataNotLoadedError(
                f"Data for {operation} need to be loaded: the store is empty."
            )
        return 0

    def _select(
        self,
        data: Sequence[Any] | None,
        index: int | None,
        label: str | None,
    ) -> list[Any]:
        if data is not None:
            if not is_sequence(data):
                raise StatDataInputError(
                    f"Invalid data to check: expected a sequence, got {type(data).__name__}."
                )
            return list(data)
        return self.access(index=index, label=label)

    def _sequence_for(self, selector: Sequence[Any] | int | str) -> list[Any]:
        if isinstance(selector, str):
            return self.access(label=selector)
        if isinstance(selector, int) and not isinstance(selector, bool):
            return self.access(index=selector)
        if is_sequence(selector):
            return list(selector)
        raise StatDataInputError(
            f"Invalid sequence selector {selector!r}: "
            "expected a sequence, an integer index, or a label."
        )


def _require_path(path: str | Path | None, operation: str) -> Path:
    if path is None or not str(path).strip():
        raise StatDataIOError(f"There is no path for {operation} data. Provide a file path.")
    return Path(path).expanduser()
