"""Lag and cross-lag realignment of two sequences.

This module shifts a target sequence against a response sequence,
either by trimming the unmatched ends or by rotating the target.
"""

from __future__ import annotations

from typing import Any, Sequence

from core.errors import StatDataInputError


def crosslag(
    target: Sequence[Any],
    response: Sequence[Any],
    lag: int,
    loop: bool = False,
) -> tuple[list[Any], list[Any]]:
    """Realign target and response by a signed lag.

    Without looping, a positive lag drops the first ``lag`` target values
    and the last ``lag`` response values; a negative lag drops from the
    opposite ends. With looping, the target is rotated instead (right for
    a positive lag, left for a negative one) and the response is returned
    unchanged.

    Args:
        target: Sequence to shift.
        response: Sequence the target is aligned against.
        lag: Signed shift. Zero, or a magnitude of at least the target
            length, leaves both sequences as they are.
        loop: Rotate the target instead of trimming both sequences.

    Returns:
        New target and response lists; the inputs are not modified.

    Raises:
        StatDataInputError: If lag is not an integer.
    """
    if isinstance(lag, bool) or not isinstance(lag, int):
        raise StatDataInputError(
            f"Invalid lag {lag!r}: expected an integer number of positions."
        )
    shifted_target = list(target)
    aligned_response = list(response)
    steps = abs(lag)
    if steps == 0 or steps >= len(shifted_target):
        return shifted_target, aligned_response
    if loop:
        if lag > 0:
            return shifted_target[-steps:] + shifted_target[:-steps], aligned_response
        return shifted_target[steps:] + shifted_target[:steps], aligned_response
    if lag > 0:
        return shifted_target[steps:], aligned_response[: max(len(aligned_response) - steps, 0)]
    return shifted_target[: len(shifted_target) - steps], aligned_response[steps:]
