# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Reconciliation strategies for sequences.

The strategy is chosen once per diff call and applies to every sequence:

replace
    Set the whole new sequence. Always correct, and the fallback of
    every other strategy.
append
    Push the new tail when the old sequence is a prefix of the new one.
smart
    Positional updates of changed items when the length is unchanged,
    pushes when items were only appended.
merge
    Pairs items by identity (an id/key/name attribute) instead of by
    position, then updates or pushes.

A single field path never gets both positional and whole-array
operations, a document store rejects such conflicting updates.
"""

from collections.abc import Mapping

from ..log import debug
from ..patch_format import Missing
from ..utils import join_path
from .config import ArrayStrategy
from .introspect import is_struct, is_primitive, is_zero_value, deep_equal


# Attributes or keys identifying an item, in priority order
IDENTIFIER_FIELDS = ("ID", "Id", "id", "Key", "key", "Name", "name", "UUID", "Uuid", "uuid")


def diff_sequences(old, new, path="", state=None):
    "Compare two sequences with the configured array strategy."
    if deep_equal(old, new):
        return
    differ = sequence_differs.get(state.config.array_strategy, replace_sequence)
    differ(old, new, path=path, state=state)


def replace_sequence(old, new, path="", state=None):
    if deep_equal(old, new):
        return
    state.patch.set(path, new)


def _fallback(reason, old, new, path, state):
    debug("falling back to replace for %s: %s", path or "<root>", reason)
    replace_sequence(old, new, path=path, state=state)


def _set_positional(index, value, path, state):
    "Set the item at index through a new array filter placeholder."
    name = state.filter_ids.next()
    state.patch.add_array_filter({"%s._index" % name: index})
    state.patch.set(join_path(path, "$[%s]" % name), value)


def append_sequence(old, new, path="", state=None):
    """Push the items added at the end of a sequence.

    Only valid when old is a prefix of new, otherwise the whole
    sequence is replaced.
    """
    if deep_equal(old, new):
        return

    n, m = len(old), len(new)
    if m < n:
        _fallback("sequence shrank", old, new, path, state)
        return
    for i in range(n):
        if not deep_equal(old[i], new[i]):
            _fallback("item %d changed" % i, old, new, path, state)
            return

    state.patch.push(path, list(new[n:]))


def smart_sequence(old, new, path="", state=None):
    """Update changed items in place, or push appended items.

    Falls back to replacing the sequence when either side is empty,
    the length changes by more than half, items are primitive, or items
    changed together with the length.
    """
    if deep_equal(old, new):
        return

    n, m = len(old), len(new)
    if n == 0 or m == 0 or abs(n - m) > max(n, m) // 2:
        _fallback("length changed too much", old, new, path, state)
        return
    if is_primitive(old[0]):
        _fallback("primitive items", old, new, path, state)
        return

    changed = [i for i in range(min(n, m)) if not deep_equal(old[i], new[i])]

    if changed and n != m:
        _fallback("items and length changed", old, new, path, state)
    elif changed:
        for i in changed:
            _set_positional(i, new[i], path, state)
    elif m > n:
        state.patch.push(path, list(new[n:]))
    else:
        _fallback("items removed", old, new, path, state)


def _identifier(item, name):
    if isinstance(item, Mapping):
        return item.get(name, Missing)
    return getattr(item, name, Missing)


def items_are_similar(old_item, new_item):
    """Return True if the two items represent the same entity.

    The first identifier field present on both items and populated on
    the new one decides. Items without identifiers are only similar
    when equal.
    """
    if type(old_item) is type(new_item) and (
            is_struct(new_item) or isinstance(new_item, Mapping)):
        for name in IDENTIFIER_FIELDS:
            new_id = _identifier(new_item, name)
            if new_id is Missing or is_zero_value(new_id):
                continue
            old_id = _identifier(old_item, name)
            if old_id is Missing:
                continue
            return deep_equal(old_id, new_id)
    return deep_equal(old_item, new_item)


def merge_sequence(old, new, path="", state=None):
    """Match items by identity and update or push them.

    Each new item is paired with the first unused similar old item.
    Decision table for the pairing:

    - old items left unpaired (removals): replace
    - updated pairs together with unpaired new items: replace
    - only unpaired new items: push them
    - only updated pairs: positional set, addressed by the old index
    """
    if deep_equal(old, new):
        return
    if len(old) == 0:
        state.patch.set(path, new)
        return
    if len(new) == 0:
        state.patch.unset(path)
        return
    if is_primitive(old[0]):
        _fallback("primitive items", old, new, path, state)
        return

    used = [False] * len(old)
    updates = []
    additions = []
    for item in new:
        match = None
        for j, candidate in enumerate(old):
            if not used[j] and items_are_similar(candidate, item):
                match = j
                break
        if match is None:
            additions.append(item)
            continue
        used[match] = True
        if not deep_equal(old[match], item):
            updates.append((match, item))

    removals = used.count(False)
    if removals:
        _fallback("%d items removed" % removals, old, new, path, state)
    elif updates and additions:
        _fallback("items updated and added", old, new, path, state)
    elif additions:
        state.patch.push(path, additions)
    else:
        for index, item in updates:
            _set_positional(index, item, path, state)


sequence_differs = {
    ArrayStrategy.REPLACE: replace_sequence,
    ArrayStrategy.APPEND: append_sequence,
    ArrayStrategy.SMART: smart_sequence,
    ArrayStrategy.MERGE: merge_sequence,
}
