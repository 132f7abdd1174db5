# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Merge and flatten operations on nested metadata dictionaries

Metadata nodes are plain values: a scalar (str or int) or a dict.
A dict whose keys are the integers 0..n-1 is an indexed list; RDF
containers may also mix integer list keys with named keys in the same
dict. Merges never mutate their inputs.

Copyright 2025 DNAi inc.
"""

from collections.abc import Mapping
from typing import Any, Dict, Union

MetadataKey = Union[str, int]
MetadataValue = Union[str, int, Dict[MetadataKey, Any]]


def is_composite(value: Any) -> bool:
    """Return True for map/list nodes."""
    return isinstance(value, Mapping)


def is_indexed_list(value: Any) -> bool:
    """Return True when value is a non-empty dict keyed exactly by 0..n-1."""
    if not is_composite(value) or not value:
        return False
    return all(isinstance(k, int) and not isinstance(k, bool) for k in value) \
        and sorted(value) == list(range(len(value)))


def next_index(mapping: Mapping) -> int:
    """Next free integer key: one past the largest integer key, 0 if none."""
    indexes = [k for k in mapping if isinstance(k, int) and not isinstance(k, bool)]
    return max(indexes) + 1 if indexes else 0


def append_item(mapping: Dict[MetadataKey, Any], value: Any) -> Dict[MetadataKey, Any]:
    """
    Append value to mapping under the next integer key.

    Args:
        mapping: Accumulator dict (modified in place)
        value: Node to append

    Returns:
        The same mapping, for chaining
    """
    mapping[next_index(mapping)] = value
    return mapping


def copy_node(value: Any) -> Any:
    """Deep copy of a metadata node into plain dicts."""
    if is_composite(value):
        return {k: copy_node(v) for k, v in value.items()}
    return value


def merge(base: Mapping, incoming: Mapping) -> Dict[MetadataKey, Any]:
    """
    Merge incoming into a copy of base.

    Rules per key of incoming:
    - absent in base: inserted as-is
    - both composite: merged recursively
    - both scalar and unequal: joined as 'base,incoming'
    - equal scalars (compared as text): left unchanged
    - scalar base, composite incoming: the scalar becomes list item 0
      and the composite is merged into that list
    - composite base, scalar incoming: appended as a list item unless
      already one of the base values

    Args:
        base: Existing node
        incoming: Node to fold in

    Returns:
        New merged dictionary
    """
    result = copy_node(base)

    for key, value in incoming.items():
        if key not in result:
            result[key] = copy_node(value)
            continue

        existing = result[key]
        if is_composite(existing) and is_composite(value):
            result[key] = merge(existing, value)
        elif is_composite(value):
            result[key] = merge({0: existing}, value)
        elif is_composite(existing):
            if str(value) not in (str(v) for v in existing.values()):
                append_item(existing, value)
        elif str(existing) != str(value):
            # tEXt carries text, decoders may report numbers
            result[key] = f'{existing},{value}'

    return result


def flatten(mapping: Mapping) -> Dict[MetadataKey, Any]:
    """
    Collapse single-item lists introduced by list appends.

    Every composite value whose only key is 0 is replaced by its sole
    element; composites are flattened recursively.

    Args:
        mapping: Node to flatten

    Returns:
        New flattened dictionary
    """
    result: Dict[MetadataKey, Any] = {}

    for key, value in mapping.items():
        if is_composite(value):
            if len(value) == 1 and 0 in value:
                value = value[0]
                if is_composite(value):
                    value = flatten(value)
            else:
                value = flatten(value)
        result[key] = value

    return result
