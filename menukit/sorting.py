"""
Ordering of menu templates.

Templates are plain mappings. Only the ``id``, ``type``, ``before``, ``after``,
``before_group_containing`` and ``after_group_containing`` keys are read, every
other key is left alone.

Items are split into groups on separators. Groups are first arranged relative
to each other with the group rules, then merged wherever an item asks to sit
before or after an item of another group, and finally joined back with a
single separator between each pair of groups. References to unknown ids and
constraints that would contradict one applied earlier are ignored.
"""

from collections.abc import Hashable, Iterable
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

SEPARATOR = 'separator'


def is_separator(item: Mapping[str, Any]) -> bool:
    return item.get('type') == SEPARATOR


def sort_menu_items(items: Sequence[Mapping[str, Any]]) -> List[Mapping[str, Any]]:
    """
    Args:
        items: menu template entries, separators included

    Returns:
        a new list with the same entries, reordered, with excess separators
        removed. Neither ``items`` nor its entries are modified.
    """
    items = list(items)
    lookup = _index_ids(items)

    groups = _split_groups(items)
    groups = _arrange_groups(items, groups, lookup)
    groups = _merge_groups(items, groups, lookup)
    groups = [_sort_group(items, group, lookup) for group in groups]

    return _join_groups(items, groups)


def _ids(item: Mapping[str, Any], key: str) -> Tuple:
    value = item.get(key)
    if value is None:
        return ()
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        return (value,)
    return tuple(value)


def _index_ids(items: Sequence[Mapping[str, Any]]) -> Dict[Hashable, int]:
    lookup: Dict[Hashable, int] = {}
    for index, item in enumerate(items):
        if is_separator(item):
            continue
        item_id = item.get('id')
        if item_id is None:
            continue
        try:
            lookup.setdefault(item_id, index)
        except TypeError:
            # unhashable ids are never addressable
            continue
    return lookup


def _resolve(lookup: Dict[Hashable, int], ref) -> Optional[int]:
    try:
        return lookup.get(ref)
    except TypeError:
        return None


def _split_groups(items: Sequence[Mapping[str, Any]]) -> List[List[int]]:
    groups: List[List[int]] = [[]]
    for index, item in enumerate(items):
        if is_separator(item):
            if groups[-1]:
                groups.append([])
        else:
            groups[-1].append(index)
    if not groups[-1]:
        groups.pop()
    return groups


def _reaches(deps: Dict[int, List[int]], start: int, goal: int) -> bool:
    stack = [start]
    seen = set()
    while stack:
        node = stack.pop()
        if node == goal:
            return True
        if node in seen:
            continue
        seen.add(node)
        stack.extend(deps.get(node, ()))
    return False


def _add_edge(deps: Dict[int, List[int]], first: int, then: int) -> bool:
    """Require ``first`` to come before ``then`` unless that closes a cycle."""
    if first == then or _reaches(deps, first, then):
        return False
    deps.setdefault(then, []).append(first)
    return True


def _sort_topologically(order: Sequence[int], deps: Dict[int, List[int]]) -> List[int]:
    # deps is acyclic, so every node lands after everything it depends on
    # and otherwise keeps its place in ``order``
    result: List[int] = []
    seen = set()

    for root in order:
        if root in seen:
            continue
        seen.add(root)
        stack = [(root, iter(deps.get(root, ())))]
        while stack:
            node, pending = stack[-1]
            for dep in pending:
                if dep not in seen:
                    seen.add(dep)
                    stack.append((dep, iter(deps.get(dep, ()))))
                    break
            else:
                stack.pop()
                result.append(node)
    return result


def _first_group_rule(items, group, position, owner, lookup) -> Optional[Tuple[str, int]]:
    for index in group:
        item = items[index]
        for key, direction in (('before_group_containing', 'before'),
                               ('after_group_containing', 'after')):
            for ref in _ids(item, key):
                target = _resolve(lookup, ref)
                if target is not None and owner[target] != position:
                    return direction, owner[target]
    return None


def _chain_reaches(parent: Dict[int, int], start: int, goal: int) -> bool:
    node = start
    while node is not None:
        if node == goal:
            return True
        node = parent.get(node)
    return False


def _layout(root: int, ahead: Dict[int, List[int]], behind: Dict[int, List[int]]) -> List[int]:
    """Groups attached before ``root``, then ``root``, then those attached after it."""
    order: List[int] = []
    stack = [(root, False)]
    while stack:
        position, expanded = stack.pop()
        if expanded:
            order.append(position)
            continue
        stack.extend((child, False) for child in reversed(behind.get(position, ())))
        stack.append((position, True))
        stack.extend((child, False) for child in reversed(ahead.get(position, ())))
    return order


def _arrange_groups(items, groups: List[List[int]], lookup) -> List[List[int]]:
    owner = {index: position for position, group in enumerate(groups) for index in group}
    parent: Dict[int, int] = {}
    ahead: Dict[int, List[int]] = {}
    behind: Dict[int, List[int]] = {}

    for position, group in enumerate(groups):
        # only the first rule that resolves counts for a group
        rule = _first_group_rule(items, group, position, owner, lookup)
        if rule is None:
            continue
        direction, target = rule
        if _chain_reaches(parent, target, position):
            continue
        parent[position] = target
        (ahead if direction == 'before' else behind).setdefault(target, []).append(position)

    order: List[int] = []
    for position in range(len(groups)):
        if position not in parent:
            order.extend(_layout(position, ahead, behind))
    return [groups[position] for position in order]


def _position_of(groups: List[List[int]], index: int) -> int:
    for position, group in enumerate(groups):
        if index in group:
            return position
    raise ValueError(index)


def _merge_groups(items, groups: List[List[int]], lookup) -> List[List[int]]:
    groups = [list(group) for group in groups]

    for index in sorted(index for group in groups for index in group):
        item = items[index]
        for key in ('before', 'after'):
            for ref in _ids(item, key):
                target = _resolve(lookup, ref)
                if target is None:
                    continue
                source = _position_of(groups, index)
                destination = _position_of(groups, target)
                if source == destination:
                    continue

                anchor_group = groups[destination]
                at = anchor_group.index(target) + (1 if key == 'after' else 0)
                merged = anchor_group[:at] + groups[source] + anchor_group[at:]

                first, last = sorted((source, destination))
                groups[first] = merged
                del groups[last]

    return groups


def _sort_group(items, group: List[int], lookup) -> List[int]:
    members = set(group)
    deps: Dict[int, List[int]] = {}

    for index in sorted(group):
        item = items[index]
        for ref in _ids(item, 'before'):
            target = _resolve(lookup, ref)
            if target in members:
                _add_edge(deps, index, target)
        for ref in _ids(item, 'after'):
            target = _resolve(lookup, ref)
            if target in members:
                _add_edge(deps, target, index)

    return _sort_topologically(group, deps)


def _join_groups(items, groups: List[List[int]]) -> List[Mapping[str, Any]]:
    # there is always at least one input separator per group boundary
    separators = [index for index, item in enumerate(items) if is_separator(item)]
    result: List[Mapping[str, Any]] = []
    for position, group in enumerate(groups):
        if position:
            result.append(items[separators[position - 1]])
        result.extend(items[index] for index in group)
    return result
