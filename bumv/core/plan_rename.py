"""
plan_rename.py - Rename Plan Generation Module

Responsibilities:
- View the rename mapping as a directed graph (old -> new)
- Split it into connected components: chains and cycles
- Order the steps so every target is free when it is renamed to
- Break each cycle with exactly one temporary name
- Output RenamePlan
"""

from typing import Dict, Iterable, List, Optional, Set
import logging
import posixpath
import uuid

from .models_fs import (
    RenameOp, RenameGroup, RenameMapping, RenamePlan, RenameOptions,
    OpKind, GroupKind,
)
from .errors import PlanningError
from .validate_edit import MAX_NAME_LENGTH

logger = logging.getLogger(__name__)

TEMP_PREFIX = ".__bumv_tmp__"
MAX_TEMP_ATTEMPTS = 100


def _generate_temp_name(entry: str) -> str:
    """Generate temporary name next to the original"""
    directory, name = posixpath.split(entry)
    unique_id = uuid.uuid4().hex[:8]
    prefix = f"{TEMP_PREFIX}{unique_id}__"
    temp_name = prefix + name[:MAX_NAME_LENGTH - len(prefix)]
    return posixpath.join(directory, temp_name)


def is_temp_name(entry: str) -> bool:
    """Check if it's a temporary name"""
    return posixpath.basename(entry).startswith(TEMP_PREFIX)


class TempNamer:
    """Hands out temporary names that collide with nothing known"""

    def __init__(self, occupied: Iterable[str], options: Optional[RenameOptions] = None):
        """
        Initialize temporary namer

        Args:
            occupied: Entries that must never be used (snapshot and targets)
            options: When given, names existing under options.root are skipped too
        """
        self.occupied: Set[str] = set(occupied)
        self.options = options

    def _is_free(self, candidate: str) -> bool:
        if candidate in self.occupied:
            return False
        if self.options is not None and self.options.resolve(candidate).exists():
            return False
        return True

    def reserve(self, entry: str) -> str:
        """
        Reserve a temporary name for entry

        Args:
            entry: Entry about to be parked

        Returns:
            Root-relative temporary name in the same directory
        """
        for _ in range(MAX_TEMP_ATTEMPTS):
            candidate = _generate_temp_name(entry)
            if self._is_free(candidate):
                self.occupied.add(candidate)
                return candidate
        raise PlanningError(
            f"Cannot find a free temporary name for {entry} "
            f"(tried {MAX_TEMP_ATTEMPTS} times)"
        )


def decompose(mapping: RenameMapping) -> List[RenameGroup]:
    """
    Split the mapping graph into chains and cycles

    Every node has at most one outgoing edge (sources are unique) and at
    most one incoming edge (targets are unique), so each component is
    either a simple path or a simple cycle. Components are returned in
    snapshot order of their first source.

    Args:
        mapping: Validated mapping

    Returns:
        Groups without ops
    """
    successor: Dict[str, str] = {}
    predecessor: Dict[str, str] = {}
    for old, new in mapping:
        if old in successor:
            raise PlanningError(f"{old} is renamed more than once")
        if new in predecessor:
            raise PlanningError(f"{predecessor[new]} and {old} are both renamed to {new}")
        successor[old] = new
        predecessor[new] = old

    visited: Set[str] = set()
    groups: List[RenameGroup] = []

    for source in mapping.sources:
        if source in visited:
            continue

        # Walk back to the start of the chain, or around the cycle
        start = source
        kind = GroupKind.CHAIN
        while start in predecessor:
            start = predecessor[start]
            if start == source:
                kind = GroupKind.CYCLE
                break

        edges = []
        node = start
        while node in successor:
            edges.append((node, successor[node]))
            visited.add(node)
            node = successor[node]
            if node == start:
                break

        groups.append(RenameGroup(kind=kind, edges=edges))

    return groups


def order_chain(group: RenameGroup) -> List[RenameOp]:
    """
    Order a chain tail first

    The last edge points at a name that is nobody's source, so it can run
    first; that frees its source for the edge before it, and so on.
    """
    return [RenameOp(old, new) for old, new in reversed(group.edges)]


def order_cycle(group: RenameGroup, namer: TempNamer) -> List[RenameOp]:
    """
    Order a cycle using one temporary name

    For a -> b -> c -> a: park a as tmp, then c -> a, b -> c, and finally
    tmp -> b.
    """
    first, first_target = group.edges[0]
    temp = namer.reserve(first)
    ops = [RenameOp(first, temp, OpKind.TO_TEMP)]
    ops.extend(RenameOp(old, new) for old, new in reversed(group.edges[1:]))
    ops.append(RenameOp(temp, first_target, OpKind.FROM_TEMP))
    return ops


def simulate_plan(ops: List[RenameOp], entries: Iterable[str]) -> Set[str]:
    """
    Replay ops against a set of entries

    Directories are tracked too: a step creates the parents of its target,
    and no step ever removes a directory.

    Args:
        ops: Steps in execution order
        entries: Entries existing before the first step

    Returns:
        Entries existing after the last step
    """
    existing = set(entries)
    directories = {d for entry in existing for d in _parents(entry)}
    for i, op in enumerate(ops, 1):
        if op.src not in existing:
            raise PlanningError(f"Step {i} ({op}) renames a file that does not exist at that point")
        if op.dst in existing:
            raise PlanningError(f"Step {i} ({op}) would overwrite an existing file")
        if op.dst in directories:
            raise PlanningError(f"Step {i} ({op}) would overwrite a directory")
        parents = _parents(op.dst)
        if any(d in existing for d in parents):
            raise PlanningError(f"Step {i} ({op}) needs a directory where a file still exists")
        existing.remove(op.src)
        existing.add(op.dst)
        directories.update(parents)
    return existing


def _parents(entry: str) -> List[str]:
    parts = entry.split("/")[:-1]
    return ["/".join(parts[:i]) for i in range(1, len(parts) + 1)]


def build_plan(
    mapping: RenameMapping,
    options: Optional[RenameOptions] = None,
    snapshot: Optional[List[str]] = None,
) -> RenamePlan:
    """
    Generate a conflict-free rename plan

    Args:
        mapping: Validated mapping
        options: Rename options; when given, temporary names are also
            checked against the files under options.root
        snapshot: Full snapshot; temporary names never reuse its entries

    Returns:
        Rename plan
    """
    plan = RenamePlan(mapping=mapping)
    if mapping.is_empty():
        return plan

    entries = set(snapshot) if snapshot is not None else set(mapping.sources)
    namer = TempNamer(entries | set(mapping.targets), options)

    for group in decompose(mapping):
        if group.is_cycle:
            group.ops = order_cycle(group, namer)
            logger.debug("Breaking cycle of %d files at %s", len(group.edges), group.edges[0][0])
        else:
            group.ops = order_chain(group)
        plan.groups.append(group)

    # Replaying the plan must end exactly at the requested names
    final = simulate_plan(plan.ops, entries)
    expected = (entries - set(mapping.sources)) | set(mapping.targets)
    if final != expected:
        raise PlanningError("Rename plan does not produce the edited list")

    logger.info(
        "Planned %d steps for %d renames (%d cycles)",
        plan.total_count, len(mapping), plan.cycle_count,
    )
    return plan
