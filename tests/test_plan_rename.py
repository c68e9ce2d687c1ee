import pytest

from bumv.core import (
    GroupKind, OpKind, PlanningError, RenameMapping, RenameOp, build_plan, decompose, is_temp_name,
)
from bumv.core.plan_rename import TempNamer, simulate_plan


def mapping_of(*pairs) -> RenameMapping:
    return RenameMapping(pairs=list(pairs))


def apply(ops, entries):
    """Replay ops, asserting every target is free and every source exists"""
    return simulate_plan(ops, entries)


def test_empty_mapping_gives_empty_plan() -> None:
    plan = build_plan(mapping_of())

    assert plan.is_empty()
    assert plan.ops == []


def test_independent_renames_are_separate_chains() -> None:
    groups = decompose(mapping_of(("a", "x"), ("b", "y")))

    assert [g.kind for g in groups] == [GroupKind.CHAIN, GroupKind.CHAIN]
    assert [g.edges for g in groups] == [[("a", "x")], [("b", "y")]]


def test_chain_runs_tail_first() -> None:
    # a -> b -> c -> d: c must move before b can take its name
    plan = build_plan(mapping_of(("a", "b"), ("b", "c"), ("c", "d")), snapshot=["a", "b", "c"])

    assert plan.ops == [RenameOp("c", "d"), RenameOp("b", "c"), RenameOp("a", "b")]
    assert plan.temp_count == 0


@pytest.mark.parametrize("pairs", [
    [("a", "b"), ("b", "c")],
    [("b", "c"), ("a", "b")],
])
def test_chain_through_renamed_file_in_either_order(pairs) -> None:
    plan = build_plan(mapping_of(*pairs), snapshot=["a", "b"])

    assert len(plan.groups) == 1
    assert plan.groups[0].kind is GroupKind.CHAIN
    assert apply(plan.ops, ["a", "b"]) == {"b", "c"}


def test_swap_uses_exactly_one_temporary_name() -> None:
    plan = build_plan(mapping_of(("file1", "file2"), ("file2", "file1")), snapshot=["file1", "file2"])

    group, = plan.groups
    assert group.kind is GroupKind.CYCLE
    assert plan.temp_count == 1
    assert len(plan.ops) == 3

    park, middle, unpark = plan.ops
    assert park.kind is OpKind.TO_TEMP and park.src == "file1" and is_temp_name(park.dst)
    assert middle == RenameOp("file2", "file1")
    assert unpark.kind is OpKind.FROM_TEMP and unpark.src == park.dst and unpark.dst == "file2"
    assert apply(plan.ops, ["file1", "file2"]) == {"file1", "file2"}


@pytest.mark.parametrize("size", [3, 4, 10])
def test_long_cycle_uses_exactly_one_temporary_name(size: int) -> None:
    names = [f"f{i}" for i in range(size)]
    pairs = [(names[i], names[(i + 1) % size]) for i in range(size)]

    plan = build_plan(mapping_of(*pairs), snapshot=names)

    assert plan.cycle_count == 1
    assert plan.temp_count == 1
    assert plan.total_count == size + 1
    final = apply(plan.ops, names)
    assert final == set(names)
    assert not any(is_temp_name(name) for name in final)


def test_chains_and_cycles_mixed() -> None:
    snapshot = ["a", "b", "c", "d", "e"]
    plan = build_plan(
        mapping_of(("a", "b"), ("b", "a"), ("c", "z"), ("d", "e"), ("e", "y")),
        snapshot=snapshot,
    )

    assert [g.kind for g in plan.groups] == [GroupKind.CYCLE, GroupKind.CHAIN, GroupKind.CHAIN]
    assert apply(plan.ops, snapshot) == {"a", "b", "z", "e", "y"}


def test_temporary_name_stays_in_the_source_directory() -> None:
    plan = build_plan(mapping_of(("d/a", "d/b"), ("d/b", "d/a")), snapshot=["d/a", "d/b"])

    assert plan.ops[0].dst.startswith("d/")


def test_temp_namer_gives_up_when_every_name_is_taken(monkeypatch) -> None:
    monkeypatch.setattr("bumv.core.plan_rename._generate_temp_name", lambda entry: "taken")
    namer = TempNamer({"taken"})

    with pytest.raises(PlanningError):
        namer.reserve("a")


def test_non_injective_mapping_is_a_planning_error() -> None:
    with pytest.raises(PlanningError):
        build_plan(mapping_of(("a", "x"), ("b", "x")))


def test_simulate_detects_collisions() -> None:
    with pytest.raises(PlanningError, match="overwrite"):
        simulate_plan([RenameOp("a", "b")], ["a", "b"])


def test_human_readable_lists_steps() -> None:
    plan = build_plan(mapping_of(("a", "b"),), snapshot=["a"])

    assert plan.human_readable() == "a -> b"


def test_simulate_rejects_directory_over_a_file() -> None:
    with pytest.raises(PlanningError, match="directory"):
        simulate_plan([RenameOp("a", "b/x"), RenameOp("b", "c")], ["a", "b"])


def test_simulate_accepts_directory_after_the_file_moved() -> None:
    final = simulate_plan([RenameOp("b", "c"), RenameOp("a", "b/x")], ["a", "b"])

    assert final == {"c", "b/x"}


def test_simulate_rejects_file_over_a_directory() -> None:
    with pytest.raises(PlanningError, match="directory"):
        simulate_plan([RenameOp("d/x", "e"), RenameOp("a", "d")], ["a", "d/x"])
