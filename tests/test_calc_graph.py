"""Tests for gridcalc.calc dependency graph and cycle detection."""

from __future__ import annotations

from gridcalc.calc._graph import DependencyGraph


def _graph(*edges: tuple[str, str]) -> DependencyGraph:
    """Build a graph from (dependent, precedent) pairs."""
    g = DependencyGraph()
    for dependent, precedent in edges:
        g.add_dependency(dependent, precedent)
    return g


class TestEdges:
    def test_add_dependency_records_both_directions(self) -> None:
        g = _graph(("B1", "A1"))
        assert g.get_direct_dependents("A1") == {"B1"}
        assert g.get_precedents("B1") == {"A1"}

    def test_add_dependency_idempotent(self) -> None:
        g = _graph(("B1", "A1"), ("B1", "A1"))
        assert g.edge_count() == 1

    def test_remove_all_precedents(self) -> None:
        g = _graph(("C1", "A1"), ("C1", "B1"), ("D1", "A1"))
        g.remove_all_precedents("C1")
        assert g.get_precedents("C1") == set()
        assert g.get_direct_dependents("A1") == {"D1"}
        assert g.get_direct_dependents("B1") == set()
        assert "B1" not in g.dependents

    def test_remove_keeps_incoming_edges(self) -> None:
        """Dropping B1's precedents does not touch cells that read B1."""
        g = _graph(("B1", "A1"), ("C1", "B1"))
        g.remove_all_precedents("B1")
        assert g.get_direct_dependents("B1") == {"C1"}

    def test_remove_unknown_cell(self) -> None:
        g = _graph(("B1", "A1"))
        g.remove_all_precedents("J10")
        assert g.edge_count() == 1

    def test_clear(self) -> None:
        g = _graph(("B1", "A1"), ("C1", "B1"))
        g.clear()
        assert g.edge_count() == 0
        assert g.get_all_dependents("A1") == []


class TestAllDependents:
    def test_linear_chain(self) -> None:
        g = _graph(("B1", "A1"), ("C1", "B1"))
        assert g.get_all_dependents("A1") == ["B1", "C1"]

    def test_diamond_each_once(self) -> None:
        g = _graph(("B1", "A1"), ("C1", "A1"), ("D1", "B1"), ("D1", "C1"))
        deps = g.get_all_dependents("A1")
        assert sorted(deps) == ["B1", "C1", "D1"]
        assert len(deps) == 3

    def test_no_dependents(self) -> None:
        g = _graph(("B1", "A1"))
        assert g.get_all_dependents("B1") == []

    def test_cycle_terminates(self) -> None:
        g = _graph(("A1", "B1"), ("B1", "A1"))
        assert sorted(g.get_all_dependents("A1")) == ["A1", "B1"]


class TestCycleThrough:
    def test_self_reference(self) -> None:
        assert _graph(("A1", "A1")).has_cycle_through("A1")

    def test_mutual_reference(self) -> None:
        g = _graph(("A1", "B1"), ("B1", "A1"))
        assert g.has_cycle_through("A1")
        assert g.has_cycle_through("B1")

    def test_long_cycle(self) -> None:
        g = _graph(("A1", "B1"), ("B1", "C1"), ("C1", "D1"), ("D1", "A1"))
        assert g.has_cycle_through("C1")

    def test_acyclic_chain(self) -> None:
        g = _graph(("B1", "A1"), ("C1", "B1"))
        assert not g.has_cycle_through("C1")

    def test_reader_of_cycle(self) -> None:
        g = _graph(("A1", "B1"), ("B1", "A1"), ("C1", "A1"))
        assert g.has_cycle_through("C1")

    def test_cycle_two_steps_upstream(self) -> None:
        g = _graph(("A1", "B1"), ("B1", "A1"), ("C1", "A1"), ("D1", "C1"))
        assert g.has_cycle_through("D1")

    def test_diamond_is_not_a_cycle(self) -> None:
        """D1 reaches A1 through both B1 and C1; revisiting via a second branch is fine."""
        g = _graph(("D1", "B1"), ("D1", "C1"), ("B1", "A1"), ("C1", "A1"))
        assert not g.has_cycle_through("D1")

    def test_wide_acyclic_graph(self) -> None:
        """Every cell in row 2 reads every cell in row 1; no cycle."""
        cols = "ABCDEFGHIJ"
        g = _graph(*[(f"{d}2", f"{p}1") for d in cols for p in cols])
        g.add_dependency("A3", "A2")
        assert not g.has_cycle_through("A3")


class TestEvaluationOrder:
    def test_chain_given_out_of_order(self) -> None:
        g = _graph(("B1", "A1"), ("C1", "B1"))
        assert g.evaluation_order(["C1", "B1"]) == ["B1", "C1"]

    def test_diamond(self) -> None:
        g = _graph(("B1", "A1"), ("C1", "A1"), ("C1", "B1"))
        assert g.evaluation_order(["C1", "B1"]) == ["B1", "C1"]

    def test_cyclic_cells_appended(self) -> None:
        g = _graph(("A1", "B1"), ("B1", "A1"), ("C1", "D1"))
        order = g.evaluation_order(["A1", "B1", "C1"])
        assert order[0] == "C1"
        assert sorted(order[1:]) == ["A1", "B1"]

    def test_duplicates_collapsed(self) -> None:
        g = _graph(("B1", "A1"))
        assert g.evaluation_order(["B1", "B1"]) == ["B1"]
