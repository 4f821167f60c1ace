import logging
import pytest
import graph
import utils
from flow import bottleneck, apply_flow, max_flow, min_cut
from paths import find_path
from conftest import build, DIAMOND, CLRS

#s->v1 3, s->v2 7, ... : only 8 units fit through v3->t and v4->t
TRANSIT = [("s","v1",3), ("s","v2",7), ("v1","v3",3), ("v1","v4",4), ("v2","v1",5),
           ("v2","v4",3), ("v3","v4",3), ("v3","t",2),  ("v4","t",6)]


def flows(G):
    return [ (e.source, e.target, e.flow) for e in G.original_edges() ]


def test_single_edge():
    G = build([("A","B",5)], "A", "B")
    assert max_flow(G) == 5
    assert flows(G) == [("A","B",5)]


def test_diamond():
    G = build(DIAMOND, "A", "D")
    assert max_flow(G) == 4
    assert flows(G) == [("A","B",2), ("A","C",2), ("B","D",2), ("C","D",2)]
    assert G.augmentations == 2


def test_disconnected_sink():
    G = build([("A","B",2), ("C","D",3)], "A", "D")
    assert max_flow(G) == 0
    assert all(f == 0 for _, _, f in flows(G))


def test_cycle_is_not_counted_twice():
    G = build([("A","B",3), ("B","A",3), ("A","C",1)], "A", "C")
    assert max_flow(G) == 1
    assert flows(G) == [("A","B",0), ("A","C",1), ("B","A",0)]


def test_source_equal_to_sink_has_zero_flow(diamond):
    diamond.set_terminals("B", "B")
    assert max_flow(diamond) == 0
    assert diamond.augmentations == 0


def test_terminals_must_be_set():
    G = graph.FlowNetwork()
    G.add_edge("A", "B", 1)
    with pytest.raises(graph.InvariantViolation):
        max_flow(G)


@pytest.mark.parametrize("edges,source,sink,expected", [
    (DIAMOND, "A", "D", 4),
    (CLRS,    "s", "t", 23),
    (TRANSIT, "s", "t", 8),
    ([("A","B",1), ("A","B",2), ("B","C",10)], "A", "C", 3),
    ([("S","A",10), ("S","B",10), ("A","B",1), ("A","T",4), ("B","T",9)], "S", "T", 13),
])
def test_max_flow_equals_min_cut(edges, source, sink, expected):
    G = build(edges, source, sink)
    value = max_flow(G)
    assert value == expected
    assert value == utils.min_cut_value(G)

    reachable, cut_edges = min_cut(G)
    assert source in reachable and sink not in reachable
    assert sum(e.initial for e in cut_edges) == value
    assert all(e.flow == e.initial for e in cut_edges)


@pytest.mark.parametrize("edges,source,sink", [(DIAMOND, "A", "D"), (CLRS, "s", "t"), (TRANSIT, "s", "t")])
def test_conservation_and_capacity(edges, source, sink):
    G = build(edges, source, sink)
    value = max_flow(G)
    for u in G.get_nodes():
        if u not in (source, sink):
            assert G.excess(u) == 0
    assert G.outflow(source) - G.inflow(source) == value
    assert G.excess(sink) == value
    for e in G.original_edges():
        assert 0 <= e.flow <= e.initial
        assert e.capacity + G.reverse_of(e.id).capacity == e.initial
        assert G.reverse_of(e.id).flow == -e.flow


def test_augmentations_bounded_by_source_capacity(clrs):
    value = max_flow(clrs)
    assert 0 < clrs.augmentations <= value
    assert clrs.augmentations <= sum(clrs.edges[e_id].initial for e_id in clrs.out_edges("s"))


def test_second_run_adds_nothing(clrs):
    assert max_flow(clrs) == 23
    n_edges = len(clrs.edges)
    assert max_flow(clrs) == 0
    assert len(clrs.edges) == n_edges


def test_bottleneck(diamond):
    diamond.build_residual_graph()
    path = find_path(diamond, "A", "D")
    assert bottleneck(diamond, path) == 2
    with pytest.raises(graph.InvariantViolation):
        bottleneck(diamond, [])


def test_apply_flow_updates_pairs(diamond):
    diamond.build_residual_graph()
    totals = [ e.capacity + diamond.reverse_of(e.id).capacity for e in diamond.edges ]
    path = find_path(diamond, "A", "D")
    apply_flow(diamond, path, 1)
    apply_flow(diamond, path, 1)
    for e_id in path:
        e = diamond.edges[e_id]
        assert e.flow == 2 and e.capacity == e.initial - 2
        assert diamond.reverse_of(e_id).flow == -2
        assert diamond.reverse_of(e_id).capacity == 2
    assert [ e.capacity + diamond.reverse_of(e.id).capacity for e in diamond.edges ] == totals


def test_apply_flow_rejects_overflow_without_mutating(diamond):
    diamond.build_residual_graph()
    path   = find_path(diamond, "A", "D")
    before = [ (e.capacity, e.flow) for e in diamond.edges ]
    with pytest.raises(graph.InvariantViolation, match="exceeds capacity"):
        apply_flow(diamond, path, 3)
    with pytest.raises(graph.InvariantViolation):
        apply_flow(diamond, path, -1)
    assert [ (e.capacity, e.flow) for e in diamond.edges ] == before


def test_trace_reports_every_step(diamond, caplog):
    trace = logging.getLogger("test.trace")
    with caplog.at_level(logging.INFO, logger="test.trace"):
        max_flow(diamond, trace=trace)
    messages = [ r.getMessage() for r in caplog.records if r.name == "test.trace" ]
    assert messages[0] == "Adding reverse edges:"
    assert "A C D" in messages
    assert "A B D" in messages
    assert messages.count("Min capacity = 2") == 2
    assert "Flow value = 4" in messages
    assert messages[-1] == "Path is not found - the algorithm is complete."


def test_trace_does_not_change_result():
    G1 = build(CLRS, "s", "t")
    G2 = build(CLRS, "s", "t")
    assert max_flow(G1, trace=logging.getLogger("test.silent")) == max_flow(G2)
    assert flows(G1) == flows(G2)


def test_apply_flow_requires_residual_graph():
    G    = build([("A","B",2)], "A", "B")
    path = find_path(G, "A", "B")
    with pytest.raises(graph.InvariantViolation, match="no paired reverse edge"):
        apply_flow(G, path, 1)
    assert (G.edges[0].capacity, G.edges[0].flow) == (2, 0)


def test_trace_when_source_equals_sink(diamond, caplog):
    diamond.set_terminals("B", "B")
    trace = logging.getLogger("test.trace")
    with caplog.at_level(logging.INFO, logger="test.trace"):
        assert max_flow(diamond, trace=trace) == 0
    messages = [ r.getMessage() for r in caplog.records if r.name == "test.trace" ]
    assert messages[-2:] == ["Searching a path.", "Path is not found - the algorithm is complete."]
