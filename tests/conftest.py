import pytest
import graph


def build(edges, source, sink, id="G") -> graph.FlowNetwork:
    G = graph.FlowNetwork(id)
    for u, v, c in edges:
        G.add_edge(u, v, c)
    G.set_terminals(source, sink)
    return G


DIAMOND = [("A","B",3), ("A","C",2), ("B","D",2), ("C","D",2)]

#classic 6-vertex example, max flow 23
CLRS = [("s","a",16), ("s","b",13), ("a","c",12), ("b","a",4), ("b","d",14),
        ("c","b",9),  ("c","t",20), ("d","c",7),  ("d","t",4)]


@pytest.fixture
def diamond():
    return build(DIAMOND, "A", "D", "diamond")


@pytest.fixture
def clrs():
    return build(CLRS, "s", "t", "clrs")
