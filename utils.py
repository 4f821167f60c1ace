from graphviz import Digraph
import networkx as nx
import numpy as np
import logging
import graph

logger = logging.getLogger(__name__)


def _tokens(graph_raw) -> list:
    if isinstance(graph_raw, str):
        return graph_raw.split()
    return [ token for line in graph_raw for token in line.split() ]


def _int_token(token, what) -> int:
    try:
        return int(token)
    except ValueError:
        raise graph.InvalidInput("{} must be an integer, got {!r}".format(what, token))


def read_graph(graph_raw, id = "G") -> graph.FlowNetwork:
    #Input format is: 'm s t\n', 'u_1 v_1 c_1\n', ..., 'u_m v_m c_m\n'  (the first number counts edges)
    tokens = _tokens(graph_raw)
    if len(tokens) < 3:
        raise graph.InvalidInput("header 'count source target' is incomplete")

    m = _int_token(tokens[0], "edge count")
    if m < 0:
        raise graph.InvalidInput("edge count is negative: {}".format(m))
    source, sink = tokens[1], tokens[2]

    body = tokens[3:]
    if len(body) < 3*m:
        raise graph.InvalidInput("expected {} edges, input ends after {} tokens".format(m, len(body)))
    if len(body) > 3*m:
        logger.warning("Ignoring %d trailing tokens after %d edges.", len(body) - 3*m, m)

    G = graph.FlowNetwork(id)
    for i in range(m):
        u, v, c = body[3*i:3*i+3]
        G.add_edge(u, v, _int_token(c, "capacity of edge {} ({},{})".format(i+1, u, v)))

    G.set_terminals(source, sink)
    logger.debug("Read graph %s with n=%d, m=%d, source=%s, sink=%s", G.id, G.n, G.m, source, sink)
    return G


def read_graph_file(filename) -> graph.FlowNetwork:
    with open(filename, "r") as f:
        return read_graph(f.readlines(), id=filename)


def format_result(G : graph.FlowNetwork, flow_value : int) -> str:
    return "{}\n{}\n".format(flow_value, G.dump(reverse=False, properties=False)) if G.m else "{}\n".format(flow_value)


def to_networkx(G : graph.FlowNetwork) -> nx.DiGraph:
    #parallel edges are merged by summing their capacities
    G_nx = nx.DiGraph()
    G_nx.add_nodes_from(G.get_nodes())
    for e in G.original_edges():
        if G_nx.has_edge(e.source, e.target):
            G_nx[e.source][e.target]['capacity'] += e.initial
        else:
            G_nx.add_edge(e.source, e.target, capacity=e.initial)
    return G_nx


def min_cut_value(G : graph.FlowNetwork) -> int:
    if G.source == G.sink:
        return 0
    cut_value, _ = nx.minimum_cut(to_networkx(G), G.source, G.sink, capacity='capacity')
    return cut_value


def metrics(G : graph.FlowNetwork) -> dict:
    flow_values = [ e.flow for e in G.original_edges() ]
    if not flow_values:
        logger.warning("Graph %s has no edges, no metrics to compute.", G.id)
        return {}

    saturated = sum(1 for e in G.original_edges() if e.initial > 0 and e.flow == e.initial)

    return {
        "Average"            : float(np.mean(flow_values)),
        "Standard Deviation" : float(np.std(flow_values)),
        "Minimum"            : int(np.min(flow_values)),
        "Maximum"            : int(np.max(flow_values)),
        "Sum"                : int(np.sum(flow_values)),
        "Median"             : float(np.median(flow_values)),
        "25th Percentile"    : float(np.percentile(flow_values, 25)),
        "75th Percentile"    : float(np.percentile(flow_values, 75)),
        "Saturated edges"    : saturated,
    }


def visualize(G : graph.FlowNetwork, cut_edges=[], tag = '', render = True) -> Digraph:
    dot = Digraph(format='pdf')
    dot.graph_attr['rankdir'] = 'LR'     # Display the graph in landscape mode
    dot.node_attr['shape']    = 'circle'

    for u in G.get_nodes():
        if u == G.source or u == G.sink:
            dot.node(str(u), style='filled', fillcolor='lightblue')
        else:
            dot.node(str(u))

    cut = set(map(lambda e : e.id, cut_edges))
    for e in G.original_edges():
        label = "{}/{}".format(e.flow, e.initial)
        if e.id in cut:
            dot.edge(str(e.source), str(e.target), label=label, color='red', fontcolor='red', penwidth='2.0')
        else:
            dot.edge(str(e.source), str(e.target), label=label)

    if render:
        dot.render(filename=G.id.replace("/","_")+tag, directory='.', view=False)
    return dot
