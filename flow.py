import logging
from graph import FlowNetwork, InvariantViolation
from paths import find_path, path_vertices

logger = logging.getLogger(__name__)


def bottleneck(G : FlowNetwork, path : list) -> int :
    if not path:
        raise InvariantViolation("bottleneck requested on an empty path")
    return min(map(lambda e_id : G.edges[e_id].capacity, path))


def apply_flow(G : FlowNetwork, path : list, amount : int):
    if amount < 0:
        raise InvariantViolation("negative flow change {}".format(amount))
    for e_id in path:
        e = G.edges[e_id]
        if e.reverse is None:
            raise InvariantViolation("edge ({},{}) has no paired reverse edge".format(e.source, e.target))
        if e.capacity < amount:
            raise InvariantViolation("flow change {} exceeds capacity {} of edge ({},{})".format(amount, e.capacity, e.source, e.target))

    for e_id in path:
        e = G.edges[e_id]
        r = G.reverse_of(e_id)
        e.flow     += amount
        e.capacity -= amount
        r.flow     -= amount
        r.capacity += amount


def max_flow(G : FlowNetwork, trace : logging.Logger = None) -> int :
    #Ford-Fulkerson: augment along DFS paths until none is left. trace only observes.
    if G.source is None or G.sink is None:
        raise InvariantViolation("source and sink of graph {} are not set".format(G.id))

    if trace: trace.info("Adding reverse edges:")
    G.build_residual_graph()
    if trace: trace.info(G.dump())

    if G.source == G.sink:
        logger.warning("Graph %s has source equal to sink (%s), flow is 0.", G.id, G.source)
        if trace:
            trace.info("Searching a path.")
            trace.info("Path is not found - the algorithm is complete.")
        return 0

    flow_value = 0

    if trace: trace.info("Searching a path.")
    while True:
        path = find_path(G, G.source, G.sink)
        if path is None:
            break
        if trace:
            trace.info("Path is found: ")
            trace.info(" ".join(map(str, path_vertices(G, path))))

        k = bottleneck(G, path)
        if trace: trace.info("Min capacity = {}".format(k))

        if trace: trace.info("Changing the flow through the path.")
        apply_flow(G, path, k)
        G.augmentations += 1
        if trace:
            trace.info("Modified graph:")
            trace.info(G.dump())

        flow_value += k
        logger.debug("Graph %s: augmentation %d pushed %d, flow value %d", G.id, G.augmentations, k, flow_value)
        if trace: trace.info("Flow value = {}".format(flow_value))

    if trace: trace.info("Path is not found - the algorithm is complete.")
    logger.info("Graph %s: max flow %d after %d augmentations", G.id, flow_value, G.augmentations)
    return flow_value


def min_cut(G : FlowNetwork) -> tuple :
    #source side of a minimum cut and the original edges crossing it, once max_flow has run
    reachable = {G.source}
    stack     = [G.source]
    while stack:
        u = stack.pop()
        for e_id in G.out_edges(u):
            e = G.edges[e_id]
            if e.capacity > 0 and e.target not in reachable:
                reachable.add(e.target)
                stack.append(e.target)

    cut_edges = [ e for e in G.original_edges() if e.source in reachable and e.target not in reachable ]
    return reachable, cut_edges
