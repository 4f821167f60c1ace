import logging
from graph import FlowNetwork

logger = logging.getLogger(__name__)


def find_path(G : FlowNetwork, source, sink) -> list :
    #DFS over positive-capacity residual edges, last-ordered edge first. None if no path; no marks left behind.
    path  = []
    G.vertex(source).in_path = True
    stack = [ (source, reversed(G.out_edges(source))) ]

    while stack:
        u, edges = stack[-1]
        advanced = False
        for e_id in edges:
            e = G.edges[e_id]
            v = G.vertex(e.target)
            if v.in_path or e.capacity <= 0:
                continue
            path.append(e_id)
            if e.target == sink:
                for w, _ in stack:
                    G.vertex(w).in_path = False
                return path
            v.in_path = True
            stack.append( (e.target, reversed(G.out_edges(e.target))) )
            advanced = True
            break

        if not advanced: #backtrack
            stack.pop()
            G.vertex(u).in_path = False
            if path:
                path.pop()

    return None


def path_vertices(G : FlowNetwork, path : list) -> list :
    if not path:
        return []
    return [ G.edges[e_id].source for e_id in path ] + [ G.edges[path[-1]].target ]
