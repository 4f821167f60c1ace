import logging

logger = logging.getLogger(__name__)


class InvalidInput(Exception):
    def __init__(self, message:str):
        super(InvalidInput, self).__init__('InvalidInput: ' + message)


class InvariantViolation(Exception):
    def __init__(self, message:str):
        super(InvariantViolation, self).__init__('InvariantViolation: ' + message)


class Edge:

    def __init__(self, id:int, source, target, capacity:int, is_reverse=False):
        self.id         = id
        self.source     = source
        self.target     = target
        self.capacity   = capacity #residual capacity
        self.initial    = capacity
        self.flow       = 0
        self.is_reverse = is_reverse
        self.reverse    = None     #handle of the paired edge in FlowNetwork.edges

    def __repr__(self):
        return "Edge({}, {}->{}, capacity={}, flow={}, reverse={})".format(
            self.id, self.source, self.target, self.capacity, self.flow, self.is_reverse)


class Vertex:

    def __init__(self, label):
        self.label   = label
        self.in_path = False
        self.edges   = [] #outgoing edge handles, kept in FlowNetwork.edge_key order


class FlowNetwork:

    def __init__(self, id:str = "G"):
        self.id            = id
        self.vertices      = dict()
        self.edges         = []
        self.source        = None
        self.sink          = None
        self.augmentations = 0

    @property
    def n(self) -> int:
        return len(self.vertices)

    @property
    def m(self) -> int:
        return sum(1 for e in self.edges if not e.is_reverse)

    def edge_key(self, e_id:int) -> tuple:
        e = self.edges[e_id]
        return (e.source, e.target, e.id)

    def _get_or_add_vertex(self, label) -> Vertex:
        if label not in self.vertices:
            self.vertices[label] = Vertex(label)
        return self.vertices[label]

    def _register(self, e:Edge):
        self.edges.append(e)
        edges = self.vertices[e.source].edges
        edges.append(e.id)
        edges.sort(key=self.edge_key)

    def add_edge(self, u, v, capacity) -> int:
        if isinstance(capacity, bool) or not isinstance(capacity, int):
            raise InvalidInput("capacity of edge ({},{}) must be an integer, got {!r}".format(u, v, capacity))
        if capacity < 0:
            raise InvalidInput("capacity of edge ({},{}) is negative: {}".format(u, v, capacity))
        try:
            sorted([u, v] + list(self.vertices)[:1])
        except TypeError:
            raise InvalidInput("vertex labels {!r} and {!r} cannot be ordered with the labels of graph {}".format(u, v, self.id))
        self._get_or_add_vertex(u)
        self._get_or_add_vertex(v)
        e = Edge(len(self.edges), u, v, capacity)
        self._register(e)
        return e.id

    def set_terminals(self, source, sink):
        for label in (source, sink):
            if label not in self.vertices:
                raise InvalidInput("vertex {} does not appear in any edge of graph {}".format(label, self.id))
        self.source = source
        self.sink   = sink

    def build_residual_graph(self):
        added = 0
        for u in self.get_nodes():
            for e_id in list(self.vertex(u).edges):
                e = self.edges[e_id]
                if e.is_reverse and e.reverse is None:
                    raise InvariantViolation("reverse edge {} has no paired edge".format(e_id))
                if e.reverse is not None:
                    continue
                r         = Edge(len(self.edges), e.target, e.source, 0, is_reverse=True)
                r.reverse = e.id
                e.reverse = r.id
                self._register(r)
                added += 1
        logger.debug("Graph %s: added %d reverse edges", self.id, added)
        return added

    def vertex(self, label) -> Vertex:
        return self.vertices[label]

    def get_nodes(self) -> list:
        return sorted(self.vertices)

    def out_edges(self, u) -> list:
        return self.vertices[u].edges

    def reverse_of(self, e_id:int) -> Edge:
        return self.edges[self.edges[e_id].reverse]

    def original_edges(self) -> list:
        return [ self.edges[e_id] for u in self.get_nodes() for e_id in self.out_edges(u) if not self.edges[e_id].is_reverse ]

    def outflow(self, u) -> int:
        return sum(map(lambda e : e.flow, filter(lambda e : e.source == u, self.original_edges())))

    def inflow(self, v) -> int:
        return sum(map(lambda e : e.flow, filter(lambda e : e.target == v, self.original_edges())))

    def excess(self, u) -> int:
        return self.inflow(u) - self.outflow(u)

    def dump(self, reverse=True, properties=True) -> str:
        lines = []
        for u in self.get_nodes():
            for e_id in self.out_edges(u):
                e = self.edges[e_id]
                if e.is_reverse and not reverse:
                    continue
                if properties:
                    lines.append("{} {} {{capacity: {}, flow: {}, isReverseEdge: {}}}".format(
                        u, e.target, e.capacity, e.flow, "true" if e.is_reverse else "false"))
                else:
                    lines.append("{} {} {}".format(u, e.target, e.flow))
        return "\n".join(lines)

    def __str__(self):
        return ">>>Graph {} n={} m={}\n".format(self.id, self.n, self.m) + self.dump()
