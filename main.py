import os
import sys
import logging
import argparse
from datetime import datetime
import graph
import flow
import utils

current_time = datetime.now()
dt_day       = current_time.strftime("%d-%m")
dt_time      = current_time.strftime("%H-%M-%S")
log_file     = "log_{}_{}.out".format(dt_day,dt_time)
logger       = logging.getLogger(__name__)


def make_trace() -> logging.Logger:
    trace   = logging.getLogger("maxflow.trace")
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter('%(message)s'))
    trace.handlers  = [handler]
    trace.propagate = False
    trace.setLevel(logging.INFO)
    return trace


def main(argv=None) -> int:

    parser = argparse.ArgumentParser(description='Maximum flow between a source and a sink (Ford-Fulkerson, DFS augmenting paths).')

    parser.add_argument('-i', '--input'  , default='-'         , help='Input file path (default: stdin)'                     )
    parser.add_argument('-o', '--output' , default='-'         , help='Output file path (default: stdout)'                   )
    parser.add_argument('-v', '--verbose', action='store_true' , help='Trace every augmentation'                             )
    parser.add_argument('-k', '--check'  , action='store_true' , help='Compare the result against a networkx minimum cut'   )
    parser.add_argument('-s', '--stats'  , action='store_true' , help='Print summary metrics of the final flow'              )
    parser.add_argument('-d', '--dot'    , action='store_true' , help='Render the final flow and minimum cut with graphviz' )
    parser.add_argument('-c', '--clear'  , action='store_true' , help='Delete the log file on exit'                         )

    args = parser.parse_args(argv)

    logging.basicConfig(filename=log_file,format='%(asctime)s,%(msecs)d %(name)s %(levelname)s %(message)s', datefmt='%H-%M-%S', level=logging.DEBUG)

    status = 0
    try:
        if args.input == '-':
            G = utils.read_graph(sys.stdin.read(), id="stdin")
        else:
            G = utils.read_graph_file(args.input)
    except graph.InvalidInput as e:
        logger.error("%s", e)
        print("ERROR: {}".format(e), file=sys.stderr)
        status = 1
    except OSError as e:
        logger.error("Cannot read \'%s\': %s", args.input, e)
        print("ERROR: {}".format(e), file=sys.stderr)
        status = 1

    if status == 0:
        logger.info("Starting max flow on graph \'%s\' with n=%d, m=%d", G.id, G.n, G.m)
        value  = flow.max_flow(G, trace=make_trace() if args.verbose else None)
        result = utils.format_result(G, value)

        if args.output == '-':
            sys.stdout.write(result)
        else:
            with open(args.output, "w") as f:
                f.write(result)

        if args.check:
            expected = utils.min_cut_value(G)
            if expected != value:
                logger.warning("Max flow %d differs from networkx minimum cut %d on graph %s", value, expected, G.id)
                print("PROBLEM: max flow {} != minimum cut {}".format(value, expected), file=sys.stderr)
                status = 2
            else:
                print("Minimum cut check: {}".format(expected), file=sys.stderr)

        if args.stats:
            for key, val in utils.metrics(G).items():
                print("{}: {}".format(key, val), file=sys.stderr)

        if args.dot:
            _, cut_edges = flow.min_cut(G)
            utils.visualize(G, cut_edges)

    #Cleaner
    if args.clear:
        root = logging.getLogger()
        for handler in list(root.handlers):
            if isinstance(handler, logging.FileHandler) and handler.baseFilename == os.path.abspath(log_file):
                root.removeHandler(handler)
                handler.close()
        if os.path.exists(log_file):
            os.remove(log_file)

    return status


if __name__ == "__main__":
    sys.exit(main())
