#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
netctrl command line tool.

Loads a network, runs a controllability model on it and writes the result.

Usage
  netctrl network.txt
  netctrl -m switchboard -M statistics network.ncol
  netctrl -M graph -o annotated.graphml network.txt
  netctrl -T degree:10% -M control_paths network.txt
  cat network.txt | netctrl -
"""

import argparse
import logging
import sys
from contextlib import contextmanager

from netctrl import __version__
from netctrl.config import load_config
from netctrl.errors import NetctrlError
from netctrl.io import INPUT_FORMATS, OUTPUT_FORMATS, read_graph, write_graph
from netctrl.model import (ControllabilityMeasure, EdgeClass,
                           LiuControllabilityModel,
                           SwitchboardControllabilityModel)
from netctrl.nullmodels import significance
from netctrl.targets import parse_targets

logger = logging.getLogger("netctrl")

MODELS = ("liu", "switchboard")
MODES = ("driver_nodes", "control_paths", "statistics", "graph",
         "significance", "plot")


# ──────────────────────────────────────────────────────────────────────────────
# Utils
# ──────────────────────────────────────────────────────────────────────────────
def setup_logging(verbosity):
    """[INFO]/[WARN]/[ERROR] lines on stderr; -q keeps errors only."""
    level = {0: logging.ERROR, 1: logging.INFO}.get(verbosity, logging.DEBUG)
    logging.addLevelName(logging.WARNING, "WARN")

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))

    root = logging.getLogger("netctrl")
    root.handlers[:] = [handler]
    root.setLevel(level)
    root.propagate = False


def build_parser():
    ap = argparse.ArgumentParser(
        prog="netctrl",
        description="Structural controllability of complex networks.")
    ap.add_argument("input", help="input graph file, '-' for standard input")
    ap.add_argument("-m", "--model", choices=MODELS, default=None,
                    help="controllability model (default: liu)")
    ap.add_argument("-M", "--mode", choices=MODES, default=None,
                    help="what to calculate (default: driver_nodes)")
    ap.add_argument("-o", "--output", default="-",
                    help="output file, '-' for standard output")
    ap.add_argument("-f", "--input-format", choices=INPUT_FORMATS, default=None)
    ap.add_argument("-F", "--output-format", choices=OUTPUT_FORMATS, default=None,
                    help="graph format in 'graph' mode (default: graphml)")
    ap.add_argument("-u", "--undirected", action="store_true", default=None,
                    help="treat edge list input as undirected")
    ap.add_argument("-T", "--targets", default=None,
                    help="target nodes, e.g. 'a,b,c' or 'degree:10%%'")
    ap.add_argument("-E", "--edge-measure", action="store_true", default=None,
                    help="switchboard model: measure controllability by edges")
    ap.add_argument("--trials", type=int, default=None,
                    help="number of random graphs per null model (default: 100)")
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--config", default=None, help="path to config.json (optional)")
    ap.add_argument("-v", "--verbose", dest="verbosity", action="store_const",
                    const=2, default=1)
    ap.add_argument("-q", "--quiet", dest="verbosity", action="store_const", const=0)
    ap.add_argument("-V", "--version", action="version",
                    version=f"%(prog)s {__version__}")
    return ap


def merge_options(args, config):
    """Command line values win over the configuration file."""
    options = dict(config)
    for key in ("model", "mode", "input_format", "output_format", "undirected",
                "edge_measure", "targets", "trials", "seed"):
        value = getattr(args, key)
        if value is not None:
            options[key] = value
    if options["model"] not in MODELS:
        raise ValueError(f"Unknown model type: {options['model']}")
    if options["mode"] not in MODES:
        raise ValueError(f"Unknown mode: {options['mode']}")
    return options


def create_model(graph, options):
    if options["model"] == "switchboard":
        model = SwitchboardControllabilityModel(graph)
        if options["edge_measure"]:
            model.set_controllability_measure(ControllabilityMeasure.EDGE)
    else:
        model = LiuControllabilityModel(graph)

    if options["targets"]:
        targets = parse_targets(graph, options["targets"])
        logger.info(">> %d target node(s) selected", len(targets))
        model.set_targets(targets)
    return model


@contextmanager
def open_output(path, binary=False):
    if path in (None, "-"):
        yield sys.stdout.buffer if binary else sys.stdout
        return
    mode = "wb" if binary else "w"
    kwargs = {} if binary else {"encoding": "utf-8"}
    with open(path, mode, **kwargs) as f:
        yield f


def count_edge_classes(edge_classes):
    counts = {klass: 0 for klass in EdgeClass}
    for klass in edge_classes:
        counts[klass] += 1
    return counts


# ──────────────────────────────────────────────────────────────────────────────
# Modes
# ──────────────────────────────────────────────────────────────────────────────
def run_driver_nodes(graph, model, options, out):
    logger.info(">> calculating control paths and driver nodes")
    model.calculate()
    driver_nodes = model.driver_nodes()
    logger.info(">> found %d driver node(s)", len(driver_nodes))
    for v in driver_nodes:
        out.write(f"{graph.names[v]}\n")


def run_control_paths(graph, model, options, out):
    logger.info(">> calculating control paths")
    model.calculate()
    paths = model.control_paths()
    logger.info(">> found %d control path(s)", len(paths))
    for path in paths:
        out.write(path.to_string(graph.names) + "\n")


def run_statistics(graph, model, options, out):
    n, m = graph.node_count, graph.edge_count

    logger.info(">> calculating control paths and driver nodes")
    model.calculate()
    num_driver = len(model.driver_nodes())

    logger.info(">> classifying edges")
    edge_classes = model.edge_classes() if model.supports_edge_classes() else []
    if not edge_classes:
        logger.warning("edge classes are not available for this model")
    counts = count_edge_classes(edge_classes)

    logger.info(">> order is as follows:")
    logger.info(">> driver nodes; distinguished, redundant, ordinary, critical edges")

    values = [num_driver, counts[EdgeClass.DISTINGUISHED], counts[EdgeClass.REDUNDANT],
              counts[EdgeClass.ORDINARY], counts[EdgeClass.CRITICAL]]
    fractions = [num_driver / n if n else 0.0]
    fractions += [value / m if m else 0.0 for value in values[1:]]
    out.write(" ".join(str(value) for value in values) + "\n")
    out.write(" ".join(f"{value:.6g}" for value in fractions) + "\n")


def annotate_graph(graph, model):
    """Returns a networkx copy of the graph with the results as attributes."""
    driver_nodes = set(model.driver_nodes())
    paths = model.control_paths()
    edge_classes = model.edge_classes() if model.supports_edge_classes() else []

    g = graph.to_networkx()
    for v, data in g.nodes(data=True):
        data["name"] = str(data["name"])
        data["is_driver"] = v in driver_nodes

    edge_data = {eid: data for _, _, eid, data in g.edges(keys=True, data=True)}
    for index, path in enumerate(paths):
        for order, eid in enumerate(path.edges(graph)):
            edge_data[eid]["path_type"] = path.name
            edge_data[eid]["path_index"] = index
            edge_data[eid]["path_order"] = order
    for eid, klass in enumerate(edge_classes):
        edge_data[eid]["edge_class"] = str(klass)
    return g


def run_graph(graph, model, options, output):
    logger.info(">> calculating control paths and driver nodes")
    model.calculate()
    logger.info(">> found %d driver node(s) and %d control path(s)",
                len(model.driver_nodes()), len(model.control_paths()))

    logger.info(">> classifying edges")
    g = annotate_graph(graph, model)
    with open_output(output, binary=True) as out:
        write_graph(g, out, options["output_format"])


def run_significance(graph, model, options, out):
    logger.info(">> calculating control paths and driver nodes")
    table = significance(model, trials=int(options["trials"]), seed=options["seed"])
    table.to_csv(out, sep="\t", index=False, header=False)


def run_plot(graph, model, options, output):
    from netctrl.plot import draw_controllability

    if output in (None, "-"):
        raise ValueError("plot mode needs an output file (-o drawing.png)")

    logger.info(">> calculating control paths and driver nodes")
    model.calculate()
    edge_classes = model.edge_classes() if model.supports_edge_classes() else []
    draw_controllability(graph, model.driver_nodes(), edge_classes, output,
                         seed=options["seed"] if options["seed"] is not None else 42)


TEXT_MODES = {
    "driver_nodes": run_driver_nodes,
    "control_paths": run_control_paths,
    "statistics": run_statistics,
    "significance": run_significance,
}
FILE_MODES = {
    "graph": run_graph,
    "plot": run_plot,
}


# ──────────────────────────────────────────────────────────────────────────────
# Main
# ──────────────────────────────────────────────────────────────────────────────
def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.verbosity)

    try:
        options = merge_options(args, load_config(args.config))
    except (OSError, ValueError) as e:
        logger.error(str(e))
        return 1

    logger.info(">> loading graph: %s", args.input)
    try:
        graph = read_graph(args.input, options["input_format"],
                           directed=not options["undirected"])
    except (OSError, ValueError, NetctrlError) as e:
        logger.error(str(e))
        return 2

    logger.info(">> graph is %s and has %d vertices and %d edges",
                "directed" if graph.is_directed else "undirected",
                graph.node_count, graph.edge_count)

    try:
        model = create_model(graph, options)
        mode = options["mode"]
        if mode in FILE_MODES:
            FILE_MODES[mode](graph, model, options, args.output)
        else:
            with open_output(args.output) as out:
                TEXT_MODES[mode](graph, model, options, out)
    except NetctrlError as e:
        logger.error(str(e))
        return 2
    except OSError as e:
        logger.error(f"cannot write output: {e}")
        return 3
    except ValueError as e:
        logger.error(str(e))
        return 1

    if args.output not in (None, "-"):
        logger.info(">> results were written to %s", args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
