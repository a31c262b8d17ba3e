# -*- coding: utf-8 -*-
"""
Random null models for judging whether an observed controllability is
unusual.

Each null model generates a random graph resembling the observed one; the
controllability model is cloned, attached to the random graph and evaluated,
and the mean over all trials is reported next to the observed value.
"""

import logging

import networkx as nx
import numpy as np
import pandas as pd

from netctrl.graph import Graph, Mode

logger = logging.getLogger(__name__)


def _seed(rng):
    return int(rng.integers(0, 2**31 - 1))


def erdos_renyi(graph, rng):
    """Random graph with the same number of nodes and edges (G(n, m) model)."""
    g = nx.gnm_random_graph(graph.node_count, graph.edge_count,
                            seed=_seed(rng), directed=graph.is_directed)
    return Graph.from_networkx(g)


def configuration(graph, rng, in_degrees=None, out_degrees=None):
    """Configuration model preserving the (joint) degree sequences."""
    if graph.is_directed:
        if in_degrees is None:
            in_degrees = graph.degrees(Mode.IN)
        if out_degrees is None:
            out_degrees = graph.degrees(Mode.OUT)
        g = nx.directed_configuration_model(list(in_degrees), list(out_degrees),
                                            seed=_seed(rng))
    else:
        if out_degrees is None:
            out_degrees = graph.degrees(Mode.ALL)
        g = nx.configuration_model(list(out_degrees), seed=_seed(rng))
    return Graph.from_networkx(g)


def configuration_no_joint(graph, rng):
    """
    Configuration model that keeps the in- and out-degree sequences but
    shuffles them independently, destroying the joint degree distribution.
    """
    if not graph.is_directed:
        degrees = rng.permutation(graph.degrees(Mode.ALL))
        return configuration(graph, rng, out_degrees=degrees.tolist())
    in_degrees = rng.permutation(graph.degrees(Mode.IN))
    out_degrees = rng.permutation(graph.degrees(Mode.OUT))
    return configuration(graph, rng, in_degrees=in_degrees.tolist(),
                         out_degrees=out_degrees.tolist())


NULL_MODELS = {
    "ER": erdos_renyi,
    "Configuration": configuration,
    "Configuration_no_joint": configuration_no_joint,
}


def mean_controllability(model, generator, trials, rng):
    """Mean controllability of clones of the model over random graphs."""
    values = np.empty(trials)
    for i in range(trials):
        clone = model.clone()
        clone.set_graph(generator(model.graph, rng))
        clone.calculate()
        values[i] = clone.controllability()
    return float(values.mean()) if trials else float("nan")


def significance(model, trials=100, seed=None):
    """
    Compares the controllability of the model's graph with null models.

    The model is calculated in place. Returns a DataFrame with the columns
    "model" and "controllability"; the first row holds the observed value.
    """
    rng = np.random.default_rng(seed)

    model.calculate()
    rows = [{"model": "Observed", "controllability": model.controllability()}]
    logger.info("found %d driver node(s)", len(model.driver_nodes()))

    for name, generator in NULL_MODELS.items():
        logger.info("testing %s null model (%d trials)", name, trials)
        rows.append({
            "model": name,
            "controllability": mean_controllability(model, generator, trials, rng),
        })

    return pd.DataFrame(rows, columns=["model", "controllability"])
