# -*- coding: utf-8 -*-
"""
Reading and writing graphs.

Supported input formats:
  edgelist  (.txt)      whitespace separated 0-based node index pairs
  ncol      (.ncol)     whitespace separated node names, optional weight
  tsv       (.tsv)      tab separated table with a header; the first two
                        columns hold source and target names
  graphml   (.graphml)  GraphML, read with networkx
  gml       (.gml)      GML, read with networkx

Supported output formats: edgelist, graphml, gml.
"""

import os
import sys

import networkx as nx
import pandas as pd

from netctrl.errors import UnknownGraphFormatError
from netctrl.graph import Graph

INPUT_FORMATS = ("auto", "edgelist", "ncol", "tsv", "graphml", "gml")
OUTPUT_FORMATS = ("edgelist", "graphml", "gml")

_EXTENSIONS = {
    ".txt": "edgelist",
    ".edges": "edgelist",
    ".ncol": "ncol",
    ".tsv": "tsv",
    ".graphml": "graphml",
    ".gml": "gml",
}


def detect_format(filename):
    """Guesses the format of a graph file from its extension, or None."""
    _, ext = os.path.splitext(str(filename))
    return _EXTENSIONS.get(ext.lower())


def read_graph(source, fmt="auto", directed=True):
    """
    Reads a graph from a file name, "-" (standard input) or an open file.

    For formats that do not record directedness (edgelist, ncol, tsv) the
    ``directed`` argument decides; GraphML and GML files carry their own.
    """
    if fmt in (None, "auto"):
        if source == "-" or not isinstance(source, (str, os.PathLike)):
            fmt = "edgelist"
        else:
            fmt = detect_format(source)
            if fmt is None:
                raise UnknownGraphFormatError(str(source))

    if source == "-":
        source = sys.stdin.buffer if fmt in ("graphml", "gml") else sys.stdin
    elif isinstance(source, (str, os.PathLike)) and not os.path.exists(source):
        raise FileNotFoundError(f"File not found: {source}")

    if fmt == "edgelist":
        return _read_edgelist(source, directed)
    if fmt == "ncol":
        return _read_ncol(source, directed)
    if fmt == "tsv":
        return _read_tsv(source, directed)
    if fmt == "graphml":
        return Graph.from_networkx(nx.read_graphml(source))
    if fmt == "gml":
        return Graph.from_networkx(nx.read_gml(source))
    raise UnknownGraphFormatError(str(source))


def _read_edgelist(source, directed):
    try:
        edges = pd.read_csv(source, sep=r"\s+", header=None, names=["u", "v"],
                            comment="#", dtype=int)
    except pd.errors.EmptyDataError:
        return Graph(0, directed=directed)

    n = int(edges.to_numpy().max()) + 1 if len(edges) else 0
    return Graph(n, zip(edges.u.tolist(), edges.v.tolist()), directed=directed)


def _graph_from_names(sources, targets, directed):
    index = {}
    pairs = []
    for s, t in zip(sources, targets):
        u = index.setdefault(s, len(index))
        if pd.isna(t):
            continue
        v = index.setdefault(t, len(index))
        pairs.append((u, v))
    return Graph(len(index), pairs, directed=directed, names=list(index))


def _read_ncol(source, directed):
    try:
        table = pd.read_csv(source, sep=r"\s+", header=None,
                            names=["source", "target", "weight"],
                            comment="#", dtype=str)
    except pd.errors.EmptyDataError:
        return Graph(0, directed=directed)
    # the weight column is ignored
    return _graph_from_names(table.source, table.target, directed)


def _read_tsv(source, directed):
    table = pd.read_csv(source, sep="\t", dtype=str)
    if table.shape[1] < 2:
        raise ValueError("edge table needs at least two columns (source, target)")
    return _graph_from_names(table.iloc[:, 0].str.strip(),
                             table.iloc[:, 1].str.strip(), directed)


def write_graph(g, target, fmt="graphml"):
    """
    Writes a networkx graph to a file name, "-" (standard output) or an open
    binary file.
    """
    if fmt not in OUTPUT_FORMATS:
        raise UnknownGraphFormatError(str(target))

    if target == "-":
        target = sys.stdout.buffer

    if fmt == "graphml":
        nx.write_graphml(g, target)
    elif fmt == "gml":
        nx.write_gml(g, target)
    else:
        lines = "".join(f"{u}\t{v}\n" for u, v in g.edges())
        if isinstance(target, (str, os.PathLike)):
            with open(target, "w", encoding="utf-8") as f:
                f.write(lines)
        else:
            target.write(lines.encode("utf-8"))
