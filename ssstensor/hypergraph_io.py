"""
Edge lists of uniform hypergraphs.

A k-uniform hypergraph on n vertices corresponds to an order-k symmetric
adjacency tensor, with one stored edge per hyperedge. Files hold one
hyperedge per row: k vertex columns (1-based) and an optional `weight`
column.
"""

import numpy as np
import pandas as pd

from .exceptions import InvalidEdgeError
from .tensor import SymmetricTensor, verify_edges


def read_edge_list(csv_path, sep=',', header='infer', weighted=None):
    """
    Parse a hyperedge list from a delimited text file.

    Parameters:
    -----------
    csv_path : str or path
        File to read
    sep : str
        Column delimiter
    header : 'infer', int or None
        Passed to pandas.read_csv. Use None for files without a header row.
    weighted : bool, optional
        Whether the last column holds weights. If None, a column named
        `weight` is used when present and every hyperedge gets weight 1
        otherwise.

    Returns:
    --------
    edges : list of (tuple of int, float)
        Sorted vertex tuples paired with weights
    """
    df = pd.read_csv(csv_path, sep=sep, header=header)
    columns = list(df.columns)

    if weighted is None:
        weighted = 'weight' in columns
        weight_col = 'weight' if weighted else None
    else:
        weight_col = ('weight' if 'weight' in columns else columns[-1]) if weighted else None

    vertex_cols = [c for c in columns if c != weight_col]
    if weight_col is not None:
        weights = df[weight_col].astype(float).to_numpy()
        missing = np.flatnonzero(np.isnan(weights))
        if missing.size:
            raise InvalidEdgeError(f"Missing weight on row {missing[0]} of {csv_path}")
    else:
        weights = np.ones(len(df))

    edges = []
    for row, weight in zip(df[vertex_cols].itertuples(index=False, name=None), weights):
        # shorter rows come back padded with NaN; they fail order validation later
        vertices = [v for v in row if not pd.isna(v)]
        if any(v != int(v) for v in vertices):
            raise InvalidEdgeError(f"Vertex labels must be integers, got {row}")
        edges.append((tuple(sorted(int(v) for v in vertices)), float(weight)))

    return edges


def load_hypergraph_tensor(csv_path, dimension=None, **read_kwargs):
    """
    Adjacency tensor of a uniform hypergraph stored in a file.

    Parameters:
    -----------
    csv_path : str or path
        File in the format accepted by read_edge_list
    dimension : int, optional
        Number of vertices. If None, the largest vertex label is used.
    **read_kwargs
        Forwarded to read_edge_list

    Returns:
    --------
    A : SymmetricTensor
    """
    edges = read_edge_list(csv_path, **read_kwargs)
    return SymmetricTensor(edges, dimension)


def edges_to_arrays(edges):
    """
    Convert an edge list into the parallel arrays used by the low-memory routines.

    Rows are sorted; edges are not aggregated.

    Returns:
    --------
    indices : array (m, k) of int
    values : array (m,)
    """
    edges = [(sorted(indices), weight) for indices, weight in edges]
    order, _ = verify_edges(edges)

    indices = np.array([e[0] for e in edges], dtype=np.int64).reshape(len(edges), order or 0)
    values = np.array([e[1] for e in edges], dtype=float)
    return indices, values
