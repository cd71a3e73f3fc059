"""
Tests for hypergraph edge-list loading.
"""

import numpy as np
import pandas as pd
import pytest

from ssstensor import (
    InvalidEdgeError,
    contract_k_1,
    contract_k_1_low_memory,
    edges_to_arrays,
    load_hypergraph_tensor,
    read_edge_list,
)


@pytest.fixture
def weighted_csv(tmp_path):
    path = tmp_path / "hyperedges.csv"
    pd.DataFrame({
        'v1': [2, 1, 3],
        'v2': [1, 3, 1],
        'v3': [3, 3, 2],
        'weight': [1.0, 2.0, 0.5],
    }).to_csv(path, index=False)
    return path


class TestReadEdgeList:
    """Parsing delimited hyperedge files."""

    def test_weighted_file(self, weighted_csv):
        edges = read_edge_list(weighted_csv)
        assert edges == [((1, 2, 3), 1.0), ((1, 3, 3), 2.0), ((1, 2, 3), 0.5)]

    def test_unweighted_without_header(self, tmp_path):
        path = tmp_path / "edges.tsv"
        path.write_text("1\t2\n2\t4\n")
        edges = read_edge_list(path, sep='\t', header=None)
        assert edges == [((1, 2), 1.0), ((2, 4), 1.0)]

    def test_last_column_as_weight(self, tmp_path):
        path = tmp_path / "edges.txt"
        path.write_text("2 1 0.25\n3 3 4\n")
        edges = read_edge_list(path, sep=' ', header=None, weighted=True)
        assert edges == [((1, 2), 0.25), ((3, 3), 4.0)]

    def test_fractional_vertex_rejected(self, tmp_path):
        path = tmp_path / "edges.csv"
        path.write_text("v1,v2\n1,2\n1.5,3\n")
        with pytest.raises(InvalidEdgeError):
            read_edge_list(path)

    def test_missing_weight_rejected(self, tmp_path):
        path = tmp_path / "edges.csv"
        path.write_text("v1,v2,weight\n1,2,0.5\n2,3,\n")
        with pytest.raises(InvalidEdgeError):
            read_edge_list(path)


class TestLoadHypergraphTensor:
    """Building tensors from files."""

    def test_duplicate_hyperedges_summed(self, weighted_csv):
        A = load_hypergraph_tensor(weighted_csv)
        assert A.order == 3
        assert A.cubical_dimension == 3
        assert A.edges == {(1, 2, 3): 1.5, (1, 3, 3): 2.0}

    def test_explicit_dimension(self, weighted_csv):
        A = load_hypergraph_tensor(weighted_csv, dimension=10)
        assert A.cubical_dimension == 10

    def test_dimension_too_small(self, weighted_csv):
        with pytest.raises(InvalidEdgeError):
            load_hypergraph_tensor(weighted_csv, dimension=2)

    def test_mixed_arity_rejected(self, tmp_path):
        path = tmp_path / "mixed.csv"
        path.write_text("v1,v2,v3\n1,2,3\n1,2,\n")
        with pytest.raises(InvalidEdgeError):
            load_hypergraph_tensor(path)


class TestEdgesToArrays:
    """Raw arrays for the low-memory routines."""

    def test_rows_sorted_not_aggregated(self):
        indices, values = edges_to_arrays([((3, 1, 2), 1.0), ((1, 2, 3), 2.0)])
        np.testing.assert_array_equal(indices, [[1, 2, 3], [1, 2, 3]])
        np.testing.assert_array_equal(values, [1.0, 2.0])

    def test_low_memory_matches_store(self, weighted_csv):
        A = load_hypergraph_tensor(weighted_csv)
        indices, values = edges_to_arrays(read_edge_list(weighted_csv))
        x = np.array([0.3, -1.2, 0.8])
        np.testing.assert_allclose(contract_k_1_low_memory(indices, values, 3, x),
                                   contract_k_1(A, x))

    def test_inconsistent_order_rejected(self):
        with pytest.raises(InvalidEdgeError):
            edges_to_arrays([((1, 2), 1.0), ((1, 2, 3), 1.0)])

    def test_fractional_index_rejected(self):
        with pytest.raises(InvalidEdgeError):
            edges_to_arrays([((1, 2.5), 1.0)])
