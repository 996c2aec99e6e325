import pytest

from pathtable.adapters.graph import CSVGraphRepository, TextGraphRepository
from pathtable.domain.errors import GraphError, GraphFormatError
from pathtable.domain.models import Edge


def _write_text_graph(directory, name="graph.txt"):
    path = directory / name
    path.write_text("3\nA\nB\nC\n1 2 5\n2 3 2\n1 3 10\n0\n", encoding="utf-8")
    return path


def _write_csv_graph(directory, edges_rows):
    (directory / "vertices.csv").write_text(
        "vertex_id,label\n1,A\n2,B\n3,C\n", encoding="utf-8"
    )
    (directory / "edges.csv").write_text(
        "source,destination,weight\n" + "".join(f"{row}\n" for row in edges_rows),
        encoding="utf-8",
    )


def test_text_repository_loads_configured_file(graph_config, tmp_path):
    _write_text_graph(tmp_path)
    repository = TextGraphRepository(graph_config)

    store = repository.load()

    assert store.labels() == ("A", "B", "C")
    assert store.edge_count == 3


def test_text_repository_explicit_path(graph_config, tmp_path):
    path = _write_text_graph(tmp_path, "other.txt")

    store = TextGraphRepository(graph_config, path=path).load()

    assert store.vertex_count == 3


def test_text_repository_returns_independent_copies(graph_config, tmp_path):
    _write_text_graph(tmp_path)
    repository = TextGraphRepository(graph_config)

    first = repository.load()
    first.clear()
    second = repository.load()

    assert second.vertex_count == 3


def test_text_repository_caches_until_cleared(graph_config, tmp_path):
    path = _write_text_graph(tmp_path)
    repository = TextGraphRepository(graph_config)
    repository.load()

    path.write_text("1\nZ\n", encoding="utf-8")
    assert repository.load().vertex_count == 3

    repository.clear_cache()
    assert repository.load().labels() == ("Z",)


def test_text_repository_missing_file(graph_config):
    with pytest.raises(GraphError) as excinfo:
        TextGraphRepository(graph_config).load()

    assert excinfo.value.file_path == str(graph_config.graph_path)
    assert isinstance(excinfo.value.cause, FileNotFoundError)


def test_text_repository_format_error_propagates(graph_config, tmp_path):
    (tmp_path / "graph.txt").write_text("x\n", encoding="utf-8")

    with pytest.raises(GraphFormatError):
        TextGraphRepository(graph_config).load()


def test_csv_repository_loads_graph(graph_config, tmp_path):
    _write_csv_graph(tmp_path, ["1,2,5", "2,3,2", "1,3,10"])

    store = CSVGraphRepository(graph_config).load()

    assert store.labels() == ("A", "B", "C")
    assert store.edges_from(1) == (Edge(1, 2, 5), Edge(1, 3, 10))


def test_csv_repository_skips_incomplete_and_negative_rows(graph_config, tmp_path):
    _write_csv_graph(tmp_path, ["1,2,5", ",3,2", "2,3,", "2,3,-1"])

    store = CSVGraphRepository(graph_config).load()

    assert list(store.iter_edges()) == [Edge(1, 2, 5)]


def test_csv_repository_rejects_bad_edge(graph_config, tmp_path):
    _write_csv_graph(tmp_path, ["1,2,five"])

    with pytest.raises(GraphFormatError) as excinfo:
        CSVGraphRepository(graph_config).load()

    assert excinfo.value.file_path == str(graph_config.edges_path)
    assert excinfo.value.line_number == 2


def test_csv_repository_rejects_unknown_vertex(graph_config, tmp_path):
    _write_csv_graph(tmp_path, ["1,7,1"])

    with pytest.raises(GraphFormatError):
        CSVGraphRepository(graph_config).load()


def test_csv_repository_requires_dense_ids(graph_config, tmp_path):
    _write_csv_graph(tmp_path, [])
    (tmp_path / "vertices.csv").write_text(
        "vertex_id,label\n1,A\n3,C\n", encoding="utf-8"
    )

    with pytest.raises(GraphFormatError) as excinfo:
        CSVGraphRepository(graph_config).load()

    assert excinfo.value.line_number == 3


def test_csv_repository_missing_file(graph_config):
    with pytest.raises(GraphError) as excinfo:
        CSVGraphRepository(graph_config).load()

    assert excinfo.value.file_path == str(graph_config.vertices_path)


def test_csv_repository_cache(graph_config, tmp_path):
    _write_csv_graph(tmp_path, ["1,2,5"])
    repository = CSVGraphRepository(graph_config)

    repository.load().insert_edge(2, 1, 1)
    assert repository.load().edge_count == 1

    _write_csv_graph(tmp_path, ["1,2,5", "2,1,1"])
    assert repository.load().edge_count == 1
    repository.clear_cache()
    assert repository.load().edge_count == 2


def test_csv_repository_undecodable_file(graph_config, tmp_path):
    _write_csv_graph(tmp_path, [])
    (tmp_path / "vertices.csv").write_bytes(b"vertex_id,label\n1,\xff\xfe\n")

    with pytest.raises(GraphError) as excinfo:
        CSVGraphRepository(graph_config).load()

    assert excinfo.value.file_path == str(graph_config.vertices_path)
    assert isinstance(excinfo.value.cause, UnicodeDecodeError)


def test_csv_repository_undecodable_edges_file(graph_config, tmp_path):
    _write_csv_graph(tmp_path, [])
    (tmp_path / "edges.csv").write_bytes(b"source,destination,weight\n1,2,\xff\n")

    with pytest.raises(GraphError) as excinfo:
        CSVGraphRepository(graph_config).load()

    assert excinfo.value.file_path == str(graph_config.edges_path)


@pytest.mark.parametrize(
    "file_name,content",
    [
        ("vertices.csv", "id,name\n1,A\n2,B\n"),
        ("edges.csv", "src,dst,w\n1,2,5\n"),
        ("vertices.csv", ""),
    ],
)
def test_csv_repository_missing_columns(graph_config, tmp_path, file_name, content):
    _write_csv_graph(tmp_path, ["1,2,5"])
    (tmp_path / file_name).write_text(content, encoding="utf-8")

    with pytest.raises(GraphFormatError) as excinfo:
        CSVGraphRepository(graph_config).load()

    assert excinfo.value.file_path == str(tmp_path / file_name)
    assert excinfo.value.line_number == 1
