from __future__ import annotations

from pathlib import Path
from tempfile import TemporaryDirectory

from gonav.index import IndexService
from gonav.pipeline import build_graph_from_root, scan_file


SOURCE = """package shapes

type Shape interface {
    Area() float64
    Perimeter() float64
}

type Square struct{ side float64 }

func (s Square) Area() float64 { return s.side * s.side }

func (s Square) Perimeter() float64 {
    return 4 * s.side
}
"""


def test_build_graph_from_root_saves_json():
    with TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        (root / "shapes").mkdir()
        source = root / "shapes" / "shapes.go"
        source.write_text(SOURCE, encoding="utf-8")
        (root / "README.md").write_text("not go", encoding="utf-8")

        out_path = root / "index.json"
        graph = build_graph_from_root(root, out_path)

        assert out_path.exists()
        assert graph.number_of_nodes() > 0
        assert graph.number_of_edges() > 0
        assert graph.graph["snapshot"]["source_root"] == str(root)

        service = IndexService.from_json(out_path)
        assert service.metadata()["node_count"] == graph.number_of_nodes()
        expected = [hint.to_dict() for hint in scan_file(source).hints]
        assert service.file_hints(str(source)) == expected


def test_max_files_limits_scan():
    with TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        (root / "a.go").write_text(SOURCE, encoding="utf-8")
        (root / "b.go").write_text(SOURCE, encoding="utf-8")

        graph = build_graph_from_root(root, max_files=1)

        files = [node for node, data in graph.nodes(data=True) if data["type"] == "File"]
        assert len(files) == 1
