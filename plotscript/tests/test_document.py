"""Tests for the document model and script compiler.

Validates command ordering (hooks, properties, terminal, plots, quit),
the single-graph shortcut, multiplot tiles, page titles, layout
synchronization, and idempotent compilation.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from plotscript.layout.grid import GraphLayout, GridGraphLayout, LayoutMetrics
from plotscript.plot.graph import Graph
from plotscript.plot.plots import DataSetPlot, FunctionPlot
from plotscript.script.document import Document, ScriptError
from plotscript.script.terminal import Terminal


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def doc() -> Document:
    return Document()


@pytest.fixture()
def two_graphs() -> Document:
    d = Document()
    d.add_plot(FunctionPlot("sin(x)"))
    d.new_graph()
    d.add_plot(FunctionPlot("cos(x)"))
    return d


# ---------------------------------------------------------------------------
# Terminal
# ---------------------------------------------------------------------------


class TestTerminal:
    def test_default_emits_nothing(self) -> None:
        assert Terminal().to_lines() == []

    def test_type_and_output(self) -> None:
        term = Terminal("pngcairo size 800,600", "out/fig.png")
        assert term.to_lines() == [
            "set term pngcairo size 800,600",
            "set output 'out/fig.png'",
        ]

    def test_none_normalized(self) -> None:
        term = Terminal(None, None)  # type: ignore[arg-type]
        assert term.device_type == ""
        assert term.output_path == ""

    def test_multiline_rejected(self) -> None:
        with pytest.raises(ValueError):
            Terminal("png\nquit")


# ---------------------------------------------------------------------------
# Document state
# ---------------------------------------------------------------------------


class TestDocumentState:
    def test_starts_with_one_graph(self, doc: Document) -> None:
        assert len(doc.graphs) == 1
        assert doc.current_graph == 0
        assert doc.page_title == ""
        assert doc.layout.capacity == 1

    def test_new_graph_becomes_current(self, doc: Document) -> None:
        idx = doc.new_graph()
        assert idx == 1
        assert doc.current_graph == 1
        doc.add_plot(FunctionPlot("x"))
        assert len(doc.graphs[0]) == 0
        assert len(doc.graphs[1]) == 1
        assert doc.plots == (FunctionPlot("x"),)

    def test_add_graph_returns_index(self, doc: Document) -> None:
        g = Graph()
        assert doc.add_graph(g) == 1
        assert doc.graphs[1] is g

    @pytest.mark.parametrize("k", [0, 1, 2, 4, 9])
    def test_layout_capacity_tracks_graphs(self, doc: Document, k: int) -> None:
        for _ in range(k):
            doc.new_graph()
        assert doc.layout.capacity == k + 1
        assert isinstance(doc.layout, GridGraphLayout)
        assert doc.layout.cell_count >= k + 1

    def test_explicit_target_graph(self, doc: Document) -> None:
        doc.new_graph()
        assert doc.add_plot(FunctionPlot("x"), graph=0) == 0
        assert len(doc.graphs[0]) == 1
        assert doc.current_graph == 1

    def test_bad_target_graph(self, doc: Document) -> None:
        with pytest.raises(IndexError):
            doc.add_plot(FunctionPlot("x"), graph=3)
        with pytest.raises(IndexError):
            doc.get_axis("x", graph=-1)

    def test_none_plot_rejected(self, doc: Document) -> None:
        with pytest.raises(TypeError):
            doc.add_plot(None)  # type: ignore[arg-type]

    def test_add_graph_requires_graph(self, doc: Document) -> None:
        with pytest.raises(TypeError):
            doc.add_graph("graph")  # type: ignore[arg-type]
        assert len(doc.graphs) == 1

    def test_get_axis_proxies_current_graph(self, doc: Document) -> None:
        doc.new_graph()
        axis = doc.get_axis("y")
        assert doc.graphs[1].axes["y"] is axis
        assert "y" not in doc.graphs[0].axes

    def test_page_title_none_normalized(self, doc: Document) -> None:
        doc.set_page_title("Run")
        doc.set_page_title(None)
        assert doc.page_title == ""
        doc.page_title = "Again"
        assert doc.page_title == "Again"

    @pytest.mark.parametrize("title", ['a "b"', "a\nb"])
    def test_page_title_rejects_breaking_text(self, doc: Document, title: str) -> None:
        with pytest.raises(ValueError):
            doc.set_page_title(title)

    def test_hook_commands_kept_verbatim(self, doc: Document) -> None:
        doc.add_pre_init("set xrange [0:1]\nset yrange [0:1]")
        doc.add_post_init("  set tics out  ")
        assert doc.pre_init == ("set xrange [0:1]\nset yrange [0:1]",)
        assert doc.compile() == (
            "set xrange [0:1]\nset yrange [0:1]\n  set tics out  \nquit\n"
        )

    def test_custom_layout_synchronized(self, doc: Document) -> None:
        doc.new_graph()
        doc.new_graph()
        layout = GridGraphLayout(5, 5)
        doc.layout = layout
        assert layout.capacity == 3
        assert (layout.rows, layout.cols) == (1, 3)

    def test_layout_in_constructor(self) -> None:
        layout = GridGraphLayout(4, 4, prefer_columns=False)
        d = Document(layout)
        assert d.layout is layout
        assert layout.capacity == 1
        d.new_graph()
        assert (layout.rows, layout.cols) == (2, 1)


# ---------------------------------------------------------------------------
# Compilation: single graph
# ---------------------------------------------------------------------------


class TestCompileSingleGraph:
    def test_empty_document_is_quit(self, doc: Document) -> None:
        assert doc.compile() == "quit\n"
        assert doc.compile(Terminal()) == "quit\n"

    def test_no_multiplot_wrapper(self, doc: Document) -> None:
        doc.set_page_title("ignored")
        doc.add_plot(FunctionPlot("sin(x)"))
        script = doc.compile()
        assert script == "plot sin(x)\nquit\n"
        assert "multiplot" not in script
        assert "set origin" not in script

    def test_full_ordering(self, doc: Document) -> None:
        doc.add_pre_init("reset")
        doc.add_pre_init("set encoding utf8")
        doc.set("grid")
        doc.set("key", "left top")
        doc.add_post_init("set style fill solid")
        doc.get_axis("x").set_label("t")
        doc.add_plot(DataSetPlot([[0, 1]]))
        script = doc.compile(Terminal("png", "out.png"))
        assert script.splitlines() == [
            "reset",
            "set encoding utf8",
            "set grid",
            "set key left top",
            "set term png",
            "set output 'out.png'",
            "set style fill solid",
            'set xlabel "t"',
            "plot '-'",
            "0.0 1.0",
            "e",
            "quit",
        ]

    def test_output_without_type(self, doc: Document) -> None:
        script = doc.compile(Terminal(output_path="fig.svg"))
        assert script == "set output 'fig.svg'\nquit\n"

    def test_type_without_output(self, doc: Document) -> None:
        assert doc.compile(Terminal("dumb")) == "set term dumb\nquit\n"

    def test_unset_property_dropped(self, doc: Document) -> None:
        doc.set("grid")
        doc.unset("grid")
        assert doc.compile() == "quit\n"

    def test_newline_terminated(self, doc: Document) -> None:
        doc.add_plot(FunctionPlot("x"))
        assert doc.compile().endswith("quit\n")


# ---------------------------------------------------------------------------
# Compilation: multiplot
# ---------------------------------------------------------------------------


class TestCompileMultiplot:
    def test_two_graphs(self, two_graphs: Document) -> None:
        assert two_graphs.compile().splitlines() == [
            "set multiplot",
            "set origin 0.0,0.0",
            "set size 0.5,1.0",
            "plot sin(x)",
            "set origin 0.5,0.0",
            "set size 0.5,1.0",
            "plot cos(x)",
            "unset multiplot",
            "quit",
        ]

    def test_page_title(self, two_graphs: Document) -> None:
        two_graphs.set_page_title("Comparison")
        lines = two_graphs.compile().splitlines()
        assert lines[0] == 'set multiplot title "Comparison"'

    def test_empty_title_omitted(self, two_graphs: Document) -> None:
        two_graphs.set_page_title("")
        assert two_graphs.compile().splitlines()[0] == "set multiplot"

    def test_tiles_match_layout(self) -> None:
        d = Document()
        for _ in range(5):
            d.new_graph()
        lines = d.compile().splitlines()
        origins = [l for l in lines if l.startswith("set origin")]
        sizes = [l for l in lines if l.startswith("set size")]
        assert len(origins) == len(sizes) == 6
        assert origins[:3] == [
            "set origin 0.0,0.5",
            f"set origin {1 / 3!r},0.5",
            f"set origin {2 / 3!r},0.5",
        ]
        assert origins[3] == "set origin 0.0,0.0"
        assert set(sizes) == {f"set size {1 / 3!r},0.5"}

    def test_graph_content_in_index_order(self) -> None:
        d = Document()
        d.add_plot(FunctionPlot("a(x)"))
        d.new_graph()
        d.add_plot(FunctionPlot("b(x)"))
        d.new_graph()
        d.add_plot(FunctionPlot("c(x)"), graph=0)
        plots = [l for l in d.compile().splitlines() if l.startswith("plot")]
        assert plots == ["plot a(x), c(x)", "plot b(x)"]

    def test_hooks_and_terminal_precede_multiplot(self, two_graphs: Document) -> None:
        two_graphs.add_pre_init("reset")
        two_graphs.add_post_init("set tics out")
        two_graphs.set("grid")
        lines = two_graphs.compile(Terminal("svg")).splitlines()
        assert lines[:5] == [
            "reset",
            "set grid",
            "set term svg",
            "set tics out",
            "set multiplot",
        ]
        assert lines[-2:] == ["unset multiplot", "quit"]

    def test_empty_extra_graph_still_gets_tile(self, doc: Document) -> None:
        doc.add_plot(FunctionPlot("x"))
        doc.new_graph()
        lines = doc.compile().splitlines()
        assert lines.count("set size 0.5,1.0") == 2


# ---------------------------------------------------------------------------
# Determinism and invariants
# ---------------------------------------------------------------------------


class _BrokenLayout(GraphLayout):
    """Layout that ignores capacity updates."""

    @property
    def capacity(self) -> int:
        return 1

    def update_capacity(self, n: int) -> None:
        pass

    def get_metrics(self, index: int) -> LayoutMetrics:
        return LayoutMetrics(0.0, 0.0, 1.0, 1.0)


class TestCompileInvariants:
    def test_idempotent(self, two_graphs: Document) -> None:
        two_graphs.set("grid")
        term = Terminal("png", "a.png")
        first = two_graphs.compile(term)
        assert two_graphs.compile(term) == first
        assert len(two_graphs.graphs) == 2
        assert two_graphs.current_graph == 1

    def test_layout_divergence_detected(self) -> None:
        d = Document(_BrokenLayout())
        d.new_graph()
        with pytest.raises(ScriptError, match="sized for 1"):
            d.compile()

    def test_custom_layout_metrics_used(self) -> None:
        class Stacked(_BrokenLayout):
            def __init__(self) -> None:
                self._n = 1

            @property
            def capacity(self) -> int:
                return self._n

            def update_capacity(self, n: int) -> None:
                self._n = n

            def get_metrics(self, index: int) -> LayoutMetrics:
                h = 1.0 / self._n
                return LayoutMetrics(0.0, 1.0 - (index + 1) * h, 1.0, h)

        d = Document(Stacked())
        d.new_graph()
        lines = d.compile().splitlines()
        assert "set origin 0.0,0.5" in lines
        assert "set size 1.0,0.5" in lines


# ---------------------------------------------------------------------------
# Script files
# ---------------------------------------------------------------------------


class TestWriteScript:
    def test_writes_compiled_text(self, two_graphs: Document, tmp_path: Path) -> None:
        out = two_graphs.write_script(tmp_path / "nested" / "fig.gp", Terminal("dumb"))
        assert out.read_text(encoding="utf-8") == two_graphs.compile(Terminal("dumb"))
        assert not list(out.parent.glob("*.tmp"))
