"""Tests for the list/tree text views, stats and modules."""

import pytest

from script_report.analysis.report import ReportAssembler
from script_report.analysis.sizes import FileSizeResolver, SizeCache
from script_report.loader import load_snapshot
from script_report.models import RegistryRecorder
from script_report.render import render_list, render_modules, render_section, render_stats, render_tree


@pytest.fixture
def snapshot(snapshot_path):
    return load_snapshot(snapshot_path)


@pytest.fixture
def sizes(site_root):
    return SizeCache(FileSizeResolver(site_root))


@pytest.fixture
def scripts_data(snapshot, sizes):
    return ReportAssembler(sizes).analyze(snapshot.scripts)


class TestListView:
    def test_main_lines(self, snapshot, scripts_data, sizes):
        lines = render_list(snapshot.scripts, scripts_data, sizes)
        assert "- theme-main #5 (20 B) [ENQUEUED] [FOOTER] [INLINE 14 B]" in lines
        assert "- jquery #3" in lines
        assert "- lodash #4 (30 B) [DUPLICATE SRC]" in lines

    def test_unregistered_and_unneeded_skipped(self, snapshot, scripts_data, sizes):
        text = "\n".join(render_list(snapshot.scripts, scripts_data, sizes))
        assert "missing-lib" not in text
        assert "- unused" not in text
        assert "- lodash-copy" not in text

    def test_meta_lines(self, snapshot, scripts_data, sizes):
        lines = render_list(snapshot.scripts, scripts_data, sizes)
        i = lines.index("- jquery #3")
        assert lines[i + 1:i + 4] == [
            "    Added by: core",
            "    Loaded because of: theme-main",
            "    Used by: theme-main",
        ]
        assert "    Same file as: lodash-copy" in lines

    def test_queued_items_have_no_provenance_line(self, snapshot, scripts_data, sizes):
        lines = render_list(snapshot.scripts, scripts_data, sizes)
        i = lines.index("- theme-main #5 (20 B) [ENQUEUED] [FOOTER] [INLINE 14 B]")
        assert lines[i + 1:] == ["    Added by: theme: acme"]

    def test_unknown_provenance(self):
        rec = RegistryRecorder()
        rec.register("orphan")
        rec.enqueue("top")
        reg = rec.build()
        data = ReportAssembler().analyze(reg)
        data.needed.add("orphan")
        lines = render_list(reg, data, SizeCache())
        assert "    Loaded because of: unknown" in lines

    def test_styles_have_no_script_badges(self, sizes):
        rec = RegistryRecorder("styles")
        rec.register("s", "/s.css", extra={"group": 1, "data": "x"})
        rec.enqueue("s")
        reg = rec.build()
        lines = render_list(reg, ReportAssembler(sizes).analyze(reg), sizes)
        assert lines == ["- s #1 [ENQUEUED]"]

    def test_empty(self):
        reg = RegistryRecorder("styles").build()
        assert render_list(reg, ReportAssembler().analyze(reg), SizeCache()) == ["No styles loaded."]


class TestTreeView:
    def test_scripts_tree(self, snapshot):
        lines = render_tree(snapshot.scripts)
        assert lines[0] == "### Scripts loaded on this page"
        assert "- theme-main [ENQUEUED] [FOOTER] [INLINE 14 B]" in lines
        assert "    -> /wp-content/themes/acme/main.js?ver=2 (v2)" in lines
        assert "  - jquery" in lines
        assert "    - jquery-core" in lines
        assert "  - missing-lib [MISSING]" in lines

    def test_circular(self):
        rec = RegistryRecorder()
        rec.register("A", dependencies=["B"])
        rec.register("B", dependencies=["A"])
        rec.enqueue("A")
        lines = render_tree(rec.build())
        assert lines[2:] == ["- A [ENQUEUED]", "  - B", "    - A [CIRCULAR]"]

    def test_diamond_rendered_under_each_parent(self):
        rec = RegistryRecorder()
        rec.register("base")
        rec.register("left", dependencies=["base"])
        rec.register("right", dependencies=["base"])
        rec.register("top", dependencies=["left", "right"])
        rec.enqueue("top")
        lines = render_tree(rec.build())
        assert lines.count("    - base") == 2

    def test_indent_capped(self):
        rec = RegistryRecorder()
        for i in range(10):
            rec.register(f"n{i}", dependencies=[f"n{i + 1}"])
        rec.register("n10")
        rec.enqueue("n0")
        lines = render_tree(rec.build())
        assert lines[-1] == "          - n10"

    def test_depth_truncated(self):
        rec = RegistryRecorder()
        for i in range(100):
            rec.register(f"n{i}", dependencies=[f"n{i + 1}"])
        rec.enqueue("n0")
        lines = render_tree(rec.build())
        assert lines[-1].endswith("[TRUNCATED]")

    def test_layered_diamonds_capped_by_node_budget(self, caplog):
        # Every handle in a layer depends on both handles of the next layer,
        # so an uncapped tree would draw 2**layers leaves.
        layers = 30
        rec = RegistryRecorder()
        for i in range(layers):
            deps = [f"l{i + 1}a", f"l{i + 1}b"] if i + 1 < layers else []
            rec.register(f"l{i}a", dependencies=deps)
            rec.register(f"l{i}b", dependencies=deps)
        rec.enqueue("l0a")
        rec.enqueue("l0b")

        with caplog.at_level("WARNING", logger="script_report.render.tree_view"):
            lines = render_tree(rec.build(), max_nodes=500)

        assert len(lines) <= 2 + 500 + 1
        assert lines[-1].endswith("[TRUNCATED]")
        assert sum(1 for line in lines if line.endswith("[TRUNCATED]")) == 1
        assert "truncated after 500 nodes" in caplog.text

    def test_small_graph_not_truncated(self, snapshot):
        lines = render_tree(snapshot.scripts, max_nodes=9)
        assert not any(line.endswith("[TRUNCATED]") for line in lines)

    def test_empty_queue(self):
        lines = render_tree(RegistryRecorder("styles").build())
        assert lines[-1] == "No styles loaded."


class TestStatsAndModules:
    def test_stats(self, scripts_data):
        lines = render_stats(scripts_data)
        assert lines[:3] == [
            "- Registered: 8 (registered on this site)",
            "- Enqueued: 2 (requested by theme or plugins)",
            "- Scripts loaded: 7 (actually loaded, with dependencies)",
        ]
        assert "- Size: 210 B" in lines
        assert "- Missing: missing-lib" in lines

    def test_section_view_switch(self, snapshot, scripts_data, sizes):
        listed = render_section(snapshot.scripts, scripts_data, sizes)
        tree = render_section(snapshot.scripts, scripts_data, sizes, view="tree")
        assert listed[0] == "## JavaScript"
        assert "### Scripts loaded on this page" in tree
        assert "### Scripts loaded on this page" not in listed

    def test_modules(self, snapshot, sizes):
        lines = render_modules(snapshot.modules, sizes)
        assert "- @acme/view [ENQUEUED] [MODULE]" in lines
        assert "    Depends on: @wordpress/interactivity" in lines
        assert "- @wordpress/interactivity [MODULE]" in lines
