"""Tests for SVG document export."""

import xml.etree.ElementTree as ET

import pytest

from edgelab.edges import paper_rip, torn_edge
from edgelab.geometry import Point, path_from_points
from edgelab.grid import wavy_grid
from edgelab.params import OrganicEdgeParams, StripeParams, TornEdgeParams, WavyGridParams
from edgelab.stripes import SVG_NS, compose, to_element, to_markup
from edgelab.svg import (ExportError, PanelStyle, grid_document, path_document, save_document,
                         stripe_document, torn_panel_document)

NS = {"svg": SVG_NS}


def square():
    return path_from_points([Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)])


class TestPathDocument:

    def test_single_path(self):
        root = ET.fromstring(path_document(square(), 10, 10))
        assert root.get("viewBox") == "0 0 10 10"
        assert root.get("fill") == "none"
        paths = root.findall("svg:path", NS)
        assert len(paths) == 1
        assert paths[0].get("d") == "M 0 0 L 10 0 L 10 10 L 0 10 Z"
        assert paths[0].get("fill") == "white"

    def test_top_and_bottom_rips(self):
        params = OrganicEdgeParams(seed=4)
        root = ET.fromstring(path_document(list(paper_rip(params)), 1020, 100, fill="#fafafa"))
        paths = root.findall("svg:path", NS)
        assert len(paths) == 2
        assert all(p.get("fill") == "#fafafa" for p in paths)
        assert root.get("width") == "1020"


class TestTornPanel:

    def test_filters_and_path(self):
        params = TornEdgeParams(seed=7)
        path = torn_edge(params)
        root = ET.fromstring(torn_panel_document(path, params))
        filters = root.findall(".//svg:filter", NS)
        ids = [f.get("id") for f in filters]
        assert ids[0].startswith("paper-shadow-ripped-")
        assert ids[1].startswith("noise-ripped-")
        drawn = root.find("./svg:g/svg:path", NS)
        assert drawn.get("d") == path.to_svg()
        assert drawn.get("filter") == f"url(#{ids[1]})"

    def test_displacement_scales_with_roughness(self):
        params = TornEdgeParams(roughness=2, seed=1)
        text = torn_panel_document(torn_edge(params), params)
        assert 'scale="40"' in text
        assert 'scale="20"' in text

    def test_static_style(self):
        params = TornEdgeParams(seed=1)
        text = torn_panel_document(torn_edge(params), params, PanelStyle(animated=False))
        assert "<animate" not in text

    def test_seeded_panel_is_reproducible(self):
        params = TornEdgeParams(seed=11)
        path = torn_edge(params)
        assert torn_panel_document(path, params) == torn_panel_document(path, params)


class TestOtherDocuments:

    def test_grid_document(self):
        grid = wavy_grid(WavyGridParams())
        root = ET.fromstring(grid_document(grid, stroke="#000000", opacity=0.25))
        pattern = root.find(".//svg:pattern", NS)
        assert (pattern.get("width"), pattern.get("height")) == ("40", "40")
        group = pattern.find("svg:g", NS)
        assert group.get("stroke-opacity") == "0.25"
        assert len(group.findall("svg:path", NS)) == len(grid)
        assert root.find("svg:rect", NS).get("fill") == "url(#wavy-grid)"

    def test_stripe_document_has_size(self):
        root = ET.fromstring(stripe_document(compose(StripeParams(seed=1)), 200, 100))
        assert (root.get("width"), root.get("height")) == ("200", "100")
        assert root.get("viewBox") == "0 0 200 100"

    def test_stripe_document_is_the_sized_markup(self):
        desc = compose(StripeParams(seed=8))
        assert stripe_document(desc, 200, 100) == to_markup(desc, 200, 100, sized=True)
        assert to_element(desc).get("width") is None


class TestSave:

    def test_writes_utf8(self, tmp_path):
        target = save_document("<svg/>", tmp_path / "out", "edge.svg")
        assert target == tmp_path / "out" / "edge.svg"
        assert target.read_text(encoding="utf-8") == "<svg/>"

    def test_failure_raises_export_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        with pytest.raises(ExportError):
            save_document("<svg/>", blocker, "edge.svg")

    def test_export_error_is_an_os_error(self):
        assert issubclass(ExportError, OSError)
