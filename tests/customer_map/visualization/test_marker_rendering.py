# tests/customer_map/visualization/test_marker_rendering.py

import pytest

from customer_map.domain.entities import Cluster
from customer_map.domain.exceptions import UnknownMapEventError
from customer_map.visualization.map_surface import MapSurface, MarkerLayer
from customer_map.visualization.marker_rendering import render_clusters
from customer_map.visualization.marker_visuals import PinVisual, RadarVisual

from conftest import make_point


class RecordingSurface(MapSurface):
    """Superfície em memória: guarda o que foi desenhado."""

    def __init__(self, loaded=True):
        super().__init__()
        self.loaded = loaded
        self.markers = {}
        self.removed = []
        self._next = 0

    def is_loaded(self):
        return self.loaded

    def get_zoom(self):
        return 4.0

    def get_bounds(self):
        return (40.1, -99.9), (40.0, -100.1)

    def get_container_size(self):
        return 800, 600

    def add_marker(self, visual, lat, lon, popup=None, on_click=None, key=None):
        self._next += 1
        self.markers[self._next] = dict(visual=visual, lat=lat, lon=lon, popup=popup, on_click=on_click, key=key)
        return self._next

    def remove_marker(self, handle):
        self.removed.append(handle)
        del self.markers[handle]


def _clusters():
    a = make_point("a", 40.0, -100.0, name="Alpha")
    b = make_point("b", 40.0, -100.0, name="Beta")
    c = make_point("c", 41.0, -101.0, name="Gamma", status="suspended")
    return [Cluster(members=[a, b]), Cluster(members=[c])]


def test_one_marker_per_cluster_at_primary_position():
    surface = RecordingSurface()
    layer = render_clusters(_clusters(), surface, MarkerLayer())

    assert len(layer) == 2
    drawn = [surface.markers[h] for h in layer.handles]
    assert isinstance(drawn[0]["visual"], RadarVisual)
    assert isinstance(drawn[1]["visual"], PinVisual)
    assert (drawn[1]["lat"], drawn[1]["lon"]) == (41.0, -101.0)
    assert drawn[0]["key"] == "a"


def test_previous_markers_removed_before_new_pass():
    surface = RecordingSurface()
    layer = MarkerLayer()

    render_clusters(_clusters(), surface, layer)
    first_handles = list(layer.handles)
    render_clusters(_clusters(), surface, layer)

    assert surface.removed == first_handles
    assert len(surface.markers) == 2


def test_click_selects_primary_customer():
    surface = RecordingSurface()
    selected = []

    layer = render_clusters(_clusters(), surface, MarkerLayer(), on_select=selected.append)
    surface.markers[layer.handles[0]]["on_click"]()

    assert [p.id for p in selected] == ["a"]


def test_no_callback_means_no_click_handler():
    surface = RecordingSurface()
    layer = render_clusters(_clusters(), surface, MarkerLayer())

    assert surface.markers[layer.handles[0]]["on_click"] is None


def test_unloaded_surface_skips_rendering():
    surface = RecordingSurface(loaded=False)
    layer = render_clusters(_clusters(), surface, MarkerLayer())

    assert len(layer) == 0
    assert surface.markers == {}


def test_empty_clusters_clear_the_map():
    surface = RecordingSurface()
    layer = render_clusters(_clusters(), surface, MarkerLayer())

    render_clusters([], surface, layer)

    assert surface.markers == {}
    assert len(layer) == 0


def test_surface_viewport_from_state():
    vp = RecordingSurface().get_viewport()

    assert vp.zoom == 4.0
    assert vp.ne == (40.1, -99.9)
    assert vp.device_pixel_ratio == 1.0


def test_unloaded_surface_has_no_viewport():
    assert RecordingSurface(loaded=False).get_viewport() is None


def test_unknown_event_is_rejected():
    surface = RecordingSurface()

    with pytest.raises(UnknownMapEventError):
        surface.on("dragstart", lambda: None)
