# tests/customer_map/application/test_customer_map_view.py

from customer_map.application.cluster_use_case import compute_clusters
from customer_map.application.customer_map_view import CustomerMapView
from customer_map.config.settings import MapSettings
from customer_map.domain.entities import Viewport
from customer_map.visualization.folium_surface import FoliumMapSurface

from conftest import KM_IN_LAT_DEG

SETTINGS = MapSettings()

REGION = dict(ne=(41.0, -99.0), sw=(39.0, -101.0))
CITY = dict(ne=(40.05, -99.95), sw=(39.95, -100.05))


def _records():
    return [
        {"id": 1, "name": "Alpha Water", "status": "active", "latitude": "40.0", "longitude": "-100.0"},
        {"id": 2, "name": "Beta Water", "status": "prospect",
         "latitude": str(40.0 + 5 * KM_IN_LAT_DEG), "longitude": "-100.0"},
        {"id": 3, "name": "No Address", "status": "inactive", "latitude": None, "longitude": None},
    ]


def _surface(zoom=6, bounds=REGION):
    return FoliumMapSurface(
        settings=SETTINGS,
        zoom=zoom,
        bounds=(bounds["ne"], bounds["sw"]),
        container_size=(1024, 768),
    )


def test_nothing_drawn_before_load():
    surface = _surface()
    view = CustomerMapView(surface, _records(), settings=SETTINGS)

    assert surface.marker_count == 0
    assert view.last_result is None


def test_load_triggers_first_pass():
    surface = _surface()
    view = CustomerMapView(surface, _records(), settings=SETTINGS)

    surface.load()

    assert view.last_result.total_customers == 3
    assert view.last_result.mappable_customers == 2
    assert [c.size for c in view.last_result.clusters] == [2]
    assert surface.marker_count == 1


def test_view_renders_immediately_on_loaded_surface():
    surface = _surface()
    surface.load()

    view = CustomerMapView(surface, _records(), settings=SETTINGS)

    assert view.last_result is not None
    assert surface.marker_count == 1


def test_zooming_in_splits_cluster_without_leaking_markers():
    surface = _surface()
    view = CustomerMapView(surface, _records(), settings=SETTINGS)
    surface.load()

    surface.set_view(zoom=12, **CITY)

    assert [c.size for c in view.last_result.clusters] == [1, 1]
    assert surface.marker_count == 2
    assert len(view.layer) == 2


def test_every_trigger_recomputes_distance():
    surface = _surface()
    view = CustomerMapView(surface, _records(), settings=SETTINGS)
    surface.load()
    wide = view.last_result.distance_km

    surface.set_view(zoom=12, **CITY)
    narrow = view.last_result.distance_km

    surface.rotate(30)
    assert view.last_result.distance_km == narrow
    assert narrow < wide


def test_set_customers_rerenders_and_clears():
    surface = _surface()
    view = CustomerMapView(surface, _records(), settings=SETTINGS)
    surface.load()

    view.set_customers([])

    assert surface.marker_count == 0
    assert view.last_result.clusters == []


def test_null_island_customer_not_drawn():
    surface = _surface()
    surface.load()
    view = CustomerMapView(
        surface,
        [{"id": 1, "name": "Zero", "status": "active", "latitude": 0, "longitude": 0}],
        settings=SETTINGS,
    )

    assert view.last_result.clusters == []
    assert surface.marker_count == 0


def test_marker_click_reaches_on_select():
    surface = _surface()
    selected = []
    view = CustomerMapView(surface, _records(), on_select=selected.append, settings=SETTINGS)
    surface.load()

    surface.click(view.layer.handles[0])

    assert [p.id for p in selected] == ["1"]


def test_compute_clusters_without_viewport_uses_fallback():
    result = compute_clusters(_records(), None, SETTINGS)

    assert result.distance_km == 1.0
    assert [c.size for c in result.clusters] == [1, 1]


def test_compute_clusters_is_repeatable():
    viewport = Viewport(zoom=6, ne=REGION["ne"], sw=REGION["sw"], width_px=1024, height_px=768)

    first = compute_clusters(_records(), viewport, SETTINGS)
    second = compute_clusters(_records(), viewport, SETTINGS)

    assert first.distance_km == second.distance_km
    assert [[p.id for p in c.members] for c in first.clusters] == \
        [[p.id for p in c.members] for c in second.clusters]
