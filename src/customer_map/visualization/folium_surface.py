# =========================================================
# 📦 src/customer_map/visualization/folium_surface.py
# =========================================================

import itertools
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Optional

import folium
from folium import plugins
from branca.element import Template, MacroElement
from jinja2 import Environment
from loguru import logger

from customer_map.config.settings import (
    DEFAULT_CENTER,
    DEFAULT_ZOOM,
    MAX_BOUNDS,
    MapSettings,
    load_settings,
)
from customer_map.domain.exceptions import InvalidViewportError
from customer_map.domain.status_styles import STATUS_COLORS, STATUS_BADGE_CLASSES
from customer_map.visualization.map_surface import MapSurface
from customer_map.visualization.marker_visuals import PinVisual, PopupContent, RadarVisual


# =========================================================
# 1️⃣ TEMPLATES (autoescape: nomes/e-mails vêm do cliente)
# =========================================================
_env = Environment(autoescape=True, trim_blocks=True, lstrip_blocks=True)

PIN_TEMPLATE = _env.from_string("""
<div class="teardrop-marker" style="position: relative; width: {{ v.width_px }}px; height: {{ v.height_px }}px;
     cursor: pointer; filter: drop-shadow(0 2px 4px rgba(0,0,0,0.3));">
  <div style="position: absolute; top: 0; left: 50%; width: 30px; height: 30px;
       background-color: {{ v.color }}; border-radius: 50% 50% 50% 0;
       transform: translateX(-50%) rotate(-45deg); border: 2px solid white;"></div>
  <div style="position: absolute; top: 8px; left: 50%; transform: translateX(-50%);
       width: 20px; height: 20px; background-color: white; border-radius: 50%;
       display: flex; align-items: center; justify-content: center;
       font-size: 10px; color: {{ v.color }}; font-weight: bold;">{{ v.letter }}</div>
  <div style="position: absolute; bottom: 0; left: 50%; transform: translateX(-50%);
       width: 0; height: 0; border-left: 6px solid transparent; border-right: 6px solid transparent;
       border-top: 12px solid {{ v.color }};"></div>
</div>
""")

RADAR_TEMPLATE = _env.from_string("""
<div class="radar-marker" style="position: relative; width: {{ v.size_px }}px; height: {{ v.size_px }}px; cursor: pointer;">
{% for ring in v.rings %}
  <div class="radar-ring radar-ring-{{ loop.index }}" style="position: absolute; top: 50%; left: 50%;
       width: {{ ring.diameter_px }}px; height: {{ ring.diameter_px }}px;
       border: {{ ring.border_px }}px solid {{ ring.rgba }}; border-radius: 50%;
       transform: translate(-50%, -50%); animation: radarPulse 2s infinite {{ ring.delay_s }}s;"></div>
{% endfor %}
  <div class="radar-center" style="position: absolute; top: 50%; left: 50%;
       width: {{ v.center_px }}px; height: {{ v.center_px }}px; background-color: {{ v.color }};
       border: 4px solid white; border-radius: 50%; transform: translate(-50%, -50%);
       display: flex; align-items: center; justify-content: center;
       font-size: 12px; color: white; font-weight: bold; box-shadow: 0 2px 4px rgba(0,0,0,0.3);">{{ v.count }}</div>
</div>
""")

POPUP_TEMPLATE = _env.from_string("""
<div class="customer-popup" style="padding: 12px; min-width: 200px;">
  <h3 style="font-weight: 600; margin: 0 0 4px 0;">{{ p.title }}</h3>
{% if p.address %}
  <p class="popup-muted" style="margin: 0 0 8px 0;">{{ p.address }}</p>
{% endif %}
{% if p.is_cluster %}
  <div style="max-height: 160px; overflow-y: auto;">
{% for m in p.members %}
    <div class="popup-member">
      <span style="font-weight: 500;">{{ m.name }}</span>
      <span class="status-badge {{ m.badge_class }}">{{ m.status or '' }}</span>
{% if m.billing_email %}
      <p class="popup-muted">{{ m.billing_email }}</p>
{% endif %}
    </div>
{% endfor %}
  </div>
{% else %}
  <span class="status-badge {{ p.badge_class }}">{{ p.status or '' }}</span>
{% if p.billing_email %}
  <p class="popup-muted">{{ p.billing_email }}</p>
{% endif %}
{% if p.children_count > 0 %}
  <p class="popup-muted">{{ p.children_count }} child customers</p>
{% endif %}
{% endif %}
</div>
""")

MAP_CSS = """
<style>
@keyframes radarPulse {
    0%   { transform: translate(-50%, -50%) scale(0.8); opacity: 1; }
    50%  { transform: translate(-50%, -50%) scale(1.2); opacity: 0.5; }
    100% { transform: translate(-50%, -50%) scale(1.5); opacity: 0; }
}
.radar-marker:hover .radar-ring { animation-duration: 1s; }
.radar-marker:hover .radar-center { transform: translate(-50%, -50%) scale(1.1); transition: transform 0.2s ease; }
.status-badge { display: inline-block; padding: 2px 8px; border-radius: 9999px; font-size: 11px; font-weight: 500; }
.popup-member { border-bottom: 1px solid #f3f4f6; padding-bottom: 6px; margin-bottom: 6px; }
.popup-muted { font-size: 11px; color: #6b7280; margin: 2px 0 0 0; }
.bg-green-100 { background: #dcfce7; } .text-green-800 { color: #166534; }
.bg-gray-100 { background: #f3f4f6; } .text-gray-800 { color: #1f2937; }
.bg-yellow-100 { background: #fef9c3; } .text-yellow-800 { color: #854d0e; }
.bg-red-100 { background: #fee2e2; } .text-red-800 { color: #991b1b; }
</style>
"""

LEGEND_TEMPLATE = """
{% macro html(this, kwargs) %}
<div style="
    position: fixed; bottom: 40px; left: 40px; z-index: 9999;
    background-color: white; padding: 12px 16px;
    border-radius: 8px; box-shadow: 0 4px 6px rgba(0,0,0,0.15);
    font-size: 13px;">
    <b>Customer Status</b>
    <ul style="list-style: none; padding: 0; margin: 8px 0 0 0;">
    {% for label, color in this.items %}
        <li style="margin-bottom: 4px;">
            <span style="background:{{ color }};width:12px;height:12px;display:inline-block;
            border-radius:50%;margin-right:6px;border:2px solid white;
            box-shadow: 0 0 0 1px {{ color }};"></span>{{ label }}
        </li>
    {% endfor %}
    </ul>
</div>
{% endmacro %}
"""

CLICK_BRIDGE_TEMPLATE = """
{% macro script(this, kwargs) %}
{{ this._parent.get_name() }}.on('click', function() {
    window.parent.postMessage(
        {type: 'customer-map:select', customerId: {{ this.customer_id|tojson }}}, '*'
    );
});
{% endmacro %}
"""


# =========================================================
# 2️⃣ ELEMENTOS AUXILIARES
# =========================================================
class StatusLegend(MacroElement):
    def __init__(self):
        super().__init__()
        self._name = "StatusLegend"
        self.items = [(status.capitalize(), color) for status, color in STATUS_COLORS.items()]
        self._template = Template(LEGEND_TEMPLATE)


class ClickBridge(MacroElement):
    """Repassa o clique do marcador para a página hospedeira (iframe)."""

    def __init__(self, customer_id):
        super().__init__()
        self._name = "ClickBridge"
        self.customer_id = customer_id
        self._template = Template(CLICK_BRIDGE_TEMPLATE)


def render_visual_html(visual) -> str:
    if isinstance(visual, RadarVisual):
        return RADAR_TEMPLATE.render(v=visual)
    if isinstance(visual, PinVisual):
        return PIN_TEMPLATE.render(v=visual)
    raise TypeError(f"Visual de marcador não suportado: {type(visual).__name__}")


def render_popup_html(popup: PopupContent) -> str:
    return POPUP_TEMPLATE.render(p=popup)


def _div_icon(visual) -> folium.DivIcon:
    if isinstance(visual, RadarVisual):
        size = (visual.size_px, visual.size_px)
    else:
        size = (visual.width_px, visual.height_px)
    return folium.DivIcon(
        html=render_visual_html(visual),
        icon_size=size,
        icon_anchor=(size[0] // 2, size[1] // 2),
        class_name="customer-marker",
    )


# =========================================================
# 3️⃣ SUPERFÍCIE FOLIUM
# =========================================================
@dataclass(frozen=True, eq=False)
class FoliumMarker:
    """Handle de um marcador: o elemento folium só é criado na exportação."""
    name: str
    visual: object
    lat: float
    lon: float
    popup: Optional[PopupContent] = None
    key: Optional[str] = None
    clickable: bool = False


class FoliumMapSurface(MapSurface):
    """
    Mapa folium com estado de viewport mantido em Python.
    set_view / rotate / pitch atualizam o estado e disparam os eventos
    correspondentes, como o mapa interativo faria ao fim de cada gesto.
    O folium.Map é montado do zero a cada exportação, a partir dos
    marcadores vivos e do viewport atual.
    """

    def __init__(
        self,
        settings: Optional[MapSettings] = None,
        center=DEFAULT_CENTER,
        zoom: float = DEFAULT_ZOOM,
        bounds=None,
        container_size=(1024, 768),
        device_pixel_ratio: float = 1.0,
    ):
        super().__init__()
        self.settings = settings or load_settings()

        (sw_lat, sw_lon), (ne_lat, ne_lon) = MAX_BOUNDS
        self._ne, self._sw = bounds or ((ne_lat, ne_lon), (sw_lat, sw_lon))
        self._center = tuple(center)
        self._zoom = float(zoom)
        self._container = self._check_container(container_size)
        self._dpr = device_pixel_ratio or 1.0
        self._bearing = 0.0
        self._pitch = 0.0
        self._loaded = False

        self._live: Dict[str, FoliumMarker] = {}
        self._click_handlers: Dict[str, Callable[[], None]] = {}
        self._seq = itertools.count(1)

    @staticmethod
    def _check_container(size):
        width, height = size
        if width < 0 or height < 0:
            raise InvalidViewportError(f"❌ Container com dimensões inválidas: {width}x{height}")
        return (width, height)

    # -----------------------------------------------------
    # 🔭 Estado
    # -----------------------------------------------------
    def is_loaded(self) -> bool:
        return self._loaded

    def get_zoom(self) -> float:
        return self._zoom

    def get_bounds(self):
        return self._ne, self._sw

    def get_container_size(self):
        return self._container

    def get_device_pixel_ratio(self) -> float:
        return self._dpr

    @property
    def bearing(self) -> float:
        return self._bearing

    @property
    def pitch_deg(self) -> float:
        return self._pitch

    @property
    def marker_count(self) -> int:
        return len(self._live)

    # -----------------------------------------------------
    # 🎬 Gestos
    # -----------------------------------------------------
    def load(self):
        if self._loaded:
            return
        self._loaded = True
        logger.info("🗺️ Mapa carregado")
        self.fire("load")

    def set_view(self, zoom=None, ne=None, sw=None, container_size=None, device_pixel_ratio=None):
        zoom_changed = zoom is not None and float(zoom) != self._zoom

        if zoom is not None:
            self._zoom = float(zoom)
        if ne is not None:
            self._ne = tuple(ne)
        if sw is not None:
            self._sw = tuple(sw)
        if container_size is not None:
            self._container = self._check_container(container_size)
        if device_pixel_ratio is not None:
            self._dpr = device_pixel_ratio or 1.0

        if zoom_changed:
            self.fire("zoomend")
        self.fire("moveend")

    def rotate(self, bearing: float):
        self._bearing = float(bearing) % 360
        self.fire("rotateend")

    def pitch(self, pitch: float):
        self._pitch = float(pitch)
        self.fire("pitchend")

    # -----------------------------------------------------
    # 📍 Marcadores
    # -----------------------------------------------------
    def add_marker(self, visual, lat, lon, popup=None, on_click=None, key=None):
        handle = FoliumMarker(
            name=f"customer_marker_{next(self._seq)}",
            visual=visual,
            lat=lat,
            lon=lon,
            popup=popup,
            key=key,
            clickable=on_click is not None,
        )
        self._live[handle.name] = handle
        if on_click is not None:
            self._click_handlers[handle.name] = on_click
        return handle

    def remove_marker(self, handle):
        self._live.pop(handle.name, None)
        self._click_handlers.pop(handle.name, None)

    def click(self, handle):
        """Dispara o clique de um marcador (mesmo efeito do clique no navegador)."""
        handler = self._click_handlers.get(handle.name)
        if handler is not None:
            handler()

    # -----------------------------------------------------
    # 💾 Exportação
    # -----------------------------------------------------
    def _folium_marker(self, handle: FoliumMarker) -> folium.Marker:
        marker = folium.Marker(
            location=[handle.lat, handle.lon],
            icon=_div_icon(handle.visual),
            popup=folium.Popup(render_popup_html(handle.popup), max_width=320) if handle.popup else None,
        )
        if handle.clickable:
            marker.add_child(ClickBridge(handle.key))
        return marker

    def build_map(self) -> folium.Map:
        """folium.Map novo: chrome fixo, um grupo 'Customers' e um único fitBounds."""
        (sw_lat, sw_lon), (ne_lat, ne_lon) = MAX_BOUNDS
        mapa = folium.Map(
            location=list(self._center),
            zoom_start=self._zoom,
            tiles=self.settings.tiles,
            min_lat=sw_lat,
            max_lat=ne_lat,
            min_lon=sw_lon,
            max_lon=ne_lon,
            max_bounds=True,
        )
        mapa.get_root().header.add_child(folium.Element(MAP_CSS))
        mapa.get_root().add_child(StatusLegend())
        plugins.Fullscreen(
            position="topright",
            title="Enter fullscreen",
            title_cancel="Exit fullscreen",
        ).add_to(mapa)

        grupo = folium.FeatureGroup(name="Customers").add_to(mapa)
        for handle in self._live.values():
            self._folium_marker(handle).add_to(grupo)

        mapa.fit_bounds([list(self._sw), list(self._ne)])
        return mapa

    def to_html(self) -> str:
        return self.build_map().get_root().render()

    def save(self, output_path: Path) -> Path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        if output_path.exists():
            output_path.unlink()

        self.build_map().save(str(output_path))
        logger.success(f"✅ Mapa de clientes salvo em {output_path} ({len(self._live)} marcadores)")
        return output_path
