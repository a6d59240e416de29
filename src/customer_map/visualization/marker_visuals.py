# =========================================================
# 📦 src/customer_map/visualization/marker_visuals.py
# =========================================================
#
# Descrição estrutural dos marcadores e popups. Nada aqui gera HTML:
# o adaptador do mapa (folium_surface) é quem transforma estes objetos
# em elementos visuais.

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from customer_map.domain.entities import Cluster
from customer_map.domain.status_styles import (
    status_color,
    status_badge_class,
    hex_to_rgb,
)


RADAR_SIZE_PX = 80
RADAR_CENTER_PX = 30
PIN_WIDTH_PX = 40
PIN_HEIGHT_PX = 50

# (diâmetro px, opacidade, atraso da animação em s), do anel externo ao interno
RADAR_RINGS = (
    (70, 0.3, 0.0),
    (60, 0.5, 0.3),
    (50, 0.7, 0.6),
)


@dataclass(frozen=True)
class RadarRing:
    diameter_px: int
    rgb: Tuple[int, int, int]
    opacity: float
    delay_s: float
    border_px: int = 4

    @property
    def rgba(self) -> str:
        r, g, b = self.rgb
        return f"rgba({r}, {g}, {b}, {self.opacity})"


@dataclass(frozen=True)
class PinVisual:
    """Gota (teardrop) de um cliente único."""
    color: str
    letter: str
    width_px: int = PIN_WIDTH_PX
    height_px: int = PIN_HEIGHT_PX
    kind: str = "pin"


@dataclass(frozen=True)
class RadarVisual:
    """Anéis concêntricos pulsantes + badge numérico central."""
    color: str
    count: int
    rings: Tuple[RadarRing, ...]
    size_px: int = RADAR_SIZE_PX
    center_px: int = RADAR_CENTER_PX
    kind: str = "radar"


MarkerVisual = Union[PinVisual, RadarVisual]


@dataclass(frozen=True)
class PopupMember:
    name: str
    status: Optional[str]
    badge_class: str
    billing_email: Optional[str] = None


@dataclass(frozen=True)
class PopupContent:
    title: str
    address: Optional[str] = None
    # cluster: lista de membros / cliente único: status + detalhes
    members: List[PopupMember] = field(default_factory=list)
    status: Optional[str] = None
    badge_class: Optional[str] = None
    billing_email: Optional[str] = None
    children_count: int = 0

    @property
    def is_cluster(self) -> bool:
        return bool(self.members)


# ---------------------------------------------------------
# 🏗️ Builders
# ---------------------------------------------------------
def _initial(name: str) -> str:
    name = (name or "").strip()
    return name[0].upper() if name else "?"


def build_marker_visual(cluster: Cluster) -> MarkerVisual:
    primary = cluster.primary
    color = status_color(primary.status)

    if cluster.size > 1:
        rgb = hex_to_rgb(color)
        rings = tuple(
            RadarRing(diameter_px=diameter, rgb=rgb, opacity=opacity, delay_s=delay)
            for diameter, opacity, delay in RADAR_RINGS
        )
        return RadarVisual(color=color, count=cluster.size, rings=rings)

    return PinVisual(color=color, letter=_initial(primary.name))


def build_popup_content(cluster: Cluster) -> PopupContent:
    primary = cluster.primary

    if cluster.size > 1:
        members = [
            PopupMember(
                name=member.name,
                status=member.status,
                badge_class=status_badge_class(member.status),
                billing_email=member.billing_email,
            )
            for member in cluster.members
        ]
        return PopupContent(
            title=f"{cluster.size} Customers",
            address=primary.location_address,
            members=members,
        )

    return PopupContent(
        title=primary.name,
        address=primary.location_address,
        status=primary.status,
        badge_class=status_badge_class(primary.status),
        billing_email=primary.billing_email,
        children_count=primary.children_count or 0,
    )
