# =========================================================
# 📦 src/customer_map/visualization/map_surface.py
# =========================================================

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from loguru import logger

from customer_map.domain.entities import Viewport
from customer_map.domain.exceptions import UnknownMapEventError


MAP_EVENTS = ("load", "moveend", "zoomend", "rotateend", "pitchend")


class MapSurface(ABC):
    """
    Contrato mínimo do provedor de mapa consumido pelo renderizador:
    leitura do viewport, inclusão/remoção de marcadores e eventos.
    """

    def __init__(self):
        self._handlers: Dict[str, List[Callable[[], None]]] = {e: [] for e in MAP_EVENTS}

    # -----------------------------------------------------
    # 📡 Eventos
    # -----------------------------------------------------
    def on(self, event: str, handler: Callable[[], None]):
        if event not in self._handlers:
            raise UnknownMapEventError(f"❌ Evento de mapa desconhecido: {event}")
        self._handlers[event].append(handler)

    def fire(self, event: str):
        if event not in self._handlers:
            raise UnknownMapEventError(f"❌ Evento de mapa desconhecido: {event}")
        logger.debug(f"📡 Evento '{event}' ({len(self._handlers[event])} handlers)")
        for handler in list(self._handlers[event]):
            handler()

    # -----------------------------------------------------
    # 🔭 Viewport
    # -----------------------------------------------------
    @abstractmethod
    def is_loaded(self) -> bool: ...

    @abstractmethod
    def get_zoom(self) -> float: ...

    @abstractmethod
    def get_bounds(self) -> Tuple[Tuple[float, float], Tuple[float, float]]:
        """((ne_lat, ne_lon), (sw_lat, sw_lon))"""

    @abstractmethod
    def get_container_size(self) -> Tuple[float, float]:
        """(largura_px, altura_px)"""

    def get_device_pixel_ratio(self) -> float:
        return 1.0

    def get_viewport(self) -> Optional[Viewport]:
        if not self.is_loaded():
            return None
        ne, sw = self.get_bounds()
        width, height = self.get_container_size()
        return Viewport(
            zoom=self.get_zoom(),
            ne=ne,
            sw=sw,
            width_px=width,
            height_px=height,
            device_pixel_ratio=self.get_device_pixel_ratio() or 1.0,
        )

    # -----------------------------------------------------
    # 📍 Marcadores
    # -----------------------------------------------------
    @abstractmethod
    def add_marker(self, visual, lat: float, lon: float, popup=None,
                   on_click: Optional[Callable[[], None]] = None, key=None) -> Any:
        """
        Posiciona o visual em (lat, lon) e devolve um handle removível.
        key identifica o cliente primário para o lado do navegador.
        """

    @abstractmethod
    def remove_marker(self, handle: Any): ...


@dataclass
class MarkerLayer:
    """
    Handles dos marcadores desenhados no passe atual.
    Pertence à view e é substituído por inteiro a cada novo passe.
    """
    handles: List[Any] = field(default_factory=list)

    def clear(self, surface: MapSurface) -> int:
        removed = len(self.handles)
        for handle in self.handles:
            surface.remove_marker(handle)
        self.handles = []
        return removed

    def __len__(self):
        return len(self.handles)
