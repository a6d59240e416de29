# ============================================================
# 📦 src/customer_map/config/settings.py
# ============================================================

import os
from dataclasses import dataclass


# =====================================================
# ⚙️ Defaults do mapa de clientes
# =====================================================
DEFAULT_CENTER = (40.0, -100.0)          # (lat, lon)
DEFAULT_ZOOM = 4
MAX_BOUNDS = [[20.0, -130.0], [50.0, -65.0]]  # [[sw_lat, sw_lon], [ne_lat, ne_lon]]


@dataclass(frozen=True)
class MapSettings:
    icon_size_px: int = 80
    fallback_distance_km: float = 1.0
    min_distance_km: float = 0.01
    max_distance_km: float = 50.0
    base_zoom: float = 4.0
    tiles: str = "CartoDB positron"
    output_dir: str = "output/maps"
    api_port: int = 8010
    log_level: str = "INFO"


def load_settings() -> MapSettings:
    """
    Lê as variáveis de ambiente (CUSTOMER_MAP_*) e devolve um MapSettings imutável.
    O .env é carregado pelos entry points (API / CLI), não aqui.
    """
    return MapSettings(
        icon_size_px=int(os.getenv("CUSTOMER_MAP_ICON_SIZE_PX", "80")),
        fallback_distance_km=float(os.getenv("CUSTOMER_MAP_FALLBACK_DISTANCE_KM", "1.0")),
        min_distance_km=float(os.getenv("CUSTOMER_MAP_MIN_DISTANCE_KM", "0.01")),
        max_distance_km=float(os.getenv("CUSTOMER_MAP_MAX_DISTANCE_KM", "50.0")),
        base_zoom=float(os.getenv("CUSTOMER_MAP_BASE_ZOOM", "4")),
        tiles=os.getenv("CUSTOMER_MAP_TILES", "CartoDB positron"),
        output_dir=os.getenv("CUSTOMER_MAP_OUTPUT_DIR", "output/maps"),
        api_port=int(os.getenv("CUSTOMER_MAP_API_PORT", "8010")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
