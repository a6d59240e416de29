# ============================================================
# 📦 src/customer_map/domain/status_styles.py
# ============================================================

import re

_HEX_RE = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)

STATUS_COLORS = {
    "active": "#0C88F0",
    "inactive": "#6B7280",
    "prospect": "#F59E0B",
    "suspended": "#EF4444",
}
DEFAULT_STATUS_COLOR = "#6B7280"

STATUS_BADGE_CLASSES = {
    "active": "bg-green-100 text-green-800",
    "inactive": "bg-gray-100 text-gray-800",
    "prospect": "bg-yellow-100 text-yellow-800",
    "suspended": "bg-red-100 text-red-800",
}
DEFAULT_BADGE_CLASS = "bg-gray-100 text-gray-800"

# cinza neutro
DEFAULT_RGB = (107, 114, 128)


def status_color(status) -> str:
    """Cor do marcador; status ausente, desconhecido ou que não seja texto → cinza."""
    if not isinstance(status, str):
        return DEFAULT_STATUS_COLOR
    return STATUS_COLORS.get(status, DEFAULT_STATUS_COLOR)


def status_badge_class(status) -> str:
    if not isinstance(status, str):
        return DEFAULT_BADGE_CLASS
    return STATUS_BADGE_CLASSES.get(status, DEFAULT_BADGE_CLASS)


def hex_to_rgb(hex_color: str):
    """'#RRGGBB' (ou sem '#') → (r, g, b). Valor inválido cai no cinza padrão."""
    if not isinstance(hex_color, str):
        return DEFAULT_RGB
    match = _HEX_RE.match(hex_color)
    if not match:
        return DEFAULT_RGB
    return tuple(int(part, 16) for part in match.groups())
