# ============================================================
# 📦 src/customer_map/api/schemas.py
# ============================================================

from pydantic import BaseModel, Field
from typing import Any, List, Optional, Union

from customer_map.domain.entities import Viewport


class CustomerSchema(BaseModel):
    id: Union[int, str]
    name: str = ""
    # status fora do padrão (número, lista) vira marcador cinza, não erro 422
    status: Optional[Any] = None
    # backend devolve as coordenadas do PostGIS como string
    latitude: Optional[Union[float, str]] = None
    longitude: Optional[Union[float, str]] = None
    billing_email: Optional[str] = None
    location_address: Optional[str] = None
    children_count: Optional[int] = 0


class ViewportSchema(BaseModel):
    zoom: float
    ne_lat: float
    ne_lon: float
    sw_lat: float
    sw_lon: float
    width_px: float
    height_px: float
    device_pixel_ratio: float = 1.0

    def to_viewport(self) -> Viewport:
        return Viewport(
            zoom=self.zoom,
            ne=(self.ne_lat, self.ne_lon),
            sw=(self.sw_lat, self.sw_lon),
            width_px=self.width_px,
            height_px=self.height_px,
            device_pixel_ratio=self.device_pixel_ratio,
        )


class ClusterRequest(BaseModel):
    customers: List[CustomerSchema] = Field(default_factory=list)
    viewport: Optional[ViewportSchema] = None


class ClusterOut(BaseModel):
    size: int
    primary_id: str
    lat: float
    lon: float
    color: str
    member_ids: List[str]


class ClusterResponse(BaseModel):
    distance_km: float
    total_customers: int
    mappable_customers: int
    clusters: List[ClusterOut]
