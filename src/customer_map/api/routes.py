# ============================================================
# 📦 src/customer_map/api/routes.py
# ============================================================

from fastapi import APIRouter, HTTPException
from fastapi.responses import HTMLResponse
from loguru import logger

from customer_map.api.schemas import ClusterRequest, ClusterResponse, ClusterOut
from customer_map.application.cluster_use_case import compute_clusters
from customer_map.application.customer_map_view import CustomerMapView
from customer_map.domain.exceptions import CustomerMapError
from customer_map.domain.status_styles import status_color
from customer_map.visualization.folium_surface import FoliumMapSurface

router = APIRouter()


def _records(body: ClusterRequest):
    return [c.model_dump() for c in body.customers]


# ============================================================
# 🧠 Health
# ============================================================
@router.get("/health", tags=["Status"])
def health():
    return {"status": "ok", "message": "Customer map API saudável 🗺️"}


# ============================================================
# 🧩 Clusters para o viewport informado
# ============================================================
@router.post("/clusters", response_model=ClusterResponse)
def clusters(body: ClusterRequest):
    try:
        viewport = body.viewport.to_viewport() if body.viewport else None
        result = compute_clusters(_records(body), viewport)
    except CustomerMapError as e:
        logger.warning(f"⚠️ Requisição de clusters rejeitada: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    return ClusterResponse(
        distance_km=result.distance_km,
        total_customers=result.total_customers,
        mappable_customers=result.mappable_customers,
        clusters=[
            ClusterOut(
                size=c.size,
                primary_id=c.primary.id,
                lat=c.primary.lat,
                lon=c.primary.lon,
                color=status_color(c.primary.status),
                member_ids=[m.id for m in c.members],
            )
            for c in result.clusters
        ],
    )


# ============================================================
# 🗺️ Mapa HTML renderizado
# ============================================================
@router.post("/render", response_class=HTMLResponse)
def render(body: ClusterRequest):
    try:
        surface_kwargs = {}
        if body.viewport:
            vp = body.viewport
            surface_kwargs = dict(
                center=((vp.ne_lat + vp.sw_lat) / 2, (vp.ne_lon + vp.sw_lon) / 2),
                zoom=vp.zoom,
                bounds=((vp.ne_lat, vp.ne_lon), (vp.sw_lat, vp.sw_lon)),
                container_size=(vp.width_px, vp.height_px),
                device_pixel_ratio=vp.device_pixel_ratio,
            )
        surface = FoliumMapSurface(**surface_kwargs)
        CustomerMapView(surface, _records(body))
        surface.load()
    except CustomerMapError as e:
        logger.warning(f"⚠️ Renderização rejeitada: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    return HTMLResponse(content=surface.to_html())
