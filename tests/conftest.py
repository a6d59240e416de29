# tests/conftest.py

from customer_map.domain.entities import CustomerPoint

# graus de latitude por km ao longo de um meridiano (R = 6371)
KM_IN_LAT_DEG = 1 / 111.19492664455873


def make_point(id, lat, lon, status="active", name=None, **extra):
    return CustomerPoint(
        id=str(id),
        name=name if name is not None else f"Customer {id}",
        status=status,
        lat=lat,
        lon=lon,
        **extra,
    )
