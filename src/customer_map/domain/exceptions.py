# ============================================================
# 📦 src/customer_map/domain/exceptions.py
# ============================================================


class CustomerMapError(Exception):
    """Erro base do mapa de clientes (uso incorreto, nunca qualidade de dados)."""


class InvalidViewportError(CustomerMapError):
    pass


class UnknownMapEventError(CustomerMapError):
    pass
