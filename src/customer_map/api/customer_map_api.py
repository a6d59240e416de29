# ============================================================
# 📦 src/customer_map/api/customer_map_api.py
# ============================================================

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from customer_map.api.middleware.request_timing import RequestTimingMiddleware
from customer_map.api.routes import router as map_router
from customer_map.config.settings import load_settings
from customer_map.logs.logging_config import setup_logging

load_dotenv()
settings = load_settings()
setup_logging(settings.log_level)

# ============================================================
# 🚀 App
# ============================================================

app = FastAPI(
    title="Customer Map API",
    description="Clusterização adaptativa e marcadores do mapa de clientes (multi-tenant)",
    version="1.0.0",
    openapi_url="/openapi.json",
    docs_url="/docs",
)

# ============================================================
# 🌍 CORS
# ============================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ============================================================
# ⏱️ Middleware: tempo de resposta
# ============================================================

app.add_middleware(RequestTimingMiddleware)

# ============================================================
# 🔀 ROTAS
# ============================================================

app.include_router(
    map_router,
    prefix="/map",
    tags=["Mapa de clientes"]
)

# ============================================================
# 🩺 Health local
# ============================================================

@app.get("/")
def root():
    return {"status": "Customer Map API online 🚀"}

# ============================================================
# 🚀 Execução standalone (dev)
# ============================================================

if __name__ == "__main__":
    uvicorn.run(
        "customer_map.api.customer_map_api:app",
        host="0.0.0.0",
        port=settings.api_port,
        reload=True
    )
