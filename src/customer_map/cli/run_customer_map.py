# ============================================================
# 📦 src/customer_map/cli/run_customer_map.py
# ============================================================

import argparse
import webbrowser
from pathlib import Path

import numpy as np
import pandas as pd
from dotenv import load_dotenv
from loguru import logger

from customer_map.application.customer_map_view import CustomerMapView
from customer_map.config.settings import DEFAULT_ZOOM, load_settings
from customer_map.logs.logging_config import setup_logging
from customer_map.visualization.folium_surface import FoliumMapSurface


# ============================================================
# 1️⃣ LEITURA DOS CLIENTES
# ============================================================
def carregar_clientes(input_path: Path):
    """
    Lê clientes de um .json (lista de registros da API) ou .csv.
    Valores ausentes viram None.
    """
    input_path = Path(input_path)
    suffix = input_path.suffix.lower()

    if suffix == ".json":
        df = pd.read_json(input_path, orient="records", dtype=False)
    elif suffix == ".csv":
        df = pd.read_csv(input_path, dtype=str, keep_default_na=True)
    else:
        raise ValueError(f"Formato não suportado: {input_path.suffix} (use .json ou .csv)")

    df = df.astype(object).replace({np.nan: None})
    registros = df.to_dict(orient="records")
    logger.info(f"📦 {len(registros)} clientes carregados de {input_path}")
    return registros


# ============================================================
# 2️⃣ MAPA
# ============================================================
def gerar_mapa_clientes(registros, output_path: Path, args) -> Path:
    surface_kwargs = dict(
        zoom=args.zoom,
        container_size=(args.width, args.height),
        device_pixel_ratio=args.dpr,
    )
    if None not in (args.ne_lat, args.ne_lon, args.sw_lat, args.sw_lon):
        surface_kwargs["bounds"] = ((args.ne_lat, args.ne_lon), (args.sw_lat, args.sw_lon))
        surface_kwargs["center"] = ((args.ne_lat + args.sw_lat) / 2, (args.ne_lon + args.sw_lon) / 2)

    surface = FoliumMapSurface(**surface_kwargs)
    view = CustomerMapView(surface, registros)
    surface.load()

    result = view.last_result
    if result is None or not result.clusters:
        logger.warning("⚠️ Nenhum cliente com localização válida — mapa gerado sem marcadores.")

    return surface.save(output_path)


# ============================================================
# 3️⃣ MAIN CLI
# ============================================================
def main():
    load_dotenv()
    settings = load_settings()
    setup_logging(settings.log_level)

    parser = argparse.ArgumentParser(description="Gerar mapa HTML de clientes com clusterização adaptativa")
    parser.add_argument("--input", required=True, help="Arquivo .json ou .csv com os clientes")
    parser.add_argument("--output", help="Arquivo HTML de saída")
    parser.add_argument("--zoom", type=float, default=DEFAULT_ZOOM)
    parser.add_argument("--ne_lat", type=float)
    parser.add_argument("--ne_lon", type=float)
    parser.add_argument("--sw_lat", type=float)
    parser.add_argument("--sw_lon", type=float)
    parser.add_argument("--width", type=float, default=1024, help="Largura do container (px)")
    parser.add_argument("--height", type=float, default=768, help="Altura do container (px)")
    parser.add_argument("--dpr", type=float, default=1.0, help="Device pixel ratio")
    parser.add_argument("--modo_interativo", action="store_true", help="Abre o mapa no navegador (somente fora do Docker)")
    args = parser.parse_args()

    input_path = Path(args.input)
    output_path = Path(args.output) if args.output else Path(settings.output_dir) / f"{input_path.stem}_map.html"

    logger.info(f"🗺️ Gerando mapa de clientes | input={input_path} | zoom={args.zoom}")

    registros = carregar_clientes(input_path)
    output_path = gerar_mapa_clientes(registros, output_path, args)

    if args.modo_interativo:
        webbrowser.open(output_path.resolve().as_uri())


if __name__ == "__main__":
    main()
