"""
CLI: ejecuta los jobs de sincronización SEFIL sin pasar por HTTP.

Uso recomendado:
  - Ejecutar como job (cron/systemd timer), una instancia por job a la vez.

Variables de entorno: las mismas del API (DATABASE_URL, SEFIL_*_URL, ...).

Ejecución:
  python scripts/run_sync.py credits
  python scripts/run_sync.py pays
  python scripts/run_sync.py credits --seed 42
"""

from __future__ import annotations

import argparse
import asyncio
import random
import sys
from pathlib import Path

from loguru import logger
from dotenv import load_dotenv

# Permite ejecutar este script desde cualquier cwd sin configurar PYTHONPATH.
# La carpeta "api" contiene el paquete raíz `app/`.
_API_ROOT = Path(__file__).resolve().parents[1]
if str(_API_ROOT) not in sys.path:
    sys.path.insert(0, str(_API_ROOT))

load_dotenv(_API_ROOT / ".env", override=False)
load_dotenv(_API_ROOT.parent / ".env", override=False)

from app.application.use_cases.sync_use_cases import CreditSyncUseCases, PaymentSyncUseCases
from app.core.events import configure_logging
from app.infrastructure.database.session import AsyncSessionLocal, close_db
from app.infrastructure.external.sefil.sefil_client import SefilClient


async def _run(job: str, seed: int | None) -> bool:
    client = SefilClient.from_settings()
    try:
        async with AsyncSessionLocal() as session:
            if job == "credits":
                rng = random.Random(seed) if seed is not None else None
                result = await CreditSyncUseCases(session, client, rng=rng).exec_sync()
                logger.info(f"Resultado: {result.model_dump(exclude_none=True)}")
                return result.is_success

            result = await PaymentSyncUseCases(session, client).sync_payments()
            logger.info(f"Resultado: {result.model_dump(exclude_none=True)}")
            return result.success
    finally:
        await close_db()


def main() -> int:
    parser = argparse.ArgumentParser(description="Sincronización SEFIL -> base local")
    parser.add_argument(
        "job",
        choices=["credits", "pays"],
        help="credits: cartera completa + contactos + asignación; pays: pagos",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Semilla de la distribución aleatoria (solo credits, para reproducir una corrida).",
    )
    args = parser.parse_args()

    configure_logging()
    ok = asyncio.run(_run(args.job, args.seed))
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
