"""
Connection Probe

GET /api/test: verifica que la API llega a la base de datos.
El detalle del fallo sólo va al log; el cliente recibe un mensaje fijo.
"""

import time
from datetime import datetime

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from config.constants import MESSAGES
from src.api.schemas import ConnectionTestResponse
from src.core.context import AppContext, get_app_context
from src.database.queries import count_users
from src.utils.logger import get_logger, log_exception

logger = get_logger(__name__)


health_router = APIRouter(prefix="/api", tags=["health"])


@health_router.get(
    "/test",
    response_model=ConnectionTestResponse,
    response_model_exclude_none=True,
    summary="Probe de conexión",
    responses={500: {"model": ConnectionTestResponse, "description": "Base de datos no disponible"}},
)
async def connection_test(ctx: AppContext = Depends(get_app_context)):
    """Ejecuta un conteo trivial sobre usuarios."""
    start = time.time()
    try:
        async with ctx.db.get_session() as db:
            await count_users(db)
    except Exception as e:
        log_exception(logger, "Probe de conexión fallido", e)
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "message": MESSAGES["db_error"],
                "error": MESSAGES["server_error"],
            },
        )

    latency = (time.time() - start) * 1000
    logger.debug(f"Probe de conexión OK ({latency:.2f}ms)")

    return {
        "success": True,
        "message": MESSAGES["db_ok"],
        "db_status": "conectado",
        "timestamp": datetime.utcnow(),
    }
