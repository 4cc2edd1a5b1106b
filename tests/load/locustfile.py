# ==============================================================================
# Locustfile - Entry Point for Load Testing
# ==============================================================================
#
# Uso:
#   # Modo interactivo (UI web en http://localhost:8089)
#   locust -f tests/load/locustfile.py --host=http://localhost:3000
#
#   # Modo headless (CI/CD)
#   locust -f tests/load/locustfile.py --headless \
#       -u 50 -r 5 -t 5m \
#       --host=http://localhost:3000 \
#       --html=reports/load_test.html
#
#   # Ejecutar solo escenario smoke
#   locust -f tests/load/locustfile.py --tags smoke --host=http://localhost:3000
#
# ==============================================================================
"""
Entry point para pruebas de carga con Locust.

La proporción de usuarios se controla con el atributo `weight` de cada clase.
"""

import logging
import sys
from pathlib import Path

# Agregar el directorio raíz al path para imports
ROOT_DIR = Path(__file__).parent.parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from locust import events

from tests.load.users.cliente import ClienteUser
from tests.load.users.admin import AdminUser

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    logger.info("-" * 60)
    logger.info("Iniciando pruebas de carga...")
    logger.info(f"Host: {environment.host}")
    logger.info(f"  - ClienteUser (weight={ClienteUser.weight})")
    logger.info(f"  - AdminUser (weight={AdminUser.weight})")
    logger.info("-" * 60)


@events.test_stop.add_listener
def on_test_stop(environment, **kwargs):
    """Resumen al detener las pruebas."""
    stats = environment.stats.total
    if stats.num_requests == 0:
        return

    logger.info(f"Total requests: {stats.num_requests}")
    logger.info(f"Failures: {stats.num_failures}")
    logger.info(f"Avg response time: {stats.avg_response_time:.0f}ms")
    logger.info(f"Requests/s: {stats.total_rps:.2f}")

    if stats.num_failures > 0:
        error_rate = (stats.num_failures / stats.num_requests) * 100
        logger.warning(f"Error rate: {error_rate:.2f}%")


__all__ = ["ClienteUser", "AdminUser"]
