# ==============================================================================
# Admin User for Load Testing
# ==============================================================================
"""
Usuario virtual que simula un administrador del panel.

Comportamiento típico:
- Revisar ventas pendientes
- Mover ventas de estado
- Consultar clientes
"""

import logging
import random

from locust import task, tag

from tests.load.config import ENDPOINTS
from tests.load.users.base import BaseAPIUser


logger = logging.getLogger(__name__)


class AdminUser(BaseAPIUser):
    """
    Tareas ponderadas:
    - list_pending (3): Frecuente - vista principal del panel
    - list_sales (2): Moderado
    - advance_status (1): Ocasional
    - list_users (1): Ocasional
    """

    weight = 1
    requires_admin = True

    @task(1)
    @tag("health", "smoke")
    def probe(self) -> None:
        self.client.get(ENDPOINTS.probe, name="probe")

    @task(3)
    @tag("admin", "smoke")
    def list_pending(self) -> None:
        self.api_get(f"{ENDPOINTS.admin_ventas}/estado/pendiente", name="admin_ventas_estado")

    @task(2)
    @tag("admin")
    def list_sales(self) -> None:
        self.api_get(ENDPOINTS.admin_ventas, name="admin_ventas_list")

    @task(1)
    @tag("admin")
    def advance_status(self) -> None:
        response = self.api_get(f"{ENDPOINTS.admin_ventas}/estado/pendiente", name="admin_ventas_estado")
        if response.status_code != 200 or not response.json():
            return
        venta = random.choice(response.json())
        self.api_patch(
            f"{ENDPOINTS.admin_ventas}/{venta['id']}/estado",
            json={"estado": "pagado"},
            name="admin_ventas_estado_update",
        )

    @task(1)
    @tag("admin")
    def list_users(self) -> None:
        self.api_get(ENDPOINTS.admin_usuarios, name="admin_usuarios_list")
