# ==============================================================================
# Load Testing Module - Tienda API
# ==============================================================================
#
# Pruebas de carga usando Locust.
#
# Estructura:
#   - locustfile.py     : Entry point principal
#   - config.py         : Endpoints, tiempos y credenciales
#   - users/            : Usuarios virtuales (Cliente, Admin)
#
# Uso:
#   locust -f tests/load/locustfile.py --host=http://localhost:3000
#
# ==============================================================================
"""
Load Testing para la API de la tienda.
"""
