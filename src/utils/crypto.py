"""
Utilidades de Criptografía

Funciones para:
- Hashing de contraseñas (bcrypt)
- JWT tokens de sesión de administradores
"""

import re
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any

import jwt
from passlib.context import CryptContext

from src.utils.logger import get_logger

logger = get_logger(__name__)

# Contexto de hashing con bcrypt
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


# ============================================================================
# PASSWORD HASHING
# ============================================================================

def hash_password(password: str) -> str:
    """
    Genera un hash bcrypt de la contraseña.

    Args:
        password: Contraseña en texto plano

    Returns:
        Hash bcrypt de la contraseña
    """
    result: str = pwd_context.hash(password)
    return result


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verifica si una contraseña coincide con su hash.

    La comparación de bcrypt es de tiempo constante.

    Args:
        plain_password: Contraseña en texto plano
        hashed_password: Hash bcrypt almacenado

    Returns:
        True si coinciden, False en caso contrario (incluye hash corrupto)
    """
    try:
        result: bool = pwd_context.verify(plain_password, hashed_password)
        return result
    except (ValueError, TypeError):
        logger.warning("Hash de contraseña con formato inválido")
        return False


def validate_password_strength(password: str, min_length: int = 8) -> tuple[bool, str]:
    """
    Valida la fortaleza de una contraseña.

    Args:
        password: Contraseña a validar
        min_length: Longitud mínima requerida

    Returns:
        Tupla (es_válida, mensaje_error)
    """
    if len(password) < min_length:
        return False, f"La contraseña debe tener al menos {min_length} caracteres"

    if not re.search(r'[A-Z]', password):
        return False, "La contraseña debe contener al menos una mayúscula"

    if not re.search(r'[a-z]', password):
        return False, "La contraseña debe contener al menos una minúscula"

    if not re.search(r'\d', password):
        return False, "La contraseña debe contener al menos un número"

    return True, ""


# ============================================================================
# JWT TOKENS
# ============================================================================

class JWTService:
    """
    Servicio para manejo de JWT tokens de administradores.

    El token lleva {id, email, nombre} y una ventana de validez fija.
    No hay lista de revocación: un token vale hasta su expiración.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_hours: int = 8
    ):
        """
        Inicializa el servicio JWT.

        Args:
            secret_key: Clave secreta para firmar tokens
            algorithm: Algoritmo de firma
            expire_hours: Horas de validez del token
        """
        if not secret_key:
            raise ValueError("secret_key es requerido")

        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire = timedelta(hours=expire_hours)

    def create_access_token(
        self,
        admin_id: int,
        email: str,
        nombre: str,
        now: Optional[datetime] = None
    ) -> str:
        """
        Crea un token de acceso.

        Args:
            admin_id: ID del administrador
            email: Email del administrador
            nombre: Nombre completo
            now: Momento de emisión (por defecto ahora, UTC)

        Returns:
            Token JWT codificado
        """
        issued = now or datetime.now(timezone.utc)
        payload = {
            "id": admin_id,
            "email": email,
            "nombre": nombre,
            "iat": issued,
            "exp": issued + self.expire,
        }

        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> Optional[Dict[str, Any]]:
        """
        Verifica y decodifica un token.

        Args:
            token: Token JWT a verificar

        Returns:
            Payload del token o None si es inválido o expiró
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": ["exp"]}
            )
            return dict(payload)

        except jwt.ExpiredSignatureError:
            logger.debug("Token expirado")
            return None
        except jwt.InvalidTokenError as e:
            logger.warning(f"Token inválido: {e}")
            return None
