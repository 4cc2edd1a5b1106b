"""
Base Factory Configuration

Las factories de la tienda generan payloads JSON (diccionarios) para la
API: los tests persisten a través de los endpoints, no del ORM.
"""

import factory


class DictFactory(factory.Factory):
    """
    Factory base para crear diccionarios.

    Útil para tests que no necesitan persistencia en BD.
    """

    class Meta:
        abstract = True
        model = dict

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        """Retorna un diccionario en lugar de una instancia."""
        return dict(**kwargs)
