# cartografia/core/exceptions.py


class RepositoryError(Exception):
    """Backend de dados inacessível ou recusou a operação."""


class AreaNotFoundError(RepositoryError):
    def __init__(self, area_id: str):
        self.area_id = area_id
        super().__init__(f"Área {area_id} não encontrada")


class InvalidGeometryError(ValueError):
    """Polígono com menos de 3 pontos ou WKT ilegível."""
