# catalogo/services/exceptions.py

class ServiceError(Exception):
    """Clase base para errores de la capa de servicio."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class ResourceNotFoundError(ServiceError):
    """Recurso no encontrado."""
    pass


class PhotoStorageError(ServiceError):
    """No se pudo escribir el archivo subido en el directorio de uploads."""
    pass


class CatalogServiceError(ServiceError):
    """El servicio de catálogo respondió con un status distinto de 2xx."""

    def __init__(self, detail: str, *, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(detail)


class CatalogUnavailableError(ServiceError):
    """No se pudo contactar al servicio de catálogo."""
    pass
