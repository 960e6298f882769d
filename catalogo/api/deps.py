# catalogo/api/deps.py
from fastapi import Request

from catalogo.services.catalog_client import CatalogClient
from catalogo.services.photo_storage import PhotoStorage


def get_photo_storage(request: Request) -> PhotoStorage:
    return request.app.state.photo_storage


def get_catalog_client(request: Request) -> CatalogClient:
    return request.app.state.catalog_client
