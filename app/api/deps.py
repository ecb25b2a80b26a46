"""API dependencies"""

from typing import Dict

from fastapi import Request

from app.services.registry import Dataset


def get_datasets(request: Request) -> Dict[str, Dataset]:
    """Datasets built during application startup."""
    return request.app.state.datasets
