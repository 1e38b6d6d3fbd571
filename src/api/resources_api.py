# src/api/resources_api.py
from __future__ import annotations

from typing import Any

from src.api.client import ApiClient, ApiError
from src.core.models import Resource


def get_current_user(client: ApiClient) -> dict[str, Any]:
    data = client.get("/users/current")
    if not isinstance(data, dict):
        raise ApiError("users/current: expected a JSON object")
    return data


def approve_resource(client: ApiClient, resource_id) -> Any:
    return client.patch(f"/resources/{resource_id}/approve", json={"approve": True})


def list_resources(client: ApiClient) -> list[Resource]:
    data = client.get("/resources")
    # backend may wrap the list
    if isinstance(data, dict):
        data = data.get("resources") or data.get("data") or []
    if not isinstance(data, list):
        raise ApiError("resources: expected a JSON list")
    return [Resource.from_dict(row) for row in data]


def update_resource(client: ApiClient, resource_id, payload: dict) -> Any:
    return client.put(f"/resources/{resource_id}", json=payload)


def delete_resource(client: ApiClient, resource_id) -> Any:
    return client.delete(f"/resources/{resource_id}")
