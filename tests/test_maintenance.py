"""
Maintenance gate behaviour.
"""

from unittest.mock import AsyncMock

import pytest

from core.errors import MaintenanceError
from settings import repository as settings_repository
from settings.maintenance import MAINTENANCE_MESSAGE, allowed_during_maintenance


@pytest.mark.parametrize(
    "path, allowed",
    [
        ("/", True),
        ("/health", True),
        ("/api/v1/admin/settings", True),
        ("/api/v1/admin/settings/public", True),
        ("/api/v1/auth/login", True),
        ("/api/v1/agency/all", False),
        ("/api/v1/administrator", False),
        ("/uploads/cities/city-1-abc.png", False),
    ],
)
def test_allow_list(path, allowed):
    assert allowed_during_maintenance(path, "/api/v1") is allowed


def test_public_routes_get_503_while_enabled(client, maintenance_off):
    maintenance_off.return_value = True

    response = client.get("/api/v1/properties/all")

    assert response.status_code == MaintenanceError.status_code == 503
    assert response.json() == {"success": False, "message": MAINTENANCE_MESSAGE, "maintenanceMode": True}


def test_admin_namespace_stays_reachable(client, maintenance_off, monkeypatch):
    maintenance_off.return_value = True
    monkeypatch.setattr(settings_repository, "list_settings", AsyncMock(return_value=[]))

    response = client.get("/api/v1/admin/settings/public")

    assert response.status_code == 200
    assert response.json()["success"] is True


def test_requests_pass_when_disabled(client, maintenance_off):
    response = client.get("/health")

    assert response.status_code == 200
    maintenance_off.assert_not_awaited()


def test_failed_lookup_does_not_block_traffic(client, maintenance_off):
    maintenance_off.side_effect = RuntimeError("db down")

    response = client.get("/api/v1/cuid-does-not-matter")

    assert response.status_code == 404


def test_status_probe_reports_flag(client, maintenance_off):
    maintenance_off.return_value = True

    response = client.get("/api/v1/admin/settings/maintenance-status")

    assert response.json() == {"success": True, "maintenanceMode": True}
