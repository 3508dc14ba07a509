import os

os.environ.setdefault("APPWRITE_ENDPOINT", "https://appwrite.test/v1")
os.environ.setdefault("APPWRITE_FUNCTION_PROJECT_ID", "mycad-test")
os.environ.setdefault("APPWRITE_API_KEY", "test-key")
os.environ.setdefault("APPWRITE_DATABASE_ID", "mycad")
os.environ.setdefault("APPWRITE_BUCKET_REPORT_FILES_ID", "report_files")
os.environ.setdefault("APPWRITE_BUCKET_GROUP_LOGOS_ID", "group_logos")
os.environ.setdefault("APPWRITE_COLLECTION_SERVICE_HISTORIES_ID", "service_histories")
os.environ.setdefault("APPWRITE_COLLECTION_REPAIR_REPORTS_ID", "repair_reports")
os.environ.setdefault("APPWRITE_COLLECTION_REPLACED_PARTS_ID", "replaced_parts")
os.environ.setdefault("APPWRITE_COLLECTION_REPAIRED_PARTS_ID", "repaired_parts")
os.environ.setdefault("APPWRITE_COLLECTION_VEHICLES_ID", "vehicles")
os.environ.setdefault("APPWRITE_COLLECTION_VEHICLE_TYPES_ID", "vehicle_types")
os.environ.setdefault("APPWRITE_COLLECTION_VEHICLE_BRANDS_ID", "vehicle_brands")
os.environ.setdefault("APPWRITE_COLLECTION_VEHICLE_MODELS_ID", "vehicle_models")
os.environ.setdefault("APPWRITE_COLLECTION_GROUPS_ID", "groups")
os.environ.setdefault("APPWRITE_COLLECTION_USERS_PROFILE_ID", "users_profile")

import pytest
from mycad_core.appwrite import AppwriteClient

from appwrite_mock import MockAppwrite
from reporter.config import AppConfig, get_config


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def config() -> AppConfig:
    return get_config()


@pytest.fixture
def mock_appwrite() -> MockAppwrite:
    """Appwrite seeded with one service report and one repair report."""
    m = MockAppwrite()
    m.buckets.update({"report_files", "group_logos"})
    m.add_document("vehicle_types", {"$id": "t1", "name": "Camioneta"})
    m.add_document("vehicle_brands", {"$id": "b1", "name": "Nissan"})
    m.add_document("vehicle_models", {"$id": "m1", "name": "NP300", "year": 2021})
    m.add_document(
        "vehicles",
        {
            "$id": "v1",
            "typeId": "t1",
            "brandId": "b1",
            "modelId": "m1",
            "plate": "ABC-123",
            "economicNumber": "ECO-7",
            "serialNumber": "3N6AD33A1MK000001",
            "color": "Blanco",
        },
    )
    m.add_document("vehicles", {"$id": "v2", "plate": "XYZ-999"})
    m.add_document("groups", {"$id": "g1", "name": "Flotilla Norte"})
    m.add_document(
        "users_profile", {"$id": "p1", "firstName": "Ana", "lastName": "López"}
    )
    m.add_document(
        "service_histories",
        {
            "$id": "sh1",
            "title": "Cambio de aceite",
            "vehicleId": "v1",
            "groupId": "g1",
            "serviceDate": "2025-03-24T15:00:00.000+00:00",
            "serviceType": "Preventivo",
            "odometer": 125000,
            "vendorName": "Taller Central",
            "description": "Cambio de aceite y filtros.",
            "laborCost": 30,
            "createdByProfileId": "p1",
            "status": "DRAFT",
        },
    )
    m.add_document(
        "service_histories",
        {"$id": "sh2", "title": "Sin catálogo", "vehicleId": "v2", "groupId": "g1"},
    )
    for part in (
        {"name": "Filtro de aceite", "quantity": 2, "unitCost": 100, "enabled": True},
        {"name": "Aceite 5W-30", "quantity": 1, "unitCost": 50, "enabled": True},
        {"name": "Descartada", "quantity": 10, "unitCost": 1000, "enabled": False},
    ):
        m.add_document("replaced_parts", {"serviceHistoryId": "sh1", **part})
    m.add_document(
        "repair_reports",
        {
            "$id": "rr1",
            "title": "Golpe en defensa",
            "vehicleId": "v1",
            "groupId": "g1",
            "reportDate": "2025-01-10",
            "damageType": "Colisión",
            "workshopName": "Hojalatería Sur",
            "damageDescription": "Defensa delantera dañada.",
            "laborCost": 100,
            "partsCost": 50,
            "finalCost": 0,
            "finalizedAt": "2025-01-12T10:00:00.000+00:00",
            "finalizedByProfileId": "p1",
        },
    )
    m.add_document(
        "repaired_parts",
        {"repairReportId": "rr1", "name": "Defensa", "quantity": 1, "unitCost": 50, "enabled": True},
    )
    return m


@pytest.fixture
def client(mock_appwrite: MockAppwrite, config: AppConfig) -> AppwriteClient:
    return AppwriteClient.from_config(config, transport=mock_appwrite.transport)
