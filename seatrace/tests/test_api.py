"""
Tests for SeaTrace API ViewSets (seatrace.api.views).
"""

import pytest

pytestmark = pytest.mark.urls("seatrace.tests.test_api_urls")

from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.db import DatabaseError

from rest_framework.test import APIClient

from seatrace import trace
from seatrace.models import Lot, LotStatus, RawMaterial
from seatrace.tests.conftest import checklist

User = get_user_model()

BASE = "/api/seatrace"


# ═══════════════════════════════════════════════════════════════════
# Fixtures
# ═══════════════════════════════════════════════════════════════════


@pytest.fixture
def api_client(db):
    user = User.objects.create_user(username="api_user", password="test123")
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def depurating_lot(lot, now):
    trace.start_depuration(lot, "T3", "12.5", "33", now=now)
    return lot


# ═══════════════════════════════════════════════════════════════════
# Suppliers, grades, raw materials
# ═══════════════════════════════════════════════════════════════════


class TestSupplierAPI:
    def test_create_and_list(self, api_client):
        response = api_client.post(
            f"{BASE}/suppliers/",
            {"name": "Baía Azul", "contact": "+55 48 0000", "licenseNumber": "LIC-1"},
            format="json",
        )

        assert response.status_code == 201
        assert response.data["licenseNumber"] == "LIC-1"

        listed = api_client.get(f"{BASE}/suppliers/")
        assert [s["name"] for s in listed.data] == ["Baía Azul"]


class TestGradeAPI:
    def test_filter_by_product_type(self, api_client, grades):
        response = api_client.get(f"{BASE}/grades/", {"product_type": "meat"})

        assert response.status_code == 200
        assert [g["code"] for g in response.data] == ["P"]


class TestRawMaterialAPI:
    def test_create_pending(self, api_client, supplier):
        response = api_client.post(
            f"{BASE}/raw-materials/",
            {"supplierId": supplier.pk, "weight": "120.5", "date": "2024-05-17"},
            format="json",
        )

        assert response.status_code == 201
        assert response.data["status"] == "pending"
        assert response.data["lotNumber"] is None
        assert response.data["notification"] == {
            "kind": "success",
            "message": "Raw material entry created successfully",
        }

    def test_zero_weight_rejected(self, api_client, supplier):
        response = api_client.post(
            f"{BASE}/raw-materials/",
            {"supplierId": supplier.pk, "weight": "0"},
            format="json",
        )

        assert response.status_code == 400
        assert response.data["error"]["code"] == "INVALID_WEIGHT"
        assert response.data["notification"]["kind"] == "error"
        assert not RawMaterial.objects.exists()

    def test_filter_pending(self, api_client, lot, supplier):
        pending = trace.receive_raw_material(supplier, "2")

        response = api_client.get(f"{BASE}/raw-materials/", {"status": "pending"})

        assert [m["id"] for m in response.data] == [pending.pk]


# ═══════════════════════════════════════════════════════════════════
# Lots
# ═══════════════════════════════════════════════════════════════════


class TestLotAPI:
    def test_create_from_materials(self, api_client, materials):
        response = api_client.post(
            f"{BASE}/lots/",
            {"materialIds": [m.pk for m in materials], "notes": "Morning tide"},
            format="json",
        )

        assert response.status_code == 201
        assert response.data["lotNumber"].startswith("L")
        assert response.data["totalWeight"] == 10
        assert response.data["notification"] == {
            "kind": "success",
            "message": f"Lot {response.data['lotNumber']} created successfully",
        }

    def test_create_without_materials(self, api_client):
        response = api_client.post(f"{BASE}/lots/", {"materialIds": []}, format="json")

        assert response.status_code == 400
        assert response.data["notification"] == {
            "kind": "error",
            "message": "Please select at least one receipt",
        }

    def test_persistence_failure_is_503(self, api_client, materials):
        with patch.object(
            RawMaterial, "assign", side_effect=DatabaseError("Simulated DB failure")
        ):
            response = api_client.post(
                f"{BASE}/lots/", {"materialIds": [m.pk for m in materials]}, format="json"
            )

        assert response.status_code == 503
        assert response.data["error"]["code"] == "LOT_NOT_SAVED"
        assert not Lot.objects.exists()

    def test_retrieve_by_lot_number(self, api_client, lot):
        response = api_client.get(f"{BASE}/lots/{lot.lot_number}/")

        assert response.status_code == 200
        assert response.data["receiptIds"] == lot.receipt_ids

    def test_unknown_lot_is_404(self, api_client):
        response = api_client.get(f"{BASE}/lots/L0000000000/")

        assert response.status_code == 404

    def test_filter_depurated(self, api_client, depurated_lot):
        response = api_client.get(f"{BASE}/lots/", {"depurated": "1"})

        assert [row["lotNumber"] for row in response.data] == [depurated_lot.lot_number]


class TestDepurationAPI:
    def test_start(self, api_client, lot):
        response = api_client.post(
            f"{BASE}/lots/{lot.lot_number}/depuration-start/",
            {"tankNumber": "T3", "temperature": "12.5", "salinity": "33"},
            format="json",
        )

        assert response.status_code == 200
        assert response.data["depurationData"]["status"] == "in-progress"
        assert response.data["notification"]["message"] == "Depuration process started"

    def test_start_missing_fields(self, api_client, lot):
        response = api_client.post(
            f"{BASE}/lots/{lot.lot_number}/depuration-start/",
            {"tankNumber": "T3"},
            format="json",
        )

        assert response.status_code == 400
        assert response.data["error"]["code"] == "MISSING_FIELDS"
        assert response.data["notification"]["message"] == "Please fill in all required fields"

    def test_complete(self, api_client, depurating_lot):
        response = api_client.post(
            f"{BASE}/lots/{depurating_lot.lot_number}/depuration-complete/",
            {"temperature": "12", "salinity": "33"},
            format="json",
        )

        assert response.status_code == 200
        assert response.data["depurationData"]["status"] == "completed"

    def test_elapsed(self, api_client, depurated_lot):
        response = api_client.get(f"{BASE}/lots/{depurated_lot.lot_number}/elapsed/")

        assert response.status_code == 200
        assert response.data["depurationStatus"] == "completed"
        assert response.data["elapsed"] == {"hours": 20, "minutes": 0}
        assert response.data["display"] == "20h 0m"


class TestProcessAPI:
    def payload(self, boxes):
        return {"boxes": boxes, "shellWeight": "1.0"}

    def test_process(self, api_client, depurated_lot, grades, boxes):
        response = api_client.post(
            f"{BASE}/lots/{depurated_lot.lot_number}/process/",
            self.payload(boxes),
            format="json",
        )

        assert response.status_code == 201
        assert response.data["summary"]["yieldPercentage"] == 80.0
        assert response.data["summary"]["mismatch"] is True
        assert len(response.data["warnings"]) == 1
        assert response.data["batch"]["lotNumber"] == depurated_lot.lot_number
        assert response.data["notification"] == {
            "kind": "success",
            "message": "Processing data saved successfully",
        }

    def test_process_before_depuration(self, api_client, lot, grades, boxes):
        response = api_client.post(
            f"{BASE}/lots/{lot.lot_number}/process/",
            self.payload(boxes),
            format="json",
        )

        assert response.status_code == 400
        assert response.data["error"]["code"] == "DEPURATION_NOT_COMPLETED"

    def test_summary_preview(self, api_client, depurated_lot, boxes):
        response = api_client.post(
            f"{BASE}/lots/{depurated_lot.lot_number}/processing-summary/",
            self.payload(boxes),
            format="json",
        )

        assert response.status_code == 200
        assert response.data["totalOutput"] == 9.0
        assert depurated_lot.processing_batches.count() == 0


# ═══════════════════════════════════════════════════════════════════
# Batches and packaging QC
# ═══════════════════════════════════════════════════════════════════


class TestPackagingQCAPI:
    def url(self, batch):
        return f"{BASE}/batches/{batch.uuid}/packaging-qc/"

    def test_list_by_lot_number(self, api_client, processed, depurated_lot):
        response = api_client.get(
            f"{BASE}/batches/", {"lot_number": depurated_lot.lot_number}
        )

        assert [b["uuid"] for b in response.data] == [str(processed.batch.uuid)]

    def test_passed(self, api_client, processed, depurated_lot):
        response = api_client.post(
            self.url(processed.batch),
            {"checklist": checklist(), "inspectedBoxes": ["SO000001"]},
            format="json",
        )

        assert response.status_code == 200
        assert response.data["passed"] is True
        assert response.data["batch"]["packagingQC"]["passed"] is True
        assert response.data["notification"]["message"] == (
            "Packaging quality control completed"
        )
        depurated_lot.refresh_from_db()
        assert depurated_lot.status == LotStatus.COMPLETED

    def test_unset_item(self, api_client, processed):
        response = api_client.post(
            self.url(processed.batch),
            {"checklist": checklist(item_6=None), "inspectedBoxes": ["SO000001"]},
            format="json",
        )

        assert response.status_code == 400
        assert response.data["notification"] == {
            "kind": "error",
            "message": "Please complete all quality checks",
        }

    def test_failed_items_are_warnings(self, api_client, processed):
        response = api_client.post(
            self.url(processed.batch),
            {"checklist": checklist(item_1=False), "inspectedBoxes": ["CM000002"]},
            format="json",
        )

        assert response.status_code == 200
        assert response.data["passed"] is False
        assert response.data["warnings"] == [
            "Package Integrity failed: please provide detailed notes"
        ]
