"""
Persistence gateway.

Generic record access to the named collections, with the same record
shape a document store exchanges (camelCase keys, server
assigned ``createdAt``/``updatedAt``).

Usage:
    from seatrace.gateway import collection

    lots = collection("lots")
    lots.list({"status": "pending"})          # most recent first
    lot_id = lots.create({"lotNumber": "L2405171230", "totalWeight": 10})
    lots.update(lot_id, {"notes": "Tank 3"})

    def show(records):
        print(len(records))

    handle = lots.subscribe(show, {"depurationData.status": "completed"})
    ...
    handle.unsubscribe()

Lifecycle rules (lot creation, depuration, processing, QC) live in
seatrace.services; the gateway does no state-machine checks.
"""

from __future__ import annotations

import logging
import re
import threading
from typing import Any, Callable

from django.apps import apps
from django.core.exceptions import FieldDoesNotExist, FieldError, ValidationError
from django.db import DatabaseError, transaction
from django.utils.module_loading import import_string

from seatrace.exceptions import TraceNotFoundError, TracePersistenceError, TraceValidationError

logger = logging.getLogger(__name__)


# name → (model, serializer)
COLLECTIONS = {
    "suppliers": ("seatrace.Supplier", "seatrace.api.serializers.SupplierSerializer"),
    "rawMaterials": ("seatrace.RawMaterial", "seatrace.api.serializers.RawMaterialSerializer"),
    "lots": ("seatrace.Lot", "seatrace.api.serializers.LotSerializer"),
    "processingBatches": (
        "seatrace.ProcessingBatch",
        "seatrace.api.serializers.ProcessingBatchSerializer",
    ),
    "productGrades": ("seatrace.ProductGrade", "seatrace.api.serializers.ProductGradeSerializer"),
}

# Record keys that do not follow the camelCase → snake_case rule
FIELD_ALIASES = {
    "id": "pk",
    "supplierId": "supplier_id",
    "packagingQC": "packaging_qc",
}
COLLECTION_ALIASES = {
    "processingBatches": {"lotNumber": "lot__lot_number"},
}

# Keys only the lifecycle services may write
READ_ONLY_KEYS = {
    "rawMaterials": {"status", "lotNumber"},
}
# Keys fixed once the record exists
FIXED_KEYS = {
    "lots": {"lotNumber", "totalWeight", "receiptIds"},
}
# Records frozen once a field reaches a value: (field, value, error code)
FROZEN_WHEN = {
    "rawMaterials": ("status", "assigned", "MATERIAL_ALREADY_ASSIGNED"),
}

DEFAULT_ORDER = "-createdAt"

_CAMEL = re.compile(r"(?<!^)(?=[A-Z])")


def to_field(collection_name: str, key: str) -> str:
    """
    Map a record key to an ORM lookup.

    "licenseNumber" → "license_number", "depurationData.status" →
    "depuration_data__status".
    """
    aliases = {**FIELD_ALIASES, **COLLECTION_ALIASES.get(collection_name, {})}
    parts = key.split(".")
    head = aliases.get(parts[0]) or _CAMEL.sub("_", parts[0]).lower()
    return "__".join([head, *parts[1:]])


class Subscription:
    """
    Live view of a collection.

    The callback receives the full result set (most recent first) right
    away and again after every committed change to the collection, until
    ``unsubscribe()``.
    """

    def __init__(self, collection: Collection, callback: Callable, filters: dict | None):
        self.collection = collection
        self.callback = callback
        self.filters = filters or {}
        self.active = True

    def refresh(self):
        if not self.active:
            return
        try:
            records = self.collection.list(self.filters)
        except Exception:
            logger.exception(f"Subscription on {self.collection.name} failed to query")
            return
        try:
            self.callback(records)
        except Exception:
            logger.exception(f"Subscriber of {self.collection.name} raised")

    def unsubscribe(self):
        self.active = False
        _registry.remove(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.unsubscribe()


class _Registry:
    """Active subscriptions per collection."""

    def __init__(self):
        self._lock = threading.Lock()
        self._subscriptions: dict[str, list[Subscription]] = {}

    def add(self, subscription: Subscription):
        with self._lock:
            self._subscriptions.setdefault(subscription.collection.name, []).append(
                subscription
            )

    def remove(self, subscription: Subscription):
        with self._lock:
            subs = self._subscriptions.get(subscription.collection.name, [])
            if subscription in subs:
                subs.remove(subscription)

    def for_collection(self, name: str) -> list[Subscription]:
        with self._lock:
            return list(self._subscriptions.get(name, []))

    def clear(self):
        with self._lock:
            self._subscriptions.clear()


_registry = _Registry()


class Collection:
    """CRUD over one named collection."""

    def __init__(self, name: str):
        if name not in COLLECTIONS:
            raise TraceNotFoundError("COLLECTION_NOT_FOUND", collection=name)
        model_path, serializer_path = COLLECTIONS[name]
        self.name = name
        self.model = apps.get_model(model_path)
        self.serializer_class = import_string(serializer_path)

    def __repr__(self) -> str:
        return f"<Collection {self.name}>"

    # ── Reads ──

    def list(self, filters: dict | None = None, order: str | None = DEFAULT_ORDER) -> list[dict]:
        """Records matching ``filters`` (record keys → values)."""
        qs = self.model.objects.all()
        try:
            if filters:
                qs = qs.filter(**{to_field(self.name, k): v for k, v in filters.items()})
            if order:
                desc = order.startswith("-")
                field = to_field(self.name, order.lstrip("-"))
                qs = qs.order_by(f"-{field}" if desc else field, "-pk" if desc else "pk")
            return list(self.serializer_class(qs, many=True).data)
        except FieldError as exc:
            raise TraceValidationError(
                "UNKNOWN_FIELD", collection=self.name, error=str(exc)
            ) from exc
        except DatabaseError as exc:
            raise TracePersistenceError(
                "QUERY_FAILED", collection=self.name, error=str(exc)
            ) from exc

    def get(self, record_id) -> dict:
        return self.serializer_class(self._get_instance(record_id)).data

    # ── Writes ──

    def create(self, record: dict) -> Any:
        """Insert a record, returning its id."""
        instance = self.model()
        self._assign(instance, record)
        self._save(instance)
        logger.debug(f"{self.name}: created {instance.pk}")
        return instance.pk

    def update(self, record_id, partial: dict) -> None:
        """Apply a partial update. ``updatedAt`` is refreshed by the store."""
        instance = self._get_instance(record_id)
        self._check_frozen(instance, record_id)
        fixed = sorted(FIXED_KEYS.get(self.name, set()) & set(partial))
        if fixed:
            raise TraceValidationError(
                "READ_ONLY_FIELD", collection=self.name, field=", ".join(fixed)
            )
        self._assign(instance, partial)
        self._save(instance)
        logger.debug(f"{self.name}: updated {record_id}", extra={"fields": list(partial)})

    def delete(self, record_id) -> None:
        instance = self._get_instance(record_id)
        self._check_frozen(instance, record_id)
        try:
            with transaction.atomic():
                instance.delete()
        except DatabaseError as exc:
            raise TracePersistenceError(
                "DELETE_FAILED", collection=self.name, id=str(record_id), error=str(exc)
            ) from exc
        logger.debug(f"{self.name}: deleted {record_id}")

    # ── Live ──

    def subscribe(self, callback: Callable[[list[dict]], Any], filters: dict | None = None) -> Subscription:
        """Push the current result set now and after every change."""
        subscription = Subscription(self, callback, filters)
        _registry.add(subscription)
        subscription.refresh()
        return subscription

    # ── Internals ──

    def _get_instance(self, record_id):
        try:
            return self.model.objects.get(pk=record_id)
        except (self.model.DoesNotExist, ValueError, TypeError):
            raise TraceNotFoundError(
                "RECORD_NOT_FOUND", collection=self.name, id=str(record_id)
            )

    def _check_frozen(self, instance, record_id):
        if self.name not in FROZEN_WHEN:
            return
        field, value, code = FROZEN_WHEN[self.name]
        if getattr(instance, field) == value:
            raise TraceValidationError(code, collection=self.name, id=str(record_id))

    def _assign(self, instance, record: dict):
        for key, value in record.items():
            if key in ("id", "createdAt", "updatedAt"):
                continue
            name = to_field(self.name, key)
            if "__" in name or key in READ_ONLY_KEYS.get(self.name, ()):
                raise TraceValidationError(
                    "READ_ONLY_FIELD", collection=self.name, field=key
                )
            try:
                self.model._meta.get_field(name.removesuffix("_id"))
            except FieldDoesNotExist:
                raise TraceValidationError(
                    "UNKNOWN_FIELD", collection=self.name, field=key
                )
            setattr(instance, name, value)

    def _save(self, instance):
        try:
            instance.full_clean()
        except ValidationError as exc:
            raise TraceValidationError(
                "INVALID_RECORD", collection=self.name, errors=exc.message_dict
            ) from exc
        try:
            with transaction.atomic():
                instance.save()
        except DatabaseError as exc:
            raise TracePersistenceError(
                "WRITE_FAILED", collection=self.name, error=str(exc)
            ) from exc


def collection(name: str) -> Collection:
    """Get the gateway for a named collection."""
    return Collection(name)


def collection_name_for(model) -> str | None:
    """Reverse lookup: model class → collection name."""
    label = model._meta.label
    for name, (model_path, _serializer) in COLLECTIONS.items():
        if model_path == label:
            return name
    return None


def dispatch_change(model):
    """Refresh subscribers of the model's collection once the change commits."""
    name = collection_name_for(model)
    if name is None:
        return
    subscriptions = _registry.for_collection(name)
    if not subscriptions:
        return

    def _push():
        for subscription in subscriptions:
            subscription.refresh()

    transaction.on_commit(_push)


def reset_subscriptions() -> None:
    """Drop all subscriptions (for tests)."""
    _registry.clear()
