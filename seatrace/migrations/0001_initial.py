# Initial schema for SeaTrace

import uuid
from decimal import Decimal

import django.db.models.deletion
import django.utils.timezone
import simple_history.models
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="CodeSequence",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("prefix", models.CharField(max_length=50, unique=True, verbose_name="Prefix")),
                ("last_value", models.PositiveIntegerField(default=0, verbose_name="Last value")),
            ],
            options={
                "verbose_name": "Code Sequence",
                "verbose_name_plural": "Code Sequences",
                "db_table": "seatrace_code_sequence",
            },
        ),
        migrations.CreateModel(
            name="Supplier",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("name", models.CharField(max_length=200, verbose_name="Name")),
                ("contact", models.CharField(max_length=200, verbose_name="Contact")),
                ("license_number", models.CharField(max_length=100, verbose_name="License Number")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
            ],
            options={
                "verbose_name": "Supplier",
                "verbose_name_plural": "Suppliers",
                "db_table": "seatrace_supplier",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="ProductGrade",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("code", models.CharField(max_length=20, verbose_name="Code")),
                ("name", models.CharField(max_length=100, verbose_name="Name")),
                ("description", models.TextField(blank=True, verbose_name="Description")),
                (
                    "product_type",
                    models.CharField(
                        choices=[("shell-on", "Shell-on"), ("meat", "Meat")],
                        db_index=True,
                        max_length=20,
                        verbose_name="Product Type",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
            ],
            options={
                "verbose_name": "Product Grade",
                "verbose_name_plural": "Product Grades",
                "db_table": "seatrace_product_grade",
                "ordering": ["product_type", "code"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("code", "product_type"),
                        name="seatrace_grade_code_per_type",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="RawMaterial",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "weight",
                    models.DecimalField(decimal_places=3, max_digits=10, verbose_name="Weight (kg)"),
                ),
                (
                    "date",
                    models.DateField(default=django.utils.timezone.localdate, verbose_name="Date"),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("pending", "Pending"), ("assigned", "Assigned")],
                        db_index=True,
                        default="pending",
                        max_length=20,
                        verbose_name="Status",
                    ),
                ),
                (
                    "lot_number",
                    models.CharField(
                        blank=True,
                        db_index=True,
                        max_length=30,
                        null=True,
                        verbose_name="Lot Number",
                    ),
                ),
                ("photo_url", models.TextField(blank=True, verbose_name="Weight Photo")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                (
                    "supplier",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="raw_materials",
                        to="seatrace.supplier",
                        verbose_name="Supplier",
                    ),
                ),
            ],
            options={
                "verbose_name": "Raw Material",
                "verbose_name_plural": "Raw Materials",
                "db_table": "seatrace_raw_material",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="Lot",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "uuid",
                    models.UUIDField(default=uuid.uuid4, editable=False, unique=True, verbose_name="UUID"),
                ),
                (
                    "lot_number",
                    models.CharField(
                        help_text="L + yyMMddHHmm of creation, suffixed on collision",
                        max_length=30,
                        unique=True,
                        verbose_name="Lot Number",
                    ),
                ),
                (
                    "total_weight",
                    models.DecimalField(
                        decimal_places=3,
                        default=Decimal("0"),
                        max_digits=12,
                        verbose_name="Total Weight (kg)",
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("processing", "Processing"),
                            ("completed", "Completed"),
                        ],
                        db_index=True,
                        default="pending",
                        max_length=20,
                        verbose_name="Status",
                    ),
                ),
                ("notes", models.TextField(blank=True, verbose_name="Notes")),
                (
                    "receipt_ids",
                    models.JSONField(
                        blank=True,
                        default=list,
                        help_text="RawMaterial ids aggregated into this lot",
                        verbose_name="Receipts",
                    ),
                ),
                ("depuration_data", models.JSONField(blank=True, null=True, verbose_name="Depuration")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
            ],
            options={
                "verbose_name": "Lot",
                "verbose_name_plural": "Lots",
                "db_table": "seatrace_lot",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="HistoricalLot",
            fields=[
                (
                    "id",
                    models.BigIntegerField(auto_created=True, blank=True, db_index=True, verbose_name="ID"),
                ),
                (
                    "uuid",
                    models.UUIDField(db_index=True, default=uuid.uuid4, editable=False, verbose_name="UUID"),
                ),
                (
                    "lot_number",
                    models.CharField(
                        db_index=True,
                        help_text="L + yyMMddHHmm of creation, suffixed on collision",
                        max_length=30,
                        verbose_name="Lot Number",
                    ),
                ),
                (
                    "total_weight",
                    models.DecimalField(
                        decimal_places=3,
                        default=Decimal("0"),
                        max_digits=12,
                        verbose_name="Total Weight (kg)",
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("processing", "Processing"),
                            ("completed", "Completed"),
                        ],
                        db_index=True,
                        default="pending",
                        max_length=20,
                        verbose_name="Status",
                    ),
                ),
                ("notes", models.TextField(blank=True, verbose_name="Notes")),
                (
                    "receipt_ids",
                    models.JSONField(
                        blank=True,
                        default=list,
                        help_text="RawMaterial ids aggregated into this lot",
                        verbose_name="Receipts",
                    ),
                ),
                ("depuration_data", models.JSONField(blank=True, null=True, verbose_name="Depuration")),
                ("created_at", models.DateTimeField(blank=True, editable=False, verbose_name="created at")),
                ("updated_at", models.DateTimeField(blank=True, editable=False, verbose_name="updated at")),
                ("history_id", models.AutoField(primary_key=True, serialize=False)),
                ("history_date", models.DateTimeField(db_index=True)),
                ("history_change_reason", models.CharField(max_length=100, null=True)),
                (
                    "history_type",
                    models.CharField(
                        choices=[("+", "Created"), ("~", "Changed"), ("-", "Deleted")],
                        max_length=1,
                    ),
                ),
                (
                    "history_user",
                    models.ForeignKey(
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "historical Lot",
                "verbose_name_plural": "historical Lots",
                "ordering": ("-history_date", "-history_id"),
                "get_latest_by": ("history_date", "history_id"),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
        migrations.CreateModel(
            name="ProcessingBatch",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "uuid",
                    models.UUIDField(default=uuid.uuid4, editable=False, unique=True, verbose_name="UUID"),
                ),
                (
                    "shell_on_weight",
                    models.DecimalField(
                        decimal_places=3,
                        default=Decimal("0"),
                        max_digits=12,
                        verbose_name="Shell-on Weight (kg)",
                    ),
                ),
                (
                    "meat_weight",
                    models.DecimalField(
                        decimal_places=3,
                        default=Decimal("0"),
                        max_digits=12,
                        verbose_name="Meat Weight (kg)",
                    ),
                ),
                (
                    "shell_weight",
                    models.DecimalField(
                        decimal_places=3,
                        default=Decimal("0"),
                        help_text="Shell/waste scale reading for the whole batch",
                        max_digits=12,
                        verbose_name="Shell Weight (kg)",
                    ),
                ),
                (
                    "yield_percentage",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0"),
                        max_digits=8,
                        verbose_name="Yield (%)",
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("pending", "Pending"), ("completed", "Completed")],
                        db_index=True,
                        default="pending",
                        max_length=20,
                        verbose_name="Status",
                    ),
                ),
                ("packaging_qc", models.JSONField(blank=True, null=True, verbose_name="Packaging QC")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                (
                    "lot",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="processing_batches",
                        to="seatrace.lot",
                        verbose_name="Lot",
                    ),
                ),
            ],
            options={
                "verbose_name": "Processing Batch",
                "verbose_name_plural": "Processing Batches",
                "db_table": "seatrace_processing_batch",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="HistoricalProcessingBatch",
            fields=[
                (
                    "id",
                    models.BigIntegerField(auto_created=True, blank=True, db_index=True, verbose_name="ID"),
                ),
                (
                    "uuid",
                    models.UUIDField(db_index=True, default=uuid.uuid4, editable=False, verbose_name="UUID"),
                ),
                (
                    "shell_on_weight",
                    models.DecimalField(
                        decimal_places=3,
                        default=Decimal("0"),
                        max_digits=12,
                        verbose_name="Shell-on Weight (kg)",
                    ),
                ),
                (
                    "meat_weight",
                    models.DecimalField(
                        decimal_places=3,
                        default=Decimal("0"),
                        max_digits=12,
                        verbose_name="Meat Weight (kg)",
                    ),
                ),
                (
                    "shell_weight",
                    models.DecimalField(
                        decimal_places=3,
                        default=Decimal("0"),
                        help_text="Shell/waste scale reading for the whole batch",
                        max_digits=12,
                        verbose_name="Shell Weight (kg)",
                    ),
                ),
                (
                    "yield_percentage",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0"),
                        max_digits=8,
                        verbose_name="Yield (%)",
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("pending", "Pending"), ("completed", "Completed")],
                        db_index=True,
                        default="pending",
                        max_length=20,
                        verbose_name="Status",
                    ),
                ),
                ("packaging_qc", models.JSONField(blank=True, null=True, verbose_name="Packaging QC")),
                ("created_at", models.DateTimeField(blank=True, editable=False, verbose_name="created at")),
                ("updated_at", models.DateTimeField(blank=True, editable=False, verbose_name="updated at")),
                ("history_id", models.AutoField(primary_key=True, serialize=False)),
                ("history_date", models.DateTimeField(db_index=True)),
                ("history_change_reason", models.CharField(max_length=100, null=True)),
                (
                    "history_type",
                    models.CharField(
                        choices=[("+", "Created"), ("~", "Changed"), ("-", "Deleted")],
                        max_length=1,
                    ),
                ),
                (
                    "history_user",
                    models.ForeignKey(
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "lot",
                    models.ForeignKey(
                        blank=True,
                        db_constraint=False,
                        null=True,
                        on_delete=django.db.models.deletion.DO_NOTHING,
                        related_name="+",
                        to="seatrace.lot",
                        verbose_name="Lot",
                    ),
                ),
            ],
            options={
                "verbose_name": "historical Processing Batch",
                "verbose_name_plural": "historical Processing Batches",
                "ordering": ("-history_date", "-history_id"),
                "get_latest_by": ("history_date", "history_id"),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
        migrations.CreateModel(
            name="Box",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "box_type",
                    models.CharField(
                        choices=[("shell-on", "Shell-on"), ("meat", "Meat")],
                        max_length=20,
                        verbose_name="Type",
                    ),
                ),
                ("box_number", models.CharField(max_length=20, verbose_name="Box Number")),
                (
                    "weight",
                    models.DecimalField(decimal_places=3, max_digits=10, verbose_name="Weight (kg)"),
                ),
                ("grade", models.CharField(max_length=20, verbose_name="Grade")),
                (
                    "batch",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="boxes",
                        to="seatrace.processingbatch",
                        verbose_name="Batch",
                    ),
                ),
            ],
            options={
                "verbose_name": "Box",
                "verbose_name_plural": "Boxes",
                "db_table": "seatrace_box",
                "ordering": ["id"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("batch", "box_number"),
                        name="seatrace_box_number_per_batch",
                    )
                ],
            },
        ),
    ]
