"""
Supplier and ProductGrade models.

Supplier = who delivered the raw material (licensed harvester).
ProductGrade = reference data for box grading, per product type.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class ProductType(models.TextChoices):
    """Output product type (also the box type)."""

    SHELL_ON = "shell-on", _("Shell-on")
    MEAT = "meat", _("Meat")


class Supplier(models.Model):
    """
    Licensed harvester delivering raw material.

    Created manually, not mutated by the lifecycle.
    """

    name = models.CharField(
        max_length=200,
        verbose_name=_("Name"),
    )
    contact = models.CharField(
        max_length=200,
        verbose_name=_("Contact"),
    )
    license_number = models.CharField(
        max_length=100,
        verbose_name=_("License Number"),
    )

    created_at = models.DateTimeField(auto_now_add=True, verbose_name=_("created at"))
    updated_at = models.DateTimeField(auto_now=True, verbose_name=_("updated at"))

    class Meta:
        db_table = "seatrace_supplier"
        verbose_name = _("Supplier")
        verbose_name_plural = _("Suppliers")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.name} - {self.license_number}"


class ProductGradeQuerySet(models.QuerySet):
    def for_type(self, product_type: str):
        return self.filter(product_type=product_type)


class ProductGrade(models.Model):
    """Quality grade available for a product type (lookup data)."""

    code = models.CharField(
        max_length=20,
        verbose_name=_("Code"),
    )
    name = models.CharField(
        max_length=100,
        verbose_name=_("Name"),
    )
    description = models.TextField(
        blank=True,
        verbose_name=_("Description"),
    )
    product_type = models.CharField(
        max_length=20,
        choices=ProductType.choices,
        db_index=True,
        verbose_name=_("Product Type"),
    )

    created_at = models.DateTimeField(auto_now_add=True, verbose_name=_("created at"))
    updated_at = models.DateTimeField(auto_now=True, verbose_name=_("updated at"))

    objects = ProductGradeQuerySet.as_manager()

    class Meta:
        db_table = "seatrace_product_grade"
        verbose_name = _("Product Grade")
        verbose_name_plural = _("Product Grades")
        ordering = ["product_type", "code"]
        constraints = [
            models.UniqueConstraint(
                fields=["code", "product_type"],
                name="seatrace_grade_code_per_type",
            ),
        ]

    def __str__(self) -> str:
        return f"Grade {self.code} - {self.name}"
