"""Observation submission request model.

Pydantic model for the draft an observer submits. Schema errors (wrong
types, unknown enum values, unexpected fields) are caught by pydantic;
vocabulary and cross-field rules are reported by ``problems()`` so every
issue reaches the caller in one pass.

Rules:
1. VALIDATE EARLY - Nothing is uploaded or written until the draft is clean
2. REPORT EVERYTHING - Collect all problems, don't stop at the first
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from sbo_core.domain.errors.observation import ValidationError
from sbo_core.domain.models.catalog import DEFAULT_CATALOG, ObservationCatalog
from sbo_core.domain.models.observation import Focus, SBOKind


class ObservationDraft(BaseModel):
    """Request to submit a new observation.

    Attributes:
        kind: safe, unsafe or near-miss.
        focus: act or condition (default: act).
        location: Plant location from the catalog.
        unit: Unit from the catalog.
        area_manager: Area manager from the catalog.
        category: Category from the catalog.
        sub_category: Subcategory belonging to category.
        description: What was observed (required).
        suggested_solution: Proposed remedy (required unless safe).
        image: Optional image as raw bytes or a data URL.
        is_actionable: Overrides the default (actionable iff not safe).
        action_deadline: Optional remediation deadline.
    """

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True, extra="forbid")

    kind: SBOKind = Field(..., description="Severity: safe, unsafe or near-miss")
    focus: Focus = Field(default=Focus.ACT, description="Act or condition")
    location: str = Field(default="", max_length=200)
    unit: str = Field(default="", max_length=200)
    area_manager: str = Field(default="", max_length=200)
    category: str = Field(default="", max_length=200)
    sub_category: str = Field(default="", max_length=200)
    description: str = Field(default="", max_length=10_000)
    suggested_solution: str = Field(default="", max_length=10_000)
    image: bytes | str | None = Field(default=None)
    is_actionable: bool | None = Field(default=None)
    action_deadline: datetime | None = Field(default=None)

    def problems(self, catalog: ObservationCatalog = DEFAULT_CATALOG) -> list[str]:
        """Return every rule the draft violates.

        Args:
            catalog: Vocabularies to validate against.

        Returns:
            Guidance messages; empty when the draft is valid.
        """
        errors: list[str] = []

        if not self.location:
            errors.append("Location must be selected.")
        elif self.location not in catalog.locations:
            errors.append(f"Location '{self.location}' is not a recognized location.")

        if not self.unit:
            errors.append("Unit must be selected.")
        elif self.unit not in catalog.units:
            errors.append(f"Unit '{self.unit}' is not a recognized unit.")

        if not self.area_manager:
            errors.append("Area Manager must be selected.")
        elif not catalog.is_area_manager(self.area_manager):
            errors.append(
                f"Area Manager '{self.area_manager}' is not a recognized area manager."
            )

        category_known = self.category in catalog.categories
        if not self.category:
            errors.append("Category must be selected.")
        elif not category_known:
            errors.append(f"Category '{self.category}' is not a recognized category.")

        if not self.sub_category:
            errors.append("Sub Category must be selected.")
        elif category_known and self.sub_category not in catalog.subcategories(
            self.category
        ):
            errors.append(
                f"Sub Category '{self.sub_category}' does not belong to "
                f"category '{self.category}'."
            )

        if not self.description:
            errors.append("Observation description is required.")

        if self.kind != SBOKind.SAFE and not self.suggested_solution:
            errors.append(
                "Suggested Solution is mandatory for unsafe acts or near misses."
            )

        return errors


def parse_draft(data: ObservationDraft | Mapping[str, Any]) -> ObservationDraft:
    """Coerce caller input into an ObservationDraft.

    Raises:
        ValidationError: If the input fails schema validation.
    """
    if isinstance(data, ObservationDraft):
        return data
    try:
        return ObservationDraft.model_validate(dict(data))
    except PydanticValidationError as e:
        raise ValidationError(
            f"{'.'.join(str(part) for part in err['loc']) or 'draft'}: {err['msg']}"
            for err in e.errors()
        ) from e
