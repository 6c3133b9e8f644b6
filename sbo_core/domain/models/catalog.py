"""Closed vocabularies for observation fields.

Location, unit, area manager and category values are drawn from fixed
lists. A category implies a constrained set of subcategories.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

LOCATIONS: tuple[str, ...] = ("Lagos Plant", "Aba Plant", "Agbara Plant")

UNITS: tuple[str, ...] = (
    "Canline 1",
    "Canline 2",
    "Endline 1",
    "Warehouse",
    "Maintenance",
)

AREA_MANAGERS: tuple[str, ...] = (
    "John Doe",
    "Sarah Smith",
    "Michael Chen",
    "Olu Bakare",
)

CATEGORIES_MAP: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "Body Position": (
            "Ascending/Descending",
            "Grip/Force",
            "Lifting/Lowering",
            "Line of fire",
            "Pivoting/Twisting",
            "Posture",
            "Risk of burns",
            "Risk of falling",
            "Others",
        ),
        "Food Safety": (
            "CAN Contamination",
            "External Openings",
            "Access Control",
            "Raw Material Contamination",
            "Pest Infestation",
            "Personnel Hygiene",
        ),
        "Peoples Initial Reaction": (
            "Adapting the task",
            "Adjusting PPE",
            "Changing position",
            "Stopping the task",
            "Others",
        ),
        "Pollution": ("Air", "Land", "Water", "Others"),
        "PPE": (
            "Body",
            "Eyes and face",
            "Feet and legs",
            "Hands and arms",
            "Head",
            "Hearing",
            "Respiratory System",
            "Others",
        ),
        "Procedures": (
            "Adequate but no followed",
            "Inadequate",
            "LOTO/Energy Isolation",
            "There are no written procedures",
            "Others",
        ),
        "Tools & Equipment": (
            "Appropriate for the task/use",
            "Selection/condition",
            "Used correctly",
            "Others",
        ),
        "Work Environment": (
            "Appropriate for the task/use",
            "Selection/condition",
            "Used correctly",
            "Others",
        ),
    }
)


@dataclass(frozen=True)
class ObservationCatalog:
    """The closed vocabularies an observation is validated against.

    Attributes:
        locations: Recognized plant locations.
        units: Recognized units within a plant.
        area_managers: Recognized area-manager identifiers.
        categories: Category to allowed subcategories.
    """

    locations: tuple[str, ...] = LOCATIONS
    units: tuple[str, ...] = UNITS
    area_managers: tuple[str, ...] = AREA_MANAGERS
    categories: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: CATEGORIES_MAP
    )

    def subcategories(self, category: str) -> tuple[str, ...]:
        """Return the subcategories allowed for a category.

        Unknown categories have no subcategories.
        """
        return tuple(self.categories.get(category, ()))

    def is_area_manager(self, name: str) -> bool:
        return name in self.area_managers


DEFAULT_CATALOG = ObservationCatalog()
