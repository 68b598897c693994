"""Base classes and type system for offering domain models.

This module provides the foundational types and base classes used throughout
the offering schema system.
"""

from decimal import Decimal
from typing import Annotated
from pydantic import BaseModel, Field, ConfigDict

# =============================================================================
# Base Models
# =============================================================================

class DomainModel(BaseModel):
    """Base class for mutable domain input models.

    Provides common configuration for Pydantic models that collect user input:
    - Validation on assignment for runtime safety
    - Support for Decimal types
    - Enum value serialization
    """

    model_config = ConfigDict(
        validate_assignment=True,
        use_enum_values=True,
        arbitrary_types_allowed=True,
    )


class ValueModel(BaseModel):
    """Base class for immutable value objects.

    Tiers, calculations, investor data, form states and stored submissions are
    never mutated in place. Every update produces a new instance (use
    ``model_copy(update=...)``).
    """

    model_config = ConfigDict(
        frozen=True,
        use_enum_values=True,
        arbitrary_types_allowed=True,
    )


# =============================================================================
# Type Aliases - Numeric
# =============================================================================

MoneyAmount = Annotated[
    Decimal,
    Field(ge=0, description="Currency amount (non-negative)")
]

SharePrice = Annotated[
    Decimal,
    Field(gt=0, description="Price per share in currency units")
]

ShareCount = Annotated[
    int,
    Field(ge=0, description="Whole number of shares (non-negative)")
]

BonusPercentage = Annotated[
    int,
    Field(ge=0, description="Bonus as whole percent of base shares (e.g., 80 = 80%)")
]
