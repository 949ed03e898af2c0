"""
Dataset row model — one precomputed cell of the labor-market table.

Each ``LaborRow`` is a unique region × sector × education × age × occupation
combination carrying four survey weights (estimated worker counts).  Rows are
frozen: the dataset is loaded once per session and never mutated.

``stalled_weight`` is an independently estimated quantity in the source data.
It is NOT derived from ``low_wage_weight`` and ``underemployed_weight``.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, field_validator


class LaborRow(BaseModel):
    """One weighted row of the stranded-talent dataset.

    Attributes:
        region: MSA category, normally a ``Region`` value (never ``"All"``).
        sector: NAICS-2 industry label.
        total_weight: Estimated workers in this cell.
        low_wage_weight: Estimated low-wage workers in this cell.
        underemployed_weight: Estimated underemployed workers in this cell.
        stalled_weight: Estimated stalled workers in this cell.
        education_label: Credential level; may fall outside ``EDUCATION_ORDER``.
        occupation_label: SOC occupation name.
        age_group: Age bracket; may fall outside ``AGE_GROUPS``.
    """

    model_config = ConfigDict(frozen=True)

    region: str
    sector: str
    total_weight: float = 0.0
    low_wage_weight: float = 0.0
    underemployed_weight: float = 0.0
    stalled_weight: float = 0.0
    education_label: str
    occupation_label: str
    age_group: str

    @field_validator(
        "total_weight", "low_wage_weight", "underemployed_weight", "stalled_weight"
    )
    @classmethod
    def validate_finite_non_negative(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError(f"Weights must be finite, got {v}.")
        if v < 0:
            raise ValueError(f"Weights must be >= 0, got {v}.")
        return v
