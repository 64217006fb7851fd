"""
boilersim - Boiler Calculators

Deterministic stage calculations for the boiler pipeline, pluggable
combustion sub-models, and provenance tracking.

Available modules:
- stages: furnace, heat_transfer, steam_generation, generate_flue_gases, aggregate
- combustion: CombustionModel interface and the reference placeholder model
- provenance: ProvenanceTracker and hash-verified ProvenanceRecord
"""

from .combustion import (
    CombustionModel,
    ReferenceCombustionModel,
    REFERENCE_MODEL,
    REFERENCE_COMPOSITION,
    REFERENCE_EMISSIONS,
)

from .provenance import (
    CalculationStep,
    ProvenanceRecord,
    ProvenanceTracker,
    verify_reproducibility,
)

from .stages import (
    HEAT_TRANSFER_FRACTION,
    ieee_divide,
    furnace,
    heat_transfer,
    steam_heat_balance,
    steam_from_balance,
    steam_generation,
    generate_flue_gases,
    aggregate,
)

__all__ = [
    # Combustion sub-models
    "CombustionModel",
    "ReferenceCombustionModel",
    "REFERENCE_MODEL",
    "REFERENCE_COMPOSITION",
    "REFERENCE_EMISSIONS",
    # Provenance tracking
    "CalculationStep",
    "ProvenanceRecord",
    "ProvenanceTracker",
    "verify_reproducibility",
    # Stages
    "HEAT_TRANSFER_FRACTION",
    "ieee_divide",
    "furnace",
    "heat_transfer",
    "steam_heat_balance",
    "steam_from_balance",
    "steam_generation",
    "generate_flue_gases",
    "aggregate",
]
