"""
Provenance Tracking

Step-by-step calculation trace with a SHA-256 hash so that two runs can be
compared for bit-perfect reproducibility.

The hash covers the calculator identity, inputs, every step and the
outputs. Wall-clock fields (timestamp, elapsed time) are recorded but kept
out of the hash, so identical inputs always give identical hashes.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from boilersim.determinism import DeterministicClock, content_hash, deterministic_id


def _stringify(values: Dict[str, Any]) -> Dict[str, str]:
    return {k: str(v) for k, v in values.items()}


@dataclass
class CalculationStep:
    """
    Individual calculation step.

    Attributes:
        step_number: Sequential step identifier
        operation: Operation performed (multiply, divide, lookup, ...)
        description: Human-readable description of the step
        inputs: Input values used
        output_name: Name of the output variable
        output_value: Calculated result
        formula: Formula used (text)
    """
    step_number: int
    operation: str
    description: str
    inputs: Dict[str, Any]
    output_name: str
    output_value: Any
    formula: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert step to dictionary for hashing."""
        return {
            "step_number": self.step_number,
            "operation": self.operation,
            "description": self.description,
            "inputs": _stringify(self.inputs),
            "output_name": self.output_name,
            "output_value": str(self.output_value),
            "formula": self.formula,
        }


@dataclass
class ProvenanceRecord:
    """
    Complete provenance record for one calculation.

    Attributes:
        calculation_id: Content-derived identifier
        calculator_name: Name of the calculator
        calculator_version: Version of the calculator
        timestamp_utc: When the calculation finished (not hashed)
        inputs: All input parameters
        steps: Calculation steps
        outputs: Final outputs
        calculation_time_ms: Elapsed time (not hashed)
        metadata: Additional metadata
        provenance_hash: SHA-256 over identity, inputs, steps and outputs
    """
    calculation_id: str
    calculator_name: str
    calculator_version: str
    timestamp_utc: str
    inputs: Dict[str, Any]
    steps: List[CalculationStep]
    outputs: Dict[str, Any]
    calculation_time_ms: float = 0.0
    metadata: Dict[str, Any] = field(default_factory=dict)
    provenance_hash: str = ""

    def __post_init__(self):
        if not self.provenance_hash:
            self.provenance_hash = self._calculate_hash()

    def _calculate_hash(self) -> str:
        return content_hash({
            "calculator_name": self.calculator_name,
            "calculator_version": self.calculator_version,
            "inputs": _stringify(self.inputs),
            "steps": [step.to_dict() for step in self.steps],
            "outputs": _stringify(self.outputs),
        })

    def verify_integrity(self) -> bool:
        """Recalculate the hash and compare with the stored one."""
        return self._calculate_hash() == self.provenance_hash

    def to_audit_record(self) -> Dict[str, Any]:
        """Generate a serializable audit record."""
        return {
            "calculation_id": self.calculation_id,
            "calculator_name": self.calculator_name,
            "calculator_version": self.calculator_version,
            "timestamp_utc": self.timestamp_utc,
            "inputs": self.inputs,
            "calculation_steps": [step.to_dict() for step in self.steps],
            "outputs": self.outputs,
            "provenance_hash": self.provenance_hash,
            "calculation_time_ms": self.calculation_time_ms,
            "integrity_verified": self.verify_integrity(),
            "metadata": self.metadata,
        }


class ProvenanceTracker:
    """
    Collects steps for a single calculation.

    A tracker is used for one calculation and then discarded; create one
    per call so concurrent calculations never share a tracker.

    Example:
        >>> tracker = ProvenanceTracker("BoilerSimulator", "1.0.0")
        >>> tracker.set_inputs({"fuel_quantity": 1000, "heat_content": 8000})
        >>> tracker.add_step(
        ...     operation="multiply",
        ...     description="Combustion energy",
        ...     inputs={"fuel_quantity": 1000, "heat_content": 8000},
        ...     output_name="energy",
        ...     output_value=8000000,
        ...     formula="energy = quantity * heat_content",
        ... )
        >>> tracker.set_outputs({"energy": 8000000})
        >>> record = tracker.finalize()
    """

    def __init__(
        self,
        calculator_name: str,
        calculator_version: str,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        self.calculator_name = calculator_name
        self.calculator_version = calculator_version
        self.metadata = metadata or {}
        self._inputs: Dict[str, Any] = {}
        self._outputs: Dict[str, Any] = {}
        self._steps: List[CalculationStep] = []
        self._start_time = time.perf_counter()

    @property
    def steps(self) -> List[CalculationStep]:
        return list(self._steps)

    def set_inputs(self, inputs: Dict[str, Any]) -> None:
        self._inputs = dict(inputs)

    def set_outputs(self, outputs: Dict[str, Any]) -> None:
        self._outputs = dict(outputs)

    def add_step(
        self,
        operation: str,
        description: str,
        inputs: Dict[str, Any],
        output_name: str,
        output_value: Any,
        formula: str = "",
    ) -> CalculationStep:
        """Append a step; step numbers are assigned sequentially from 1."""
        step = CalculationStep(
            step_number=len(self._steps) + 1,
            operation=operation,
            description=description,
            inputs=dict(inputs),
            output_name=output_name,
            output_value=output_value,
            formula=formula,
        )
        self._steps.append(step)
        return step

    def finalize(self) -> ProvenanceRecord:
        """Build the provenance record."""
        calculation_time_ms = (time.perf_counter() - self._start_time) * 1000
        calculation_id = deterministic_id(
            {
                "calculator": self.calculator_name,
                "version": self.calculator_version,
                "inputs": _stringify(self._inputs),
            },
            prefix="calc_",
        )
        return ProvenanceRecord(
            calculation_id=calculation_id,
            calculator_name=self.calculator_name,
            calculator_version=self.calculator_version,
            timestamp_utc=DeterministicClock.utcnow().isoformat(),
            inputs=self._inputs,
            steps=list(self._steps),
            outputs=self._outputs,
            calculation_time_ms=calculation_time_ms,
            metadata=self.metadata,
        )


def verify_reproducibility(first: ProvenanceRecord, second: ProvenanceRecord) -> bool:
    """True if both records are intact and describe the identical calculation."""
    return (
        first.provenance_hash == second.provenance_hash
        and first.verify_integrity()
        and second.verify_integrity()
    )


__all__ = [
    "CalculationStep",
    "ProvenanceRecord",
    "ProvenanceTracker",
    "verify_reproducibility",
]
