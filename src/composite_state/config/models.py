import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from composite_state.container import CompositeVector
from composite_state.units import UnitRegistry
from composite_state.utils import get_logger

logger = get_logger("composite_state.config")

YAML_SUFFIXES = {".yaml", ".yml"}


@dataclass
class CompositeStateConfig:
    """
    Describes how to assemble a composite state.

    Attributes:
        unit_type: Registered unit type name (e.g. "pendulum").
        count: Number of NaN-filled units to allocate when ``units`` is empty.
        units: Initial unit values, one flat list per unit.
        utime: Optional timestamp used when publishing the state.
    """

    unit_type: str
    count: Optional[int] = None
    units: List[List[float]] = field(default_factory=list)
    utime: Optional[int] = None

    @classmethod
    def from_file(cls, path: Path) -> "CompositeStateConfig":
        path = Path(path)
        text = path.read_text()
        if path.suffix.lower() in YAML_SUFFIXES:
            try:
                data = yaml.safe_load(text)
            except yaml.YAMLError as exc:
                raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
        else:
            try:
                data = json.loads(text)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError(f"Config {path} must contain a mapping")
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict) -> "CompositeStateConfig":
        try:
            unit_type = str(data["unit_type"]).strip()
        except KeyError as exc:
            raise ValueError(f"Composite state config missing required field {exc}") from exc
        if not unit_type:
            raise ValueError("unit_type cannot be empty")
        units: List[List[float]] = []
        for idx, entry in enumerate(data.get("units") or []):
            if not isinstance(entry, (list, tuple)):
                raise ValueError(f"Unit entry {idx} must be a list of numbers")
            try:
                units.append([float(v) for v in entry])
            except (TypeError, ValueError) as exc:
                raise ValueError(f"Unit entry {idx} contains a non-numeric value") from exc
        count = data.get("count")
        if count is not None:
            count = int(count)
            if units and count != len(units):
                raise ValueError(f"count {count} does not match {len(units)} configured units")
        utime = data.get("utime")
        return cls(
            unit_type=unit_type,
            count=count,
            units=units,
            utime=int(utime) if utime is not None else None,
        )


def build_composite(config: CompositeStateConfig, registry: Optional[UnitRegistry] = None) -> CompositeVector:
    """Instantiate the composite described by ``config``."""
    registry = registry or UnitRegistry()
    unit_type = registry.get(config.unit_type)
    composite_cls = CompositeVector.of(unit_type)
    if config.units:
        vector = composite_cls()
        for values in config.units:
            vector.append(unit_type.from_flat(values))
    elif config.count is not None:
        vector = composite_cls(count=config.count)
    else:
        vector = composite_cls()
    logger.info(
        "Built %s with count=%d size=%d", composite_cls.__name__, vector.count(), vector.size()
    )
    return vector
