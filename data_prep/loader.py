"""
Load cash-flow configurations from JSON.

Document shape:

    {
      "name": "Buy",
      "startPeriod": 1,
      "endPeriod": 48,
      "sims": 1000,
      "cashflows": [
        {
          "name": "Revenues",
          "isOutflow": false,
          "periods": "1-48",
          "dist": {"type": "tri", "min": 50, "max": 100, "mode": 70},
          "growth": {
            "name": "revenueGrowth",
            "periods": "13,25,37",
            "dist": {"type": "tri", "min": -0.15, "max": 0.35, "mode": 0.15}
          }
        }
      ]
    }

Distribution types: fixed {val}, tri / tri_one / pert / pert_one {min, max, mode},
uniform {min, max}. Optional top-level "workers" and "seed" set the defaults
for parallelism and reproducibility.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from core.config import SimulationConfig
from core.errors import ConfigurationError
from core.schema import CashflowDescriptor, GrowthDescriptor
from distributions.base import Distribution
from distributions.variants import DISTRIBUTION_TYPES, Fixed, Uniform


class FixedModel(BaseModel):
    type: Literal["fixed"]
    val: float

    def to_distribution(self) -> Distribution:
        return Fixed(self.val)


class ThreePointModel(BaseModel):
    type: Literal["tri", "tri_one", "pert", "pert_one"]
    min: float
    max: float
    mode: float

    def to_distribution(self) -> Distribution:
        return DISTRIBUTION_TYPES[self.type](self.min, self.max, self.mode)


class UniformModel(BaseModel):
    type: Literal["uniform"]
    min: float
    max: float

    def to_distribution(self) -> Distribution:
        return Uniform(self.min, self.max)


DistributionModel = Annotated[
    Union[FixedModel, ThreePointModel, UniformModel],
    Field(discriminator="type"),
]


class GrowthModel(BaseModel):
    name: str = ""
    periods: str
    dist: DistributionModel


class CashflowModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    is_outflow: bool = Field(default=False, alias="isOutflow")
    periods: str
    dist: DistributionModel
    growth: Optional[GrowthModel] = None

    def to_descriptor(self) -> CashflowDescriptor:
        growth = None
        if self.growth is not None:
            growth = GrowthDescriptor(
                periods=self.growth.periods,
                dist=self.growth.dist.to_distribution(),
                name=self.growth.name,
            )
        return CashflowDescriptor(
            name=self.name,
            is_outflow=self.is_outflow,
            periods=self.periods,
            dist=self.dist.to_distribution(),
            growth=growth,
        )


class ConfigModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    start_period: int = Field(alias="startPeriod")
    end_period: int = Field(alias="endPeriod")
    sims: int
    workers: Optional[int] = None
    seed: Optional[int] = None
    cashflows: List[CashflowModel] = Field(min_length=1)


def parse_config(
    source: Union[str, bytes, Mapping[str, Any]],
    *,
    n_workers: Optional[int] = None,
    seed: Optional[int] = None,
) -> SimulationConfig:
    """
    Decode a JSON document (text or already-parsed mapping) into a SimulationConfig.

    ``n_workers`` / ``seed`` override the document's "workers" / "seed".
    Shape errors raise ConfigurationError; distribution constraint violations
    raise ConstructionError.
    """
    try:
        if isinstance(source, Mapping):
            model = ConfigModel.model_validate(source)
        else:
            model = ConfigModel.model_validate_json(source)
    except ValidationError as exc:
        raise ConfigurationError(f"invalid cash-flow configuration:\n{exc}") from exc

    workers = n_workers if n_workers is not None else model.workers
    run_seed = seed if seed is not None else model.seed

    return SimulationConfig(
        start_period=model.start_period,
        end_period=model.end_period,
        n_sims=model.sims,
        cashflows=tuple(cf.to_descriptor() for cf in model.cashflows),
        name=model.name,
        n_workers=workers if workers is not None else 1,
        seed=run_seed if run_seed is not None else 7,
    )


def load_config(
    path: Union[str, Path],
    *,
    n_workers: Optional[int] = None,
    seed: Optional[int] = None,
) -> SimulationConfig:
    """Read and decode a JSON configuration file."""
    text = Path(path).read_text(encoding="utf-8")
    return parse_config(text, n_workers=n_workers, seed=seed)
