from pathlib import Path
from typing import Union, Optional
import yaml
from pydantic import BaseModel, Field, model_validator

"""
Conventions:

Latitude is the first coordinate, longitude the second, both in degrees.
Distances between a query and a sample are flat Euclidean distances in degree space.

A cell holding `invalid_value` is kept in the table but never takes part in
an interpolation.

"""


class LookupConfig(BaseModel):
    # Source file, empty means nothing is loaded yet
    external_file_path: Optional[str] = None

    # Diagnostics
    debug_mode: bool = False
    message_interval: int = Field(default=100, ge=1) # trace every n-th query

    # Interpolation
    neighbours: int = Field(default=4, ge=1)
    power: float = Field(default=1.0, gt=0) # inverse-distance power
    invalid_value: float = -9999.0

    # Cache
    key_precision: int = Field(default=3, ge=0) # 3 decimals ~ 100 m at the equator
    max_cache_entries: Optional[int] = Field(default=None, ge=1) # None is unbounded

    @model_validator(mode='after')
    def normalize_path(self):
        # blank paths behave exactly like a missing path
        if self.external_file_path is not None and not self.external_file_path.strip():
            self.external_file_path = None

        return self

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "LookupConfig":
        """
        Load configuration from a YAML file.

        Args:
            path: Path to a YAML file containing the configuration.

        Returns:
            An instance of LookupConfig populated from the file.
        """
        p = Path(path).expanduser()
        if not p.exists():
            raise FileNotFoundError(f"Config file not found: {p}")
        try:
            with p.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {p}: {e}") from e

        return cls.model_validate(data)
