from .sample import Sample
from .spatialValueProvider import SpatialValueProvider
from .interpolator import Interpolator

__all__ = ["Sample", "SpatialValueProvider", "Interpolator"]
