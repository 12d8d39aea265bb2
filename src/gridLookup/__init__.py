from .config import LookupConfig
from .errors import GridLookupError, FileFormatError, InsufficientSamplesError
from .domain import Sample, SpatialValueProvider, Interpolator
from .infrastructure import SampleTable, IDWInterpolator, LookupCache, cache_key
from .session import LookupSession
from .hostAdapter import HostAdapter

__all__ = [
    "LookupConfig",
    "GridLookupError",
    "FileFormatError",
    "InsufficientSamplesError",
    "Sample",
    "SpatialValueProvider",
    "Interpolator",
    "SampleTable",
    "IDWInterpolator",
    "LookupCache",
    "cache_key",
    "LookupSession",
    "HostAdapter",
]
