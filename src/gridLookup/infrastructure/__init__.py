from .sampleTable import SampleTable, EligibleIndex
from .idwInterpolator import IDWInterpolator
from .lookupCache import LookupCache, cache_key
from .timer import Timer

__all__ = [
    "SampleTable",
    "EligibleIndex",
    "IDWInterpolator",
    "LookupCache",
    "cache_key",
    "Timer",
]
