import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Protocol, Tuple

from gridLookup.config import LookupConfig
from gridLookup.session import LookupSession

logger = logging.getLogger(__name__)


class HostSite(Protocol):
    """Message sink offered by a host that drives the lookup."""

    def message(self, level: int, text: str) -> None:
        ...


@dataclass(frozen=True)
class ConfigAttribute:
    name: str
    type: type
    description: str


class HostAdapter:
    """
    Plugin-style front end for a simulation host.

    The host hands over geodetic positions in radians for every evaluation
    event; values are looked up in degrees. `MIN_VALUE` is registration
    metadata for the host, the adapter itself never clamps a result.
    """

    DISPLAY_NAME = "ReadFromFile"
    DIMENSION = "Unitless"
    MIN_VALUE = 0.0

    CONFIG_ATTRIBUTES: Tuple[ConfigAttribute, ...] = (
        ConfigAttribute("ExternalFilePath", str, "ExternalFilePath"),
        ConfigAttribute("DebugMode", bool, "Turn debug messages on or off"),
        ConfigAttribute(
            "MessageInterval", int,
            "The interval at which to send messages during propagation in Debug mode",
        ),
    )

    def __init__(self, session: Optional[LookupSession] = None):
        self.session = session or LookupSession()
        self.site: Optional[HostSite] = None

    # --------------------------------------------------------------------- #
    # configuration
    # --------------------------------------------------------------------- #
    @property
    def external_file_path(self) -> Optional[str]:
        return self.session.external_file_path

    @external_file_path.setter
    def external_file_path(self, path: Optional[str]) -> None:
        self.session.set_external_file_path(path)

    @property
    def debug_mode(self) -> bool:
        return self.session.config.debug_mode

    @debug_mode.setter
    def debug_mode(self, value: bool) -> None:
        self.session.config.debug_mode = bool(value)

    @property
    def message_interval(self) -> int:
        return self.session.config.message_interval

    @message_interval.setter
    def message_interval(self, value: int) -> None:
        if value < 1:
            raise ValueError("message_interval must be at least 1")
        self.session.config.message_interval = int(value)

    @classmethod
    def from_config(cls, config: LookupConfig) -> "HostAdapter":
        return cls(LookupSession(config))

    def plugin_config(self) -> List[ConfigAttribute]:
        return list(self.CONFIG_ATTRIBUTES)

    def verify_plugin_config(self) -> Tuple[bool, str]:
        return True, "Ok"

    # --------------------------------------------------------------------- #
    # lifecycle
    # --------------------------------------------------------------------- #
    def init(self, site: Optional[HostSite] = None) -> bool:
        self.site = site
        self._debug("Init()")
        return True

    def pre_compute(self) -> bool:
        self._debug("PreCompute()")
        return True

    def evaluate(self, lat_rad: float, lon_rad: float) -> float:
        """Return the value at a position given in radians."""
        if not self.session.is_loaded:
            # hosts start every result at 0.0 and keep it when nothing is loaded
            self.message(logging.WARNING, f"{self.DISPLAY_NAME}: no external file loaded")
            return 0.0
        return self.session.get(math.degrees(lat_rad), math.degrees(lon_rad))

    def post_compute(self) -> bool:
        self._debug("PostCompute()")
        return True

    def free(self) -> None:
        self._debug("Free()")
        self.site = None

    # --------------------------------------------------------------------- #
    # messaging
    # --------------------------------------------------------------------- #
    def message(self, level: int, text: str) -> None:
        if self.site is not None:
            self.site.message(level, text)
        else:
            logger.log(level, text)

    def _debug(self, event: str) -> None:
        if self.debug_mode:
            self.message(logging.INFO, f"{self.DISPLAY_NAME}: {event}")
