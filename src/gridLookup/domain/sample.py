from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Sample:
    latitude: float
    longitude: float
    value: float

    def is_valid(self, invalid_value: float = -9999.0) -> bool:
        return self.value != invalid_value
