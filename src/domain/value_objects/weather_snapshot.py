"""Weather snapshot value object."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True, kw_only=True)
class WeatherSnapshot:
    """Current weather at a coordinate pair.

    Attributes:
        type: Condition group ("Clear", "Rain", "Clouds").
        temperature: Temperature in the configured units.
        icon: Provider icon identifier ("01d").
    """

    type: str
    temperature: float
    icon: str

    def to_dict(self) -> dict[str, Any]:
        """Shape merged into the session record: {type, temperature, icon}."""
        return {
            "type": self.type,
            "temperature": self.temperature,
            "icon": self.icon,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WeatherSnapshot":
        """Rebuild a snapshot from its dict form.

        Args:
            data: Dict with type, temperature and icon keys.

        Returns:
            WeatherSnapshot instance.
        """
        return cls(
            type=str(data["type"]),
            temperature=float(data["temperature"]),
            icon=str(data["icon"]),
        )
