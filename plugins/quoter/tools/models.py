"""
Data models for the quoter plugin.
"""

from dataclasses import dataclass

from core.errors import ConfigurationError


def _string_tuple(value, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigurationError(f"[quoter] '{field_name}' must be a list of strings")
    return tuple(value)


@dataclass(frozen=True)
class QuoteConfig:
    """Triggers, frequency and responses for one set of quotes."""
    triggers: tuple[str, ...]
    frequency: float
    responses: tuple[str, ...]

    @classmethod
    def from_dict(cls, data: dict) -> "QuoteConfig":
        """
        Build a validated QuoteConfig.

        Missing triggers or frequency are allowed (the quotes just never
        trigger), but responses must be present and non-empty.

        Raises:
            ConfigurationError: if the block is invalid
        """
        if not isinstance(data, dict):
            raise ConfigurationError("[quoter] Each quote config must be an object")

        keys = {k.lower(): v for k, v in data.items()}

        responses = _string_tuple(keys.get("responses"), "responses")
        if not responses:
            raise ConfigurationError(
                "[quoter] Error loading QuoteConfig, missing or 0-length responses"
            )

        frequency = keys.get("frequency", 0.0)
        if isinstance(frequency, bool):
            raise ConfigurationError("[quoter] 'frequency' must be a number")
        try:
            frequency = float(frequency)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"[quoter] 'frequency' must be a number: {e}") from e
        if not 0.0 <= frequency <= 1.0:
            raise ConfigurationError(
                f"[quoter] 'frequency' must be between 0 and 1, got {frequency}"
            )

        return cls(
            triggers=_string_tuple(keys.get("triggers"), "triggers"),
            frequency=frequency,
            responses=responses,
        )
