from dataclasses import dataclass

@dataclass(slots=True)
class Duration:
    """Lifetime in seconds for the animation component on the same entity."""
    value: float
