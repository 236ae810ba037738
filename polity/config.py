"""Configuration settings for group and rivalry detection.

Uses Pydantic Settings for validation and environment variable support.
All settings can be overridden via POLITY_* environment variables.
"""

from pydantic_settings import BaseSettings


class DetectionConfig(BaseSettings):
    """Thresholds and guards for the group/rivalry detection pass."""

    # Trust graph
    trust_threshold: float = 0.3  # mutual trust must exceed this (strict)
    enemy_threshold: float = -0.3  # trust below this marks an enemy
    min_group_size: int = 3

    # Leadership
    extraversion_weight: float = 0.2

    # Continuity
    continuity_threshold: float = 0.5  # Jaccard overlap must exceed this
    group_name_prefix: str = "Alliance"

    # Rivalry classification (average cross-group trust)
    hostile_threshold: float = -0.3
    tense_threshold: float = -0.1
    friendly_threshold: float = 0.1
    allied_threshold: float = 0.3

    # Clique search guards (0 = disabled)
    max_clique_vertices: int = 0  # vertices left after core pruning
    max_clique_calls: int = 100_000  # Bron-Kerbosch recursive calls per epoch

    model_config = {"env_prefix": "POLITY_"}
