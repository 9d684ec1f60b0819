"""Headache journal insight engine.

Aggregates logged headaches, medications, sleep and stress entries into
dashboard statistics, classifies medication-overuse headache risk and builds
a prioritized list of advisory insight cards.

Modules:
    config: Configuration management using pydantic-settings
    aggregator: Calendar, weekly and monthly statistics from raw entries
    risk: Medication-overuse headache risk classification
    insights: Ordered insight card composition
    loader: JSON export loading with Pandera validation

Example:
    Generate a dashboard report::

        $ uv run headache-report --data entries.json --today 2024-01-15
"""

__version__ = "0.1.0"

from .config import Settings, get_settings
from .insights import analyze_completeness, compose_insights
from .risk import assess_medication_overuse_risk

__all__ = [
    "Settings",
    "__version__",
    "analyze_completeness",
    "assess_medication_overuse_risk",
    "compose_insights",
    "get_settings",
]
