from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclasses for the booking analytics pipeline.

Category sets for the breakdowns are configuration, not code: each dimension is an
ordered tuple of (display name, BookingRecord counter field) pairs, so adding a
channel or a city only touches configuration. The defaults below reproduce the
fixed dashboard categories.
"""

__all__ = [
    "AnalyticsConfig",
    "AnomalySettings",
    "BreakdownConfig",
    "CategorySpec",
    "ExportConfig",
    "PgFloorRule",
    "EXPORT_FORMATS",
]

EXPORT_FORMATS: tuple[str, ...] = ("json", "csv", "txt")


@dataclass(frozen=True)
class CategorySpec:
    """A single breakdown category."""
    name: str  # Display name (e.g. "Website")
    field: str  # BookingRecord counter attribute (e.g. "website_booking")


@dataclass(frozen=True)
class BreakdownConfig:
    """Category sets for channel, ticket and city breakdowns."""
    channels: tuple[CategorySpec, ...] = (
        CategorySpec("Website", "website_booking"),
        CategorySpec("App", "app_booking"),
        CategorySpec("Agents", "agents_booking"),
        CategorySpec("SwaRail", "swa_rail_app_booking"),
    )
    tickets: tuple[CategorySpec, ...] = (
        CategorySpec("I-Tickets", "i_tkts"),
        CategorySpec("E-Tickets", "e_tkts"),
        CategorySpec("Tatkal", "tatkal"),
    )
    cities: tuple[CategorySpec, ...] = (
        CategorySpec("Delhi", "delhi"),
        CategorySpec("Chennai", "chennai"),
        CategorySpec("Kolkata", "kolkata"),
        CategorySpec("Mumbai", "mumbai"),
    )


@dataclass(frozen=True)
class PgFloorRule:
    """Absolute floor on pgSuccessRate, applied regardless of z-score.

    Disabled by default; the z-score scan is the canonical anomaly contract.
    """
    enabled: bool = False
    warning: float = 30.0  # below -> medium
    critical: float = 20.0  # below -> high


@dataclass(frozen=True)
class AnomalySettings:
    """z-score cut-offs for the anomaly scan (must be non-decreasing)."""
    metrics: tuple[str, ...] = ("attempts", "pgSuccessRate", "bookingVsAttempt")
    z_threshold: float = 2.0  # z above this -> anomaly (low)
    medium_z: float = 2.5  # z above this -> medium
    high_z: float = 3.0  # z above this -> high
    pg_success_floor: PgFloorRule = field(default_factory=PgFloorRule)


@dataclass(frozen=True)
class ExportConfig:
    output_directory: str = "./reports"
    formats: tuple[str, ...] = EXPORT_FORMATS


@dataclass(frozen=True)
class AnalyticsConfig:
    """Root configuration object."""
    sheet: str | int = 0  # Sheet name or 0-based index (first sheet by default)
    breakdowns: BreakdownConfig = field(default_factory=BreakdownConfig)
    anomaly: AnomalySettings = field(default_factory=AnomalySettings)
    export: ExportConfig = field(default_factory=ExportConfig)
