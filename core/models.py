# =============================================================================
# core/models.py  -  Data Models (the "nouns" of the system)
# =============================================================================
#
# These types define the shape of every piece of information that flows from
# the RDW open-data API to the text an agent finally reads.
#
#   DatasetRow     -> one raw JSON object from an RDW dataset (all optional)
#   VehicleRecord  -> the merged, canonical view of one vehicle
#   VehicleDetails -> a record plus the auxiliary rows it was built next to
#   Report         -> ordered sections of "Label: value" lines
#
# DESIGN PRINCIPLE - "Nothing is guaranteed":
#   RDW datasets are loosely schematized.  Any column may be missing, empty
#   or renamed between dataset versions.  Every field below is therefore
#   Optional, and nothing in core/ ever assumes presence.
# =============================================================================

import re
from dataclasses import dataclass, field
from typing import Any, Optional

# A raw row as returned by the Socrata JSON endpoint.  Treated as read-only.
DatasetRow = dict[str, Any]

_KENTEKEN_SEPARATORS = re.compile(r"[\s-]+")


class InvalidQueryError(ValueError):
    """Raised when caller input is rejected before any request is made."""


def normalize_kenteken(raw: str) -> str:
    """Normalize a license plate: drop whitespace and hyphens, upper-case.

    "n-500 fv" -> "N500FV".  Applying it twice gives the same result.
    """
    return _KENTEKEN_SEPARATORS.sub("", raw or "").upper()


# -----------------------------------------------------------------------------
# VehicleRecord - the canonical, merged view of one vehicle
# -----------------------------------------------------------------------------
# The set of fields is FIXED.  Each one is filled by the normalizer from a
# precedence list of RDW columns (see core/normalizer.py).  A field that none
# of its source columns provide stays None; the "Unknown" text is a
# rendering concern, not a data concern.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class VehicleRecord:
    """Merged registration data for a single vehicle."""

    # --- Identity ---
    license_plate: Optional[str] = None
    vehicle_type: Optional[str] = None          # voertuigsoort, e.g. "Personenauto"
    brand: Optional[str] = None
    model: Optional[str] = None                 # handelsbenaming (trade name)
    variant: Optional[str] = None
    version: Optional[str] = None               # uitvoering
    vehicle_type_code: Optional[str] = None
    european_category: Optional[str] = None     # e.g. "M1"

    # --- Appearance ---
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    body_type: Optional[str] = None             # inrichting, e.g. "hatchback"
    doors: Optional[str] = None
    wheels: Optional[str] = None

    # --- Capacity ---
    seats: Optional[str] = None
    standing_places: Optional[str] = None
    wheelchair_places: Optional[str] = None

    # --- Engine ---
    cylinders: Optional[str] = None
    displacement: Optional[str] = None          # cc
    net_max_power: Optional[str] = None         # kW
    power_mass_ratio: Optional[str] = None      # kW/kg
    nominal_continuous_power: Optional[str] = None
    max_speed: Optional[str] = None             # km/h

    # --- Masses (all kg) ---
    empty_mass: Optional[str] = None
    curb_mass: Optional[str] = None
    max_vehicle_mass: Optional[str] = None
    technical_max_mass: Optional[str] = None
    max_towing_unbraked: Optional[str] = None
    max_towing_braked: Optional[str] = None
    max_combination_mass: Optional[str] = None
    alt_drive_mass: Optional[str] = None

    # --- Dimensions (all cm) ---
    length: Optional[str] = None
    width: Optional[str] = None
    height: Optional[str] = None
    wheelbase: Optional[str] = None

    # --- Registration ---
    first_admission: Optional[str] = None
    first_nl_registration: Optional[str] = None
    current_registration: Optional[str] = None
    type_approval_number: Optional[str] = None

    # --- Inspection ---
    apk_expiry: Optional[str] = None
    tachograph_expiry: Optional[str] = None
    odometer_judgement: Optional[str] = None

    # --- Financial (euro) ---
    catalog_price: Optional[str] = None
    gross_bpm: Optional[str] = None

    # --- Status indicators ---
    fuel_efficiency_label: Optional[str] = None
    export_indicator: Optional[str] = None
    taxi_indicator: Optional[str] = None
    wam_insured: Optional[str] = None
    open_recall: Optional[str] = None

    # --- Odometer ---
    odometer_year: Optional[str] = None         # jaar_laatste_registratie_tellerstand


# -----------------------------------------------------------------------------
# VehicleDetails - what a full lookup returns
# -----------------------------------------------------------------------------
# The auxiliary lists are NOT merged into the record: a vehicle can have two
# fuels (hybrids) and several axles, and the report lists each one.
# An empty list means "no data for this category" - whether the dataset
# simply had no rows or the request failed is deliberately not exposed.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class VehicleDetails:
    """A merged record plus the auxiliary RDW rows for the same plate."""

    record: VehicleRecord
    fuel: list[DatasetRow] = field(default_factory=list)
    axles: list[DatasetRow] = field(default_factory=list)
    bodies: list[DatasetRow] = field(default_factory=list)


@dataclass(frozen=True)
class ReportSection:
    """A block of "Label: value" lines, usually under an upper-case title."""

    title: Optional[str]
    lines: tuple[str, ...] = ()
    always_shown: bool = False

    def to_text(self) -> str:
        body = "\n".join(self.lines)
        if self.title is None:
            return body
        return f"{self.title}:\n{body}"


@dataclass(frozen=True)
class Report:
    """An ordered, immutable text report.

    Sections without lines are dropped when the report is serialized,
    unless they are marked always_shown.
    """

    heading: Optional[str] = None
    sections: tuple[ReportSection, ...] = ()
    footer: Optional[str] = None

    def visible_sections(self) -> list[ReportSection]:
        return [s for s in self.sections if s.lines or s.always_shown]

    def to_text(self) -> str:
        parts = []
        if self.heading:
            parts.append(self.heading)
        parts.extend(section.to_text() for section in self.visible_sections())
        if self.footer:
            parts.append(self.footer)
        return "\n\n".join(parts)
