# =============================================================================
# core/normalizer.py  -  Field precedence & schema-drift tolerance
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns raw RDW rows into a VehicleRecord.  For every canonical field there
#   is an ORDERED list of places the value may live; the first one that
#   holds a non-empty value wins.
#
# WHY A TABLE?
#   RDW has renamed columns over the years (and kept a misspelled one for
#   backward compatibility).  Some values also exist in more than one
#   dataset - net power is in both the base and the fuel dataset, and the
#   fuel dataset is the more reliable one.  Writing these rules as
#   `a or b or c` inline would scatter them over the renderer.  One table
#   keeps them in a single, testable place.
#
# WHAT IT DOES NOT DO:
#   It never invents defaults.  A field with no source value stays None.
# =============================================================================

from dataclasses import fields
from typing import Any, Mapping, Optional

from core.models import DatasetRow, VehicleRecord

BASE = "base"
FUEL = "fuel"


def _base(*columns: str) -> tuple[tuple[str, str], ...]:
    return tuple((BASE, column) for column in columns)


# Canonical field -> ordered (source, column) pairs.  Left to right, first
# present value wins.
FIELD_PRECEDENCE: dict[str, tuple[tuple[str, str], ...]] = {
    "license_plate": _base("kenteken"),
    "vehicle_type": _base("voertuigsoort"),
    "brand": _base("merk"),
    "model": _base("handelsbenaming"),
    "variant": _base("variant"),
    "version": _base("uitvoering"),
    "vehicle_type_code": _base("type"),
    "european_category": _base("europese_voertuigcategorie"),

    "primary_color": _base("eerste_kleur", "kleur"),
    "secondary_color": _base("tweede_kleur"),
    "body_type": _base("inrichting"),
    "doors": _base("aantal_deuren"),
    "wheels": _base("aantal_wielen"),

    "seats": _base("aantal_zitplaatsen"),
    "standing_places": _base("aantal_staanplaatsen"),
    "wheelchair_places": _base("aantal_rolstoelplaatsen"),

    "cylinders": _base("aantal_cilinders"),
    "displacement": _base("cilinderinhoud"),
    # The fuel/emissions dataset carries the authoritative power rating.
    "net_max_power": ((FUEL, "nettomaximumvermogen"), (BASE, "nettomaximumvermogen")),
    "power_mass_ratio": _base("vermogen_massarijklaar"),
    "nominal_continuous_power": (
        (FUEL, "nominaal_continu_maximumvermogen"),
        (BASE, "nominaal_continu_maximumvermogen"),
    ),
    "max_speed": _base("maximale_constructiesnelheid"),

    "empty_mass": _base("massa_ledig_voertuig"),
    "curb_mass": _base("massa_rijklaar"),
    "max_vehicle_mass": _base("toegestane_maximum_massa_voertuig", "maximum_massa_voertuig"),
    "technical_max_mass": _base("technische_max_massa_voertuig"),
    "max_towing_unbraked": _base("maximum_massa_trekken_ongeremd"),
    # "maximum_massa_trekken_geremd" is the legacy misspelling.
    "max_towing_braked": _base("maximum_trekken_massa_geremd", "maximum_massa_trekken_geremd"),
    "max_combination_mass": _base("maximum_massa_samenstelling"),
    "alt_drive_mass": _base("massa_alt_aandr"),

    "length": _base("lengte"),
    "width": _base("breedte"),
    "height": _base("hoogte_voertuig"),
    "wheelbase": _base("wielbasis"),

    "first_admission": _base("datum_eerste_toelating"),
    "first_nl_registration": _base("datum_eerste_tenaamstelling_in_nederland"),
    "current_registration": _base("datum_tenaamstelling"),
    "type_approval_number": _base("typegoedkeuringsnummer", "type_goedkeuring_nummer"),

    "apk_expiry": _base("vervaldatum_apk"),
    "tachograph_expiry": _base("vervaldatum_tachograaf"),
    "odometer_judgement": _base("tellerstandoordeel"),

    "catalog_price": _base("catalogusprijs"),
    "gross_bpm": _base("bruto_bpm"),

    "fuel_efficiency_label": _base("zuinigheidsclassificatie", "zuinigheidslabel"),
    "export_indicator": _base("export_indicator", "exportindicator"),
    "taxi_indicator": _base("taxi_indicator"),
    "wam_insured": _base("wam_verzekerd"),
    "open_recall": _base("openstaande_terugroepactie_indicator"),

    "odometer_year": _base("jaar_laatste_registratie_tellerstand"),
}


def present(value: Any) -> Optional[str]:
    """Return `value` as a stripped string, or None when it's absent/blank."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def resolve_field(name: str, sources: Mapping[str, Optional[DatasetRow]]) -> Optional[str]:
    """Resolve one canonical field against the available source rows.

    Args:
        name: A VehicleRecord field name (a key of FIELD_PRECEDENCE).
        sources: Source name ("base", "fuel") -> row, or None when that
            dataset had no data.

    Returns:
        The first present value in precedence order, or None.
    """
    for source, column in FIELD_PRECEDENCE[name]:
        row = sources.get(source)
        if not row:
            continue
        value = present(row.get(column))
        if value is not None:
            return value
    return None


def build_record(base_row: DatasetRow, fuel_row: Optional[DatasetRow] = None) -> VehicleRecord:
    """Merge a base-dataset row (and optionally the first fuel row) into a record."""
    sources = {BASE: base_row, FUEL: fuel_row}
    values = {f.name: resolve_field(f.name, sources) for f in fields(VehicleRecord)}
    return VehicleRecord(**values)
