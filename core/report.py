# =============================================================================
# core/report.py  -  Composite text report rendering
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns a VehicleRecord (plus the auxiliary fuel / axle / body rows) into
#   the plain-text report the agent reads.
#
# RENDERING RULES:
#   - Every line is "Label: value".  A missing value reads "Unknown".
#   - Units ("kg", "kW", ...) are only printed next to a real value; an
#     absent mass reads "Unknown", never "Unknown kg" or " kg".
#   - Core sections (BASIC INFORMATION .. INSPECTION) are always shown.
#   - Every other section only exists if it has at least one line built
#     from data that is actually there.
#   - Repeated sub-records (two fuels, three axles) are numbered from 1 and
#     separated by a "---" line.
#
# Everything here is a pure function of its input: same record, same rows,
# same text.  Section order never depends on which request finished first.
# =============================================================================

import re
from typing import Any, Callable, Optional, Sequence

from core.models import DatasetRow, Report, ReportSection, VehicleDetails, VehicleRecord
from core.normalizer import present

UNKNOWN = "Unknown"
SUB_RECORD_SEPARATOR = "---"

_RDW_DATE = re.compile(r"^(\d{4})(\d{2})(\d{2})$")


def format_date(value: Optional[str]) -> Optional[str]:
    """RDW stores dates as YYYYMMDD; show them as YYYY-MM-DD."""
    if value is None:
        return None
    match = _RDW_DATE.match(value)
    if not match:
        return value
    return "-".join(match.groups())


def _value(value: Any, unit: Optional[str] = None, prefix: str = "") -> Optional[str]:
    value = present(value)
    if value is None:
        return None
    return f"{prefix}{value} {unit}" if unit else f"{prefix}{value}"


def line(label: str, value: Any, unit: Optional[str] = None, prefix: str = "") -> str:
    """A line that is always shown, falling back to "Unknown"."""
    return f"{label}: {_value(value, unit, prefix) or UNKNOWN}"


def optional_line(label: str, value: Any, unit: Optional[str] = None, prefix: str = "") -> list[str]:
    """A line that only exists when the value is present (as a 0/1-item list)."""
    text = _value(value, unit, prefix)
    return [f"{label}: {text}"] if text is not None else []


def _blocks(rows: Sequence[DatasetRow], render_one: Callable[[int, DatasetRow], list[str]]) -> tuple[str, ...]:
    lines: list[str] = []
    for index, row in enumerate(rows, start=1):
        if index > 1:
            lines.append(SUB_RECORD_SEPARATOR)
        lines.extend(render_one(index, row))
    return tuple(lines)


# =============================================================================
# Sub-record renderers
# =============================================================================

def fuel_lines(index: int, fuel: DatasetRow) -> list[str]:
    return [
        line(f"Fuel Type {index}", fuel.get("brandstof_omschrijving")),
        line("Emission Level", fuel.get("uitlaatemissieniveau")),
        *optional_line("Emission Code", fuel.get("emissiecode_omschrijving")),
        *optional_line("Environmental Class", fuel.get("milieuklasse_eg_goedkeuring_licht")),
        line("CO2 Class", fuel.get("co2_emissieklasse")),
        *optional_line("CO2 Emissions (Combined)", fuel.get("co2_uitstoot_gecombineerd"), "g/km"),
        *optional_line("Fuel Consumption (Combined)", fuel.get("brandstofverbruik_gecombineerd"), "l/100km"),
        line("Max Power", fuel.get("nettomaximumvermogen"), "kW"),
        line("Sound Level (Driving)", fuel.get("geluidsniveau_rijdend"), "dB"),
        line("Sound Level (Idle)", fuel.get("geluidsniveau_stationair"), "dB"),
        *optional_line("Soot Emission", fuel.get("roetuitstoot")),
        *optional_line("Electric Range (WLTP)", fuel.get("actie_radius_enkel_elektrisch_wltp"), "km"),
    ]


def axle_lines(index: int, axle: DatasetRow) -> list[str]:
    return [
        line(f"Axle {index} Number", axle.get("as_nummer")),
        *optional_line("Position Code", axle.get("plaatscode_as")),
        *optional_line("Driven Axle", axle.get("aangedreven_as")),
        *optional_line("Lift Axle", axle.get("hefas")),
        line("Track Width", axle.get("spoorbreedte"), "cm"),
        line("Technical Max Axle Load", axle.get("technisch_toegestane_maximum_aslast"), "kg"),
        *optional_line("Legal Max Axle Load", axle.get("wettelijk_toegestane_maximum_aslast"), "kg"),
        *optional_line("Distance to Next Axle", axle.get("afstand_tot_volgende_as_voertuig"), "cm"),
    ]


def body_lines(index: int, body: DatasetRow) -> list[str]:
    return [
        line(f"Body {index} Type", body.get("carrosserietype")),
        *optional_line("European Description", body.get("type_carrosserie_europese_omschrijving")),
    ]


# =============================================================================
# Vehicle report
# =============================================================================

def render_vehicle(
    record: VehicleRecord,
    fuel: Sequence[DatasetRow] = (),
    axles: Sequence[DatasetRow] = (),
    bodies: Sequence[DatasetRow] = (),
    heading: Optional[str] = None,
) -> Report:
    """Build the multi-section report for one vehicle.

    Args:
        record: The merged vehicle record.
        fuel, axles, bodies: Auxiliary rows; an empty sequence omits the
            matching section.
        heading: Optional first line, e.g. "Vehicle Information for N500FV:".
    """
    r = record

    basic = (
        line("License Plate", r.license_plate),
        line("Vehicle Type", r.vehicle_type),
        line("Brand", r.brand),
        line("Model", r.model),
        line("Variant", r.variant),
        line("Version", r.version),
        *optional_line("European Category", r.european_category),
    )

    appearance = (
        line("Primary Color", r.primary_color),
        *optional_line("Secondary Color", r.secondary_color),
        line("Body Type", r.body_type),
        line("Number of Doors", r.doors),
        line("Number of Wheels", r.wheels),
    )

    capacity = (
        line("Seats", r.seats),
        *optional_line("Standing Places", r.standing_places),
        *optional_line("Wheelchair Places", r.wheelchair_places),
    )

    technical = (
        line("Engine Cylinders", r.cylinders),
        line("Engine Displacement", r.displacement, "cc"),
        line("Net Max Power", r.net_max_power, "kW"),
        line("Power/Mass Ratio", r.power_mass_ratio, "kW/kg"),
        *optional_line("Nominal Continuous Max Power", r.nominal_continuous_power, "kW"),
        *optional_line("Max Design Speed", r.max_speed, "km/h"),
    )

    masses = (
        line("Empty Weight (Massa ledig)", r.empty_mass, "kg"),
        line("Curb Weight (Massa rijklaar)", r.curb_mass, "kg"),
        line("Maximum Vehicle Mass", r.max_vehicle_mass, "kg"),
        line("Technical Max Mass", r.technical_max_mass, "kg"),
        line("Max Towing Unbraked (Ongeremd)", r.max_towing_unbraked, "kg"),
        line("Max Towing Braked (Geremd)", r.max_towing_braked, "kg"),
        *optional_line("Max Combination Mass", r.max_combination_mass, "kg"),
        *optional_line("Alternative Drive Mass", r.alt_drive_mass, "kg"),
    )

    registration = (
        line("First Registration", format_date(r.first_admission)),
        line("First NL Registration", format_date(r.first_nl_registration)),
        *optional_line("Current Registration", format_date(r.current_registration)),
        line("Type Approval", r.type_approval_number),
        line("Vehicle Type Code", r.vehicle_type_code),
    )

    inspection = (
        line("APK Expiry", format_date(r.apk_expiry)),
        *optional_line("Tachograph Expiry", format_date(r.tachograph_expiry)),
        *optional_line("Odometer Judgement", r.odometer_judgement),
    )

    dimensions = (
        *optional_line("Length", r.length, "cm"),
        *optional_line("Width", r.width, "cm"),
        *optional_line("Height", r.height, "cm"),
        *optional_line("Wheelbase", r.wheelbase, "cm"),
    )

    financial = (
        *optional_line("Catalog Price", r.catalog_price, prefix="€"),
        *optional_line("Gross BPM", r.gross_bpm, prefix="€"),
    )

    indicators = (
        *optional_line("Fuel Efficiency Label", r.fuel_efficiency_label),
        *optional_line("Export Status", r.export_indicator),
        *optional_line("Taxi", r.taxi_indicator),
        *optional_line("WAM Insured", r.wam_insured),
        *optional_line("Open Recall", r.open_recall),
    )

    sections = (
        ReportSection("BASIC INFORMATION", basic, always_shown=True),
        ReportSection("APPEARANCE", appearance, always_shown=True),
        ReportSection("CAPACITY", capacity, always_shown=True),
        ReportSection("TECHNICAL SPECIFICATIONS", technical, always_shown=True),
        ReportSection("WEIGHTS & TOWING CAPACITY", masses, always_shown=True),
        ReportSection("REGISTRATION", registration, always_shown=True),
        ReportSection("INSPECTION", inspection, always_shown=True),
        ReportSection("DIMENSIONS", dimensions),
        ReportSection("FINANCIAL", financial),
        ReportSection("STATUS INDICATORS", indicators),
        ReportSection("FUEL & EMISSIONS", _blocks(fuel, fuel_lines)),
        ReportSection("AXLE SPECIFICATIONS", _blocks(axles, axle_lines)),
        ReportSection("BODY SPECIFICATIONS", _blocks(bodies, body_lines)),
    )

    return Report(
        heading=heading,
        sections=sections,
        footer=line("Last Odometer Reading", r.odometer_year),
    )


def render_lookup(kenteken: str, details: VehicleDetails) -> str:
    """Full report for the license-plate lookup tool."""
    report = render_vehicle(
        details.record,
        fuel=details.fuel,
        axles=details.axles,
        bodies=details.bodies,
        heading=f"Vehicle Information for {kenteken}:",
    )
    return report.to_text()


def render_fuel_report(kenteken: str, rows: Sequence[DatasetRow]) -> str:
    """Fuel/emissions-only report: one numbered block per fuel."""
    report = Report(
        heading=f"Fuel & Emissions Data for {kenteken}:",
        sections=(ReportSection(None, _blocks(rows, fuel_lines)),),
    )
    return report.to_text()


def render_search(brand: str, model: Optional[str], records: Sequence[VehicleRecord]) -> str:
    """Numbered list of vehicle reports for the search tool."""
    query = f"{brand} {model}" if model else brand
    entries = [
        f"{index}. {render_vehicle(record).to_text()}"
        for index, record in enumerate(records, start=1)
    ]
    return f"Found {len(records)} vehicle(s) for {query}:\n\n" + "\n\n---\n\n".join(entries)
