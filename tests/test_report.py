"""
Tests for core/report.py: section order, fallbacks, units and sub-records.
"""

import re

import pytest

from core.models import VehicleDetails, VehicleRecord
from core.normalizer import build_record
from core.report import (
    format_date,
    line,
    optional_line,
    render_fuel_report,
    render_lookup,
    render_search,
    render_vehicle,
)

CORE_SECTIONS = [
    "BASIC INFORMATION",
    "APPEARANCE",
    "CAPACITY",
    "TECHNICAL SPECIFICATIONS",
    "WEIGHTS & TOWING CAPACITY",
    "REGISTRATION",
    "INSPECTION",
]


def titles(report):
    return [section.title for section in report.visible_sections()]


def test_line_fallback_never_shows_bare_unit():
    assert line("Empty Weight", None, "kg") == "Empty Weight: Unknown"
    assert line("Empty Weight", "", "kg") == "Empty Weight: Unknown"
    assert line("Empty Weight", "1445", "kg") == "Empty Weight: 1445 kg"
    assert line("Catalog Price", "52895", prefix="€") == "Catalog Price: €52895"


def test_optional_line():
    assert optional_line("Standing Places", None) == []
    assert optional_line("Standing Places", "12") == ["Standing Places: 12"]


def test_empty_record_renders_core_sections_with_unknowns():
    text = render_vehicle(VehicleRecord()).to_text()
    report = render_vehicle(VehicleRecord())

    assert titles(report) == CORE_SECTIONS
    assert "Brand: Unknown" in text
    assert "Engine Displacement: Unknown" in text
    assert "Net Max Power: Unknown" in text
    assert text.endswith("Last Odometer Reading: Unknown")
    # No unit ever follows a fallback, and no unit stands alone.
    assert not re.search(r"Unknown (kg|cc|kW|cm|km/h|dB)", text)
    assert not re.search(r": (kg|cc|kW|cm|km/h|dB)$", text, re.MULTILINE)


def test_financial_section_omitted_without_price_or_bpm():
    text = render_vehicle(VehicleRecord(brand="BMW")).to_text()
    assert "FINANCIAL" not in text
    assert "STATUS INDICATORS" not in text
    assert "DIMENSIONS" not in text


def test_financial_section_with_only_bpm():
    text = render_vehicle(VehicleRecord(gross_bpm="6123")).to_text()
    assert "FINANCIAL:\nGross BPM: €6123" in text
    assert "Catalog Price" not in text


def test_full_report_section_order(bmw_base_row, petrol_fuel_row, axle_rows, body_rows):
    record = build_record(bmw_base_row, petrol_fuel_row)
    report = render_vehicle(record, fuel=[petrol_fuel_row], axles=axle_rows, bodies=body_rows)

    assert titles(report) == CORE_SECTIONS + [
        "FINANCIAL",
        "STATUS INDICATORS",
        "FUEL & EMISSIONS",
        "AXLE SPECIFICATIONS",
        "BODY SPECIFICATIONS",
    ]
    text = report.to_text()
    assert "Brand: BMW" in text
    assert "Model: 3 SERIES" in text
    assert "Net Max Power: 135.00 kW" in text
    assert "Max Towing Braked (Geremd): 1600 kg" in text
    assert "First Registration: 2021-03-12" in text
    assert "Secondary Color: Niet geregistreerd" in text
    assert "Fuel Efficiency Label: B" in text
    assert text.endswith("Last Odometer Reading: 2024")


def test_repeated_sub_records_are_numbered_and_separated():
    axles = [{"as_nummer": "1", "spoorbreedte": "157"}, {"as_nummer": "2"}]
    text = render_vehicle(VehicleRecord(), axles=axles).to_text()

    assert (
        "AXLE SPECIFICATIONS:\n"
        "Axle 1 Number: 1\n"
        "Track Width: 157 cm\n"
        "Technical Max Axle Load: Unknown\n"
        "---\n"
        "Axle 2 Number: 2\n"
        "Track Width: Unknown\n"
        "Technical Max Axle Load: Unknown"
    ) in text


def test_dimensions_section_only_with_data():
    text = render_vehicle(VehicleRecord(length="470", max_speed="250")).to_text()
    assert "DIMENSIONS:\nLength: 470 cm" in text
    assert "Width" not in text
    assert "Max Design Speed: 250 km/h" in text


def test_rendering_is_deterministic(bmw_base_row, petrol_fuel_row, axle_rows):
    record = build_record(bmw_base_row, petrol_fuel_row)
    first = render_vehicle(record, fuel=[petrol_fuel_row], axles=axle_rows).to_text()
    second = render_vehicle(record, fuel=[petrol_fuel_row], axles=axle_rows).to_text()
    assert first == second


@pytest.mark.parametrize(
    "value, expected",
    [("20210312", "2021-03-12"), ("2021-03-12", "2021-03-12"), ("2024", "2024"), (None, None)],
)
def test_format_date(value, expected):
    assert format_date(value) == expected


def test_render_lookup_heading(bmw_base_row):
    details = VehicleDetails(record=build_record(bmw_base_row))
    text = render_lookup("N500FV", details)
    assert text.startswith("Vehicle Information for N500FV:\n\nBASIC INFORMATION:\nLicense Plate: N500FV")


def test_render_fuel_report_blocks():
    rows = [
        {"brandstof_omschrijving": "Benzine", "nettomaximumvermogen": "72"},
        {"brandstof_omschrijving": "Elektriciteit", "actie_radius_enkel_elektrisch_wltp": "60"},
    ]
    text = render_fuel_report("AB12CD", rows)

    assert text.startswith("Fuel & Emissions Data for AB12CD:\n\nFuel Type 1: Benzine\n")
    assert "Max Power: 72 kW\n" in text
    assert "\n---\nFuel Type 2: Elektriciteit\n" in text
    assert "Max Power: Unknown\n" in text
    assert "Electric Range (WLTP): 60 km" in text


def test_render_search_numbering():
    records = [VehicleRecord(brand="BMW", model="X1"), VehicleRecord(brand="BMW", model="X3")]
    text = render_search("bmw", "x", records)

    assert text.startswith("Found 2 vehicle(s) for bmw x:\n\n1. BASIC INFORMATION:\n")
    assert "\n\n---\n\n2. BASIC INFORMATION:\n" in text
    assert render_search("bmw", None, records[:1]).startswith("Found 1 vehicle(s) for bmw:\n\n1. ")
