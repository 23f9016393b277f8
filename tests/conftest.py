"""
Shared fixtures for the RDW tool tests.

No test touches the network: the aggregator is driven by FakeRDWClient, and
the real RDWClient is exercised through httpx.MockTransport.
"""

from unittest.mock import patch

import pytest

from core.config import AXLE_DATASET, BASE_DATASET, BODY_DATASET, FUEL_DATASET


class FakeRDWClient:
    """Stands in for RDWClient: canned rows per dataset, records every call.

    A dataset mapped to None simulates a failed request; one listed in
    `errors` raises instead of returning.
    """

    def __init__(self, responses=None, errors=None):
        self.responses = responses or {}
        self.errors = errors or {}
        self.calls = []

    async def fetch(self, dataset_id, filters=None):
        self.calls.append((dataset_id, dict(filters or {})))
        if dataset_id in self.errors:
            raise self.errors[dataset_id]
        return self.responses.get(dataset_id, [])

    def datasets_called(self):
        return [dataset_id for dataset_id, _ in self.calls]


@pytest.fixture
def bmw_base_row():
    """A realistic base-dataset row for plate N500FV."""
    return {
        "kenteken": "N500FV",
        "voertuigsoort": "Personenauto",
        "merk": "BMW",
        "handelsbenaming": "3 SERIES",
        "variant": "8E11",
        "uitvoering": "FBM1B9A0",
        "eerste_kleur": "ZWART",
        "tweede_kleur": "Niet geregistreerd",
        "inrichting": "sedan",
        "aantal_deuren": "4",
        "aantal_wielen": "4",
        "aantal_zitplaatsen": "5",
        "aantal_cilinders": "4",
        "cilinderinhoud": "1998",
        "massa_ledig_voertuig": "1445",
        "massa_rijklaar": "1545",
        "toegestane_maximum_massa_voertuig": "2065",
        "technische_max_massa_voertuig": "2065",
        "maximum_massa_trekken_ongeremd": "750",
        "maximum_trekken_massa_geremd": "1600",
        "datum_eerste_toelating": "20210312",
        "datum_eerste_tenaamstelling_in_nederland": "20210312",
        "typegoedkeuringsnummer": "e1*2007/46*1785*09",
        "type": "3L",
        "vervaldatum_apk": "20250312",
        "catalogusprijs": "52895",
        "bruto_bpm": "6123",
        "zuinigheidsclassificatie": "B",
        "wam_verzekerd": "Ja",
        "openstaande_terugroepactie_indicator": "Nee",
        "jaar_laatste_registratie_tellerstand": "2024",
    }


@pytest.fixture
def petrol_fuel_row():
    return {
        "kenteken": "N500FV",
        "brandstof_volgnummer": "1",
        "brandstof_omschrijving": "Benzine",
        "uitlaatemissieniveau": "EURO 6 AP",
        "co2_uitstoot_gecombineerd": "148",
        "nettomaximumvermogen": "135.00",
        "geluidsniveau_rijdend": "70",
        "geluidsniveau_stationair": "75",
    }


@pytest.fixture
def axle_rows():
    # Deliberately out of order: the aggregator sorts by as_nummer.
    return [
        {"kenteken": "N500FV", "as_nummer": "2", "spoorbreedte": "160", "technisch_toegestane_maximum_aslast": "1120"},
        {"kenteken": "N500FV", "as_nummer": "1", "spoorbreedte": "157", "technisch_toegestane_maximum_aslast": "985"},
    ]


@pytest.fixture
def body_rows():
    return [
        {
            "kenteken": "N500FV",
            "carrosserie_volgnummer": "1",
            "carrosserietype": "AA",
            "type_carrosserie_europese_omschrijving": "Sedan",
        }
    ]


@pytest.fixture
def full_client(bmw_base_row, petrol_fuel_row, axle_rows, body_rows):
    return FakeRDWClient(
        responses={
            BASE_DATASET: [bmw_base_row],
            FUEL_DATASET: [petrol_fuel_row],
            AXLE_DATASET: axle_rows,
            BODY_DATASET: body_rows,
        }
    )


@pytest.fixture
def use_client():
    """Patch the aggregator's default client: `use_client(fake)`."""
    patchers = []

    def _use(client):
        patcher = patch("core.aggregator.rdw_client", client)
        patcher.start()
        patchers.append(patcher)
        return client

    yield _use

    for patcher in reversed(patchers):
        patcher.stop()
