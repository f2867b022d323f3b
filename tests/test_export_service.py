"""
Tests for ExportService (CSV and Excel exports of vaccination records).
"""

from datetime import date

import pandas as pd
import pytest

from models.animal import Animal
from repositories.animal_repo import AnimalRepository
from services.export_service import COLUMNS, ExportService


@pytest.fixture
def export_service(vaccinated_animals: list[Animal]) -> ExportService:
    repo = AnimalRepository()
    for source in vaccinated_animals:
        repo.add(source.name, source.age).add_vaccines(source.vaccines)
    repo.add("Stray", 2)
    return ExportService(repo)


class TestVaccinationFrame:
    """Tests for the flattened vaccination table"""

    def test_one_row_per_vaccine(self, export_service: ExportService) -> None:
        df = export_service.vaccination_frame(on=date(2024, 7, 11))

        assert list(df.columns) == COLUMNS
        assert len(df) == 6
        assert list(df["animal"]) == ["Rex", "Rex", "Luna", "Luna", "Milo", "Milo"]

    def test_expired_column(self, export_service: ExportService) -> None:
        df = export_service.vaccination_frame(on=date(2024, 7, 11))
        rabivac = df[df["brand"] == "Rabivac"]
        # applied 10, 11 and 12 January; valid until the same day in July
        assert list(rabivac["expired"]) == [True, False, False]
        assert list(rabivac["next_application"]) == ["2024-07-10", "2024-07-11", "2024-07-12"]

    def test_empty_repository(self) -> None:
        df = ExportService(AnimalRepository()).vaccination_frame()
        assert df.empty
        assert list(df.columns) == COLUMNS


class TestExports:
    """Tests for the downloadable buffers"""

    def test_csv_export(self, export_service: ExportService) -> None:
        buffer = export_service.export_vaccinations_csv(on=date(2024, 7, 11))

        df = pd.read_csv(buffer, encoding="utf-8-sig")

        assert list(df.columns) == COLUMNS
        assert len(df) == 6
        assert df["volume_ml"].sum() == 2 + 3 + 4 + 5 * 3

    def test_excel_export(self, export_service: ExportService) -> None:
        buffer = export_service.export_vaccinations_excel(on=date(2024, 7, 11))

        sheets = pd.read_excel(buffer, sheet_name=None, engine="openpyxl")

        assert set(sheets) == {"Vaccinations", "Summary"}
        assert len(sheets["Vaccinations"]) == 6
        summary = sheets["Summary"].set_index("brand")
        assert summary.loc["Rabivac", "doses"] == 3
        assert summary.loc["Rabivac", "total_ml"] == 9

    def test_excel_export_without_vaccines(self) -> None:
        buffer = ExportService(AnimalRepository()).export_vaccinations_excel()
        sheets = pd.read_excel(buffer, sheet_name=None, engine="openpyxl")
        assert list(sheets) == ["Vaccinations"]
