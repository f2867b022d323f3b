"""
services/export_service.py
---------------------------
Generates CSV and Excel exports of the vaccination records.
"""

import io
from datetime import date
from typing import Optional

import pandas as pd

from repositories.animal_repo import AnimalRepository
from utils.logger import get_logger

logger = get_logger(__name__)

COLUMNS = [
    "animal_id", "animal", "brand", "volume_ml",
    "applied_on", "next_application", "expired",
]


class ExportService:
    """Generates downloadable vaccination reports in CSV and Excel formats."""

    def __init__(self, animals: AnimalRepository):
        self.animals = animals

    def vaccination_frame(self, on: Optional[date] = None) -> pd.DataFrame:
        """
        One row per administered vaccine, animals in collection order.

        Args:
            on: Date used for the ``expired`` column (default: today).
        """
        data = [
            {
                "animal_id": str(a.id),
                "animal": a.name,
                "brand": v.brand,
                "volume_ml": v.volume_in_ml,
                "applied_on": v.date_of_application.isoformat(),
                "next_application": v.date_of_next_application.isoformat(),
                "expired": v.is_expired(on),
            }
            for a in self.animals.list_all()
            for v in a.vaccines
        ]
        return pd.DataFrame(data, columns=COLUMNS)

    def export_vaccinations_csv(self, on: Optional[date] = None) -> io.BytesIO:
        """
        Export all vaccinations as a CSV file.

        Returns:
            A BytesIO buffer containing the CSV data.
        """
        df = self.vaccination_frame(on)
        buffer = io.BytesIO()
        df.to_csv(buffer, index=False, encoding="utf-8-sig")
        buffer.seek(0)
        logger.info(f"Exported {len(df)} vaccination records as CSV")
        return buffer

    def export_vaccinations_excel(self, on: Optional[date] = None) -> io.BytesIO:
        """
        Export all vaccinations as an Excel (.xlsx) file with a per-brand
        summary sheet.

        Returns:
            A BytesIO buffer containing the Excel data.
        """
        df = self.vaccination_frame(on)

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name="Vaccinations", index=False)

            if not df.empty:
                summary = (
                    df.groupby("brand")
                    .agg(doses=("volume_ml", "size"), total_ml=("volume_ml", "sum"))
                    .reset_index()
                )
                summary.to_excel(writer, sheet_name="Summary", index=False)

        buffer.seek(0)
        logger.info(f"Exported {len(df)} vaccination records as Excel")
        return buffer
