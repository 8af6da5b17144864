from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class IngestionConfig:
    """
    Configuration for the roster ingestion pipeline.
    """

    raw_export_path: Path = Path("model_catalog/data/raw/models.csv")
    processed_data_dir: Path = Path("model_catalog/data/processed")
    processed_filename: str = "roster.json"
    default_site: str = ""

    @property
    def processed_path(self) -> Path:
        return self.processed_data_dir / self.processed_filename


DEFAULT_INGESTION_CONFIG = IngestionConfig()
