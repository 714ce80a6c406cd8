#!filepath: activity_eda/config/report_config.py
from typing import Optional

from pydantic import BaseModel, Field


class ReportConfig(BaseModel):
    # None → <root>/reports
    output_dir: Optional[str] = None
    dpi: int = Field(default=120, ge=50)
    heatmap_cmap: str = "Blues"
