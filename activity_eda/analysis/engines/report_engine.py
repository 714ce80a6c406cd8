# activity_eda/analysis/engines/report_engine.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from activity_eda.analysis.engines.confusion_matrix import ConfusionMatrix
from activity_eda.analysis.engines.importance_engine import ImportanceRanking
from activity_eda.utils.filesystem import FileSystem


class ReportEngine:
    """
    ReportEngine

    Responsibility:
    - Persist report tables (CSV / JSON)
    - Render confusion heatmaps / importance bars (PNG)

    Contract:
    - caller decides the directory (staging)
    - every method returns the written path
    """

    def __init__(self, *, dpi: int = 120, cmap: str = "Blues"):
        self.dpi = dpi
        self.cmap = cmap

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------
    def write_csv(self, df: pd.DataFrame, path: Path, *, index: bool = True) -> Path:
        FileSystem.ensure_dir(path.parent)
        df.to_csv(path, index=index)
        return path

    def write_json(self, payload: Any, path: Path) -> Path:
        return FileSystem.safe_write_text(
            path, json.dumps(payload, indent=2, ensure_ascii=False, default=str)
        )

    # ------------------------------------------------------------------
    # Figures
    # ------------------------------------------------------------------
    def plot_confusion(
            self,
            cm: ConfusionMatrix,
            path: Path,
            *,
            title: str,
    ) -> Path:
        FileSystem.ensure_dir(path.parent)

        df = cm.to_frame()
        fig, ax = plt.subplots(figsize=(6, 5))
        sns.heatmap(df, annot=True, fmt="d", cmap=self.cmap, cbar=True, ax=ax)
        ax.set_title(f"{title} (accuracy {cm.accuracy:.3f})")
        ax.set_xlabel("Prediction")
        ax.set_ylabel("Reference")
        fig.tight_layout()
        fig.savefig(path, dpi=self.dpi)
        plt.close(fig)

        return path

    def plot_importance(
            self,
            ranking: ImportanceRanking,
            path: Path,
            *,
            top_n: int = 20,
            threshold: float | None = None,
    ) -> Path:
        FileSystem.ensure_dir(path.parent)

        top = ranking.top(top_n).iloc[::-1]
        fig, ax = plt.subplots(figsize=(7, max(3.0, 0.3 * len(top) + 1)))
        ax.barh(top.index, top.values)
        if threshold is not None:
            ax.axvline(threshold, linestyle="--", linewidth=1, color="grey")
        ax.set_xlim(0, 105)
        ax.set_xlabel("Importance (max = 100)")
        ax.set_title(f"Feature importance ({ranking.source})")
        fig.tight_layout()
        fig.savefig(path, dpi=self.dpi)
        plt.close(fig)

        return path

    # ------------------------------------------------------------------
    # Summary
    # ------------------------------------------------------------------
    @staticmethod
    def summary_table(results: dict, evaluations: dict, label_column: str = "classe") -> pd.DataFrame:
        """
        One row per model run (run order): cross-validation + held-out metrics.
        """
        rows = []
        for name, result in results.items():
            evaluation = evaluations.get(name)
            row = {
                "model": name,
                "family": result.family,
                "formula": result.formula.describe(label_column),
                "n_features": len(result.feature_names),
                "best_params": json.dumps(result.best_params, default=str),
                "cv_accuracy": result.cv_accuracy,
                "cv_std": result.cv_std,
            }
            if evaluation is not None:
                cm = evaluation.confusion
                lo, hi = cm.accuracy_ci()
                row.update(
                    test_accuracy=cm.accuracy,
                    ci_lower=lo,
                    ci_upper=hi,
                    kappa=cm.kappa,
                    out_of_sample_error=cm.out_of_sample_error,
                    n_test=cm.total,
                )
            rows.append(row)

        return pd.DataFrame(rows).set_index("model") if rows else pd.DataFrame()
