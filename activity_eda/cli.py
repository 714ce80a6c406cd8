#!filepath: activity_eda/cli.py
from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional

import pandas as pd
import typer
from rich.console import Console
from rich.table import Table

from activity_eda import __version__
from activity_eda.utils.logger import Logging
from activity_eda.config.app_config import AppConfig
from activity_eda.utils.errors import AnalysisError

app = typer.Typer(help="Activity EDA: prune, split, fit and compare classifiers")
console = Console()


def _load_config(config: Optional[Path], output_dir: Optional[Path]) -> AppConfig:
    cfg = AppConfig.load(str(config) if config else None)
    if output_dir is not None:
        cfg.report.output_dir = str(output_dir)
    Logging.from_config(cfg.log)
    return cfg


def _frame_table(df: pd.DataFrame, title: str, floatfmt: str = "{:.4f}") -> Table:
    table = Table(title=title)
    table.add_column(df.index.name or "", style="bold")
    for col in df.columns:
        table.add_column(str(col), justify="right")

    for idx, row in df.iterrows():
        cells = [
            floatfmt.format(v) if isinstance(v, float) else str(v)
            for v in row.tolist()
        ]
        table.add_row(str(idx), *cells)
    return table


@app.command()
def version():
    console.print(f"v{__version__}")


@app.command()
def run(
        data: Optional[Path] = typer.Argument(None, help="CSV dataset (default: dataset.path from config)"),
        config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config"),
        run_id: Optional[str] = typer.Option(None, "--run-id", help="output sub-directory name"),
        output_dir: Optional[Path] = typer.Option(None, "--output-dir", "-o"),
):
    """
    Run the full analysis: load → prune → split → fit → evaluate → report
    """
    from activity_eda.analysis.engines.report_engine import ReportEngine
    from activity_eda.workflows.offline_analysis import (
        build_offline_analysis,
        resolve_data_path,
    )

    cfg = _load_config(config, output_dir)
    run_id = run_id or f"run_{datetime.now().strftime('%Y%m%d_%H%M%S')}"

    try:
        data_path = resolve_data_path(cfg, data)
        console.print(f"[green]Running analysis {run_id} on {data_path}[/green]")
        ctx = build_offline_analysis(cfg).run(run_id=run_id, data_path=data_path)
    except (AnalysisError, ValueError) as e:
        console.print(f"[red]Analysis failed:[/red] {e}")
        raise typer.Exit(code=1)

    summary = ReportEngine.summary_table(
        ctx.results, ctx.evaluations, ctx.dataset.label_column
    )
    console.print(
        _frame_table(
            summary[["family", "n_features", "cv_accuracy", "test_accuracy", "kappa", "out_of_sample_error"]],
            title="Model comparison",
        )
    )

    if ctx.importance is not None:
        top = ctx.importance.to_frame().head(cfg.importance.top_n)
        console.print(_frame_table(top, title=f"Importance ({ctx.importance.source})", floatfmt="{:.2f}"))

    console.print(f"[blue]Reports written to {ctx.output_dir}[/blue]")


@app.command()
def inspect(
        data: Optional[Path] = typer.Argument(None, help="CSV dataset"),
        config: Optional[Path] = typer.Option(None, "--config", "-c"),
        show: int = typer.Option(20, help="rows of the column statistics table"),
):
    """
    Load + prune only: print the column statistics and exclusion sets
    """
    from activity_eda.workflows.offline_analysis import (
        build_load_engine,
        build_prune_engine,
        resolve_data_path,
    )

    cfg = _load_config(config, None)

    try:
        data_path = resolve_data_path(cfg, data)
        ds = build_load_engine(cfg).load(data_path)
        result = build_prune_engine(cfg).prune(ds)
    except (AnalysisError, ValueError) as e:
        console.print(f"[red]Inspect failed:[/red] {e}")
        raise typer.Exit(code=1)

    console.print(
        f"[bold]{ds.n_rows}[/bold] rows, {len(ds.feature_columns)} feature columns, "
        f"labels={ds.label_domain}"
    )
    for name, members in result.exclusion_sets().items():
        console.print(f"[yellow]{name}[/yellow] ({len(members)}): {', '.join(members) or '-'}")
    console.print(f"kept: {len(result.dataset.feature_columns)} feature columns")

    stats = result.stats.sort_values("missing_ratio", ascending=False).head(show)
    console.print(_frame_table(stats, title="Column statistics"))


if __name__ == "__main__":
    app()

# python -m activity_eda.cli run data/pml-training.csv
