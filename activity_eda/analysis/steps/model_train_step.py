# activity_eda/analysis/steps/model_train_step.py
from __future__ import annotations

from activity_eda import logs
from activity_eda.analysis.context import AnalysisContext
from activity_eda.analysis.engines.model_train_engine import ModelTrainEngine
from activity_eda.analysis.features import FeatureFormula
from activity_eda.config.training_config import ModelRunConfig
from activity_eda.pipeline.step import PipelineStep


class ModelTrainStep(PipelineStep):
    """
    Contract:
    - consumes ctx.train_set (+ ctx.reduced_formula for reduced runs)
    - produces ctx.results[run.name]
    """

    def __init__(self, *, run: ModelRunConfig, engine: ModelTrainEngine, inst=None):
        super().__init__(inst)
        self.run_cfg = run
        self.engine = engine

    @property
    def step_name(self) -> str:
        return f"{self.__class__.__name__}[{self.run_cfg.name}]"

    def run(self, ctx: AnalysisContext) -> AnalysisContext:
        if ctx.train_set is None:
            raise RuntimeError(f"[{self.step_name}] no training partition")

        if self.run_cfg.features == "reduced":
            if ctx.reduced_formula is None:
                raise RuntimeError(
                    f"[{self.step_name}] reduced run before importance ranking"
                )
            formula = ctx.reduced_formula
        else:
            formula = FeatureFormula.all()

        logs.info(
            f"[{self.step_name}] fit {self.engine.family} "
            f"{formula.describe(ctx.train_set.label_column)} folds={self.engine.folds}"
        )

        with self.inst.timer(f"fit[{self.run_cfg.name}]"):
            result = self.engine.train(
                name=self.run_cfg.name,
                dataset=ctx.train_set,
                formula=formula,
            )

        ctx.results[result.name] = result

        self.inst.metrics.record("cv_accuracy", round(result.cv_accuracy, 6), run=result.name)
        self.inst.metrics.record("n_features", len(result.feature_names), run=result.name)
        logs.info(
            f"[{self.step_name}] best={result.best_params} "
            f"folds={[round(s, 4) for s in result.fold_scores]} "
            f"features={len(result.feature_names)}"
        )
        return ctx
