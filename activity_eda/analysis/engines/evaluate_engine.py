# activity_eda/analysis/engines/evaluate_engine.py
from __future__ import annotations

from dataclasses import dataclass

from sklearn.metrics import confusion_matrix

from activity_eda.analysis.dataset import Dataset
from activity_eda.analysis.engines.confusion_matrix import ConfusionMatrix
from activity_eda.analysis.engines.train_result import TrainResult
from activity_eda.analysis.features import align_feature_matrix


@dataclass(frozen=True, eq=False)
class Evaluation:
    name: str
    confusion: ConfusionMatrix

    @property
    def accuracy(self) -> float:
        return self.confusion.accuracy


class EvaluateEngine:
    """
    EvaluateEngine

    Responsibility:
    - Predict the held-out rows with a fitted model
    - Build the confusion matrix

    Contract:
    - pure function of (model, data); no side effects
    - every row gets exactly one prediction
    - true labels outside the training domain are kept (always misses)
    """

    def evaluate(
            self,
            *,
            result: TrainResult,
            dataset: Dataset,
    ) -> Evaluation:
        if dataset.n_rows == 0:
            raise ValueError("[EvaluateEngine] empty eval dataset")

        X = align_feature_matrix(
            dataset.frame, result.input_columns, result.feature_names
        )
        y_true = dataset.label_array()
        y_pred = result.model.predict(X)

        labels = list(result.classes)
        seen = set(labels)
        for value in y_true:
            if value not in seen:
                labels.append(value)
                seen.add(value)

        counts = confusion_matrix(y_true, y_pred, labels=labels)

        return Evaluation(
            name=result.name,
            confusion=ConfusionMatrix(labels=tuple(labels), counts=counts),
        )
