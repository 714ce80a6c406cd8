"""
Analysis Doctrine

One analysis run is a single-shot, offline batch:

    load → prune → partition → {train → evaluate} x runs → importance → report

------------------------------------------------------------
Values
------------------------------------------------------------
- Dataset / Partition are immutable values threaded through the
  AnalysisContext. Stages return new values, they never mutate.
- TrainResult holds the fitted estimator only; it keeps no reference
  to the training rows.
- ConfusionMatrix / ImportanceRanking are pure derived values.

------------------------------------------------------------
Leakage note
------------------------------------------------------------
Column statistics used for pruning are measured on the FULL dataset,
before partitioning. Column selection therefore "sees" the test rows.
This is accepted and kept as-is.

------------------------------------------------------------
Failure semantics
------------------------------------------------------------
LoadError / SchemaError / TrainingError abort the run. There is no
recovery path and no partial output: steps write into a staging
directory which is committed only after the last step succeeds.
"""
