# activity_eda/utils/errors.py


class AnalysisError(RuntimeError):
    """
    Base error of one analysis run.
    Any AnalysisError aborts the run; nothing is written.
    """


class LoadError(AnalysisError):
    """
    Dataset file is unreadable, or the label column is absent / incomplete.
    """


class SchemaError(AnalysisError):
    """
    Partition / training invoked on a Dataset that cannot support it
    (no label column, label value too rare to stratify).
    """


class TrainingError(AnalysisError):
    """
    Underlying fit failed, or the training data is degenerate
    (single class, class smaller than fold count, no features).
    """
