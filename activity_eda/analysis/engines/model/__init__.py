#!filepath: activity_eda/analysis/engines/model/__init__.py
"""
Concrete ModelTrainEngine implementations (one per model family).

Do NOT import these engines outside the registry / training steps.
"""
