"""
Analysis Engines

Each engine owns ALL semantics of one concern (pandas / sklearn work).

- Engines never touch AnalysisContext
- Engines never write files (ReportEngine excepted: writing IS its concern)
- Steps call engines; engines never call steps
"""
