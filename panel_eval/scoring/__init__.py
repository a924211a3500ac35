"""
scoring/ - Evaluation Scoring Engine

Modules:
    utils.py             - Mean / rounding helpers
    rubric.py            - Rubric model, weight validation, built-in MEDIA rubric
    score_calculator.py  - Weighted overall score per evaluation
    aggregation.py       - Vendor-level summary over all evaluations
"""
