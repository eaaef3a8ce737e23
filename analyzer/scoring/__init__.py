"""Scoring: category aggregation, overall score, grade and narrative blend."""

# Use explicit imports when needed:
# from analyzer.scoring.aggregator import calculate_category_scores, score_to_grade
