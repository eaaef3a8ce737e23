"""Secondary heuristics that surface insights without affecting the score."""

# Use explicit imports when needed:
# from analyzer.insights.generator import generate_insights
# from analyzer.insights.entities import extract_entities
