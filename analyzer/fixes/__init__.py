"""Recommendation generation from failed checks."""

# Use explicit imports when needed:
# from analyzer.fixes.generator import generate_recommendations, top_recommendations
# from analyzer.fixes.templates import FIX_TEMPLATES
