"""Adapter for the optional external narrative analyzer."""

# Use explicit imports when needed:
# from analyzer.narrative.providers import get_provider, MockNarrativeProvider
# from analyzer.narrative.models import NarrativeAnalysis
