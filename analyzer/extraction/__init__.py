"""HTML extraction, text segmentation and readability scoring.

Use explicit imports:
# from analyzer.extraction.parser import ParsedPage, parse_page
# from analyzer.extraction.readability import calculate_readability
"""
