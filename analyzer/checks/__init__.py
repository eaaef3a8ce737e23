"""Heuristic check battery.

Use explicit imports:
# from analyzer.checks.battery import run_all_checks, CHECK_REGISTRY
"""
