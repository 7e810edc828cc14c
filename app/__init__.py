"""
Command-line entry point for running cash-flow simulations.
"""
