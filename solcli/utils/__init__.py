"""
Utility modules: unit conversion and Solana wallet helpers.
"""
