"""
Core configuration, models and errors shared by the wallet utilities and the CLI.
"""
