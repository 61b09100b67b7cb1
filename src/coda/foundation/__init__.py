"""Foundation layer: configuration, errors, logging and generic utilities.

Nothing in here depends on the diff engine or the CLI.
"""
