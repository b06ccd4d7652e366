# =============================================================================
# src/cli/__init__.py - CLI Module Overview
# =============================================================================
#
# Standalone command-line tools for rendezvous, each runnable via
# `python -m src.cli.<module>`:
#
#   MATCH (match.py)
#     Runs the occurrence matching engine over picks and raw event pools
#     saved in a JSON file.  No network access, no API key required.
#
# All CLI modules use argparse for argument parsing.
# =============================================================================

"""CLI tools for rendezvous.

- ``python -m src.cli.match`` - run the matcher over saved event pools.
"""
