"""Unified command-line interface for the daicho project.

Usage:
    daicho parse ledger.txt
    daicho parse ledger.txt --format json
    daicho parse - < ledger.txt
    daicho vendor header.txt
    daicho serve [--port]
"""
