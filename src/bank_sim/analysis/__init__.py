# src/bank_sim/analysis/__init__.py

"""
Optional analysis helpers for finished runs.

Requires the '[analysis]' extra: pip install bank-sim[analysis]
"""
