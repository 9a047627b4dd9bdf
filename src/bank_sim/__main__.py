# src/bank_sim/__main__.py

from .cli import run

run(prog="python -m bank_sim")
