"""
RL Algorithm Modules.

Each algorithm is self-contained in algorithms/<name>/ with run.py as the
entry point. Components reused across algorithms live in algorithms/shared/.
"""
