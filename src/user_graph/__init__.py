"""User Graph - cluster co-spent addresses and build the cluster value-flow graph."""

from user_graph.solver.solve import analyze, main_solve, solve

__all__ = ["analyze", "solve", "main_solve"]
