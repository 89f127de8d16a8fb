"""
TD(lambda) Algorithm Module with Eligibility Traces.

Online linear TD(lambda) prediction. Lambda controls the trace decay:
- lambda=0: TD(0), single-step updates
- lambda=1: Monte Carlo, full episode returns
"""

from algorithms.td_lambda.eligibility_traces import Trace
from algorithms.td_lambda.predictor import TDLambda, UnrepresentableStateError
from algorithms.td_lambda.run import train, evaluate, TrainingResult, EvalResult

__all__ = [
    "Trace",
    "TDLambda",
    "UnrepresentableStateError",
    "train",
    "evaluate",
    "TrainingResult",
    "EvalResult",
]
