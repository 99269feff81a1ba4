from .matrix import DenseMatrix
from .activations import Rectifier
from .layer import DEFAULT_INITIAL_WEIGHT, LEARNING_RATE, Layer
from .network import LayerStack

__all__ = [
    "DenseMatrix",
    "Rectifier",
    "Layer",
    "LayerStack",
    "LEARNING_RATE",
    "DEFAULT_INITIAL_WEIGHT",
]
