import numpy as np
from typing import Union
import logging


class Rectifier:
    """Rectifying activation used by every layer of the network.

    Mathematical form:
        forward: f(x) = max(0, x)
        backward: g(y) = 1 if y > 0 else 0

    Note that `backward` is evaluated on the *output* of the activation (the
    stored neuron values), not on the weighted sum that produced it. For this
    activation both give the same gate whenever the neuron is active.
    """

    def forward(self, x: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
        """Compute the rectified value: max(0, x)"""
        logging.debug(f"Rectifier forward - input shape: {np.shape(x)}")
        return np.where(x > 0, x, 0.0)

    def backward(self, y: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
        """Compute the update gate: 1 if y > 0 else 0"""
        logging.debug(f"Rectifier backward - input shape: {np.shape(y)}")
        return np.where(y > 0, 1.0, 0.0)


RECTIFIER = Rectifier()


def rectify(x: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """Shortcut for ``RECTIFIER.forward``."""
    return RECTIFIER.forward(x)


def gate(y: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """Shortcut for ``RECTIFIER.backward``."""
    return RECTIFIER.backward(y)
