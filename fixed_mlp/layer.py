import numpy as np
from typing import Sequence, Union
import logging

from .activations import Rectifier
from .matrix import DenseMatrix, constant_matrix

# Shared by every layer of every network.
LEARNING_RATE = 0.5

# Constant weight value used at construction so runs are reproducible.
DEFAULT_INITIAL_WEIGHT = 0.5

# Value the neurons hold before the first forward pass.
INITIAL_NEURON_VALUE = 0.5

DTYPE = np.float64

VectorLike = Union[Sequence[float], np.ndarray]


def as_vector(values: VectorLike, expected_size: int, what: str, layer_id: int = 0) -> np.ndarray:
    """
    Converts `values` to a 1D float array and checks its length.

    Args:
        values: Any sequence of numbers.
        expected_size: Required number of elements.
        what: Name used in error messages ('inputs', 'expected values', ...).
        layer_id: Layer identifier used in error messages.

    Returns:
        A 1D array of dtype DTYPE.

    Raises:
        ValueError: If `values` is not 1D or has the wrong length.
    """
    vector = np.asarray(values, dtype=DTYPE)
    if vector.ndim != 1:
        raise ValueError(f"Layer {layer_id}: Expected a 1D vector of {what}, got shape {vector.shape}")
    if vector.shape[0] != expected_size:
        raise ValueError(f"Layer {layer_id}: Expected {expected_size} {what}, got {vector.shape[0]}")
    return vector


class Layer:
    """
    A single fully connected layer with a rectifying activation and no bias.

    The layer keeps the state of its most recent passes so that the network
    can chain them:

    Key Attributes:
        weights (DenseMatrix): Size (width, input_count). Row i holds the weights
                               from input i, column n holds every incoming weight
                               of neuron n.
        neurons (np.ndarray): Shape (width,). Output of the last `compute`.
        deltas (np.ndarray): Shape (width,). Error signal of the last `backprop`
                             or `propagate`.
        activation_fn (Rectifier): The (fixed) activation function.

    Two backward rules are provided. `backprop` is the output-layer rule and
    consumes the target values directly. `propagate` is the hidden-layer rule
    and pulls its deltas from the following layer, which must already have
    been updated.
    """

    def __init__(
        self,
        input_count: int,
        width: int,
        initial_weight: float = DEFAULT_INITIAL_WEIGHT,
        id: int = 0,
    ):
        """
        Initializes the layer.

        Args:
            input_count: Number of inputs (width of the previous layer).
            width: Number of neurons in this layer.
            initial_weight: Value every weight starts with.
            id: An identifier for the layer (for logging/debugging).

        Raises:
            ValueError: If `input_count` or `width` is not a positive integer.
        """
        if int(input_count) != input_count or int(width) != width or input_count < 1 or width < 1:
            raise ValueError(
                f"Layer {id}: input_count and width must be positive integers, "
                f"got input_count={input_count}, width={width}"
            )

        self.input_count = int(input_count)
        self.width = int(width)
        self.id = id
        self.activation_fn = Rectifier()

        self.weights = constant_matrix(self.width, self.input_count, initial_weight)
        self.neurons = np.full(self.width, INITIAL_NEURON_VALUE, dtype=DTYPE)
        self.deltas = np.zeros(self.width, dtype=DTYPE)

        logging.debug(
            f"Layer #{self.id} created: input_count={self.input_count}, "
            f"width={self.width}, initial_weight={initial_weight}"
        )

    def compute(self, inputs: VectorLike):
        """
        Forward pass: neurons[n] = max(0, sum_i inputs[i] * weights(n, i)).

        Args:
            inputs: Vector of `input_count` values.

        Raises:
            ValueError: If the input vector has the wrong shape.
        """
        inputs = as_vector(inputs, self.input_count, "inputs", self.id)

        # (input_count,) @ (input_count, width) -> (width,)
        net_input = inputs @ self.weights.grid()
        self.neurons[:] = self.activation_fn.forward(net_input)
        logging.debug(f"Layer {self.id} forward - output: {self.neurons}")

    def backprop(self, expected: VectorLike):
        """
        Output-layer backward rule.

        deltas[n] = expected[n] - neurons[n], then every incoming weight of
        neuron n is moved by LEARNING_RATE * deltas[n] * expected[n] * gate(neurons[n]).

        Only meaningful when this layer is the last layer of its network.

        Args:
            expected: Target values, one per neuron.

        Raises:
            ValueError: If `expected` has the wrong shape.
        """
        expected = as_vector(expected, self.width, "expected values", self.id)

        self.deltas[:] = expected - self.neurons
        self._update_weights(self.deltas * expected)
        logging.debug(f"Layer {self.id} backprop (output) - deltas: {self.deltas}")

    def propagate(self, next_layer: 'Layer'):
        """
        Hidden-layer backward rule.

        deltas[n] = sum_j next.deltas[j] * next.weights(j, n), then every incoming
        weight of neuron n is moved by LEARNING_RATE * deltas[n] * gate(neurons[n]).

        `next_layer` must already have run its own backward step, so its deltas
        and (updated) weights are the ones used here.

        Args:
            next_layer: The layer fed by this one.

        Raises:
            ValueError: If `next_layer` does not take this layer's neurons as input.
        """
        if next_layer.input_count != self.width:
            raise ValueError(
                f"Layer {self.id}: next layer {next_layer.id} expects {next_layer.input_count} "
                f"inputs but this layer has {self.width} neurons"
            )

        # next weights grid is (width, next_width): row n holds neuron n's outgoing weights
        self.deltas[:] = next_layer.weights.grid() @ next_layer.deltas
        self._update_weights(self.deltas)
        logging.debug(f"Layer {self.id} backprop (hidden) - deltas: {self.deltas}")

    def _update_weights(self, signal: np.ndarray):
        # Same step for every input of a neuron; the input values do not enter.
        step = LEARNING_RATE * signal * self.activation_fn.backward(self.neurons)
        self.weights.grid()[:, :] += step

    def get_neurons(self) -> np.ndarray:
        """Returns a copy of the most recent activations."""
        return self.neurons.copy()

    def get_deltas(self) -> np.ndarray:
        """Returns a copy of the most recent error signal."""
        return self.deltas.copy()

    def get_weights(self) -> DenseMatrix:
        """Returns a copy of the weight matrix."""
        return self.weights.copy()

    def get_output(self) -> np.ndarray:
        """Same as `get_neurons`; the output of a lone layer is its activations."""
        return self.get_neurons()

    def summary(self) -> str:
        """Returns a string summary of the layer's configuration."""
        return (
            f"Layer Summary (id={self.id}):\n"
            f"  Inputs: {self.input_count}\n"
            f"  Neurons: {self.width}\n"
            f"  Activation: {self.activation_fn.__class__.__name__}\n"
            f"  Weights shape: {self.weights.shape}\n"
            f"  Parameters: {len(self.weights):,} parameters\n"
        )

    def __repr__(self):
        return (f"Layer(id={self.id}, input_count={self.input_count}, "
                f"width={self.width})")
