import copy
import numpy as np
from typing import List, Sequence, Union
import logging

from .layer import DEFAULT_INITIAL_WEIGHT, Layer, VectorLike, as_vector
from .matrix import DenseMatrix


class LayerStack:
    """
    A feed-forward network made of a fixed chain of Layers.

    The widths are given once at construction, e.g. [2, 2, 1] for two inputs,
    one hidden layer of two neurons and a single output neuron. Layer k takes
    widths[k] inputs and has widths[k+1] neurons, so the chain is consistent by
    construction and never changes afterwards.

    The stack can be seen recursively as a `head` layer followed by a `tail`,
    where the tail is either another LayerStack over the remaining layers or,
    when only one layer remains, the terminal (output) Layer itself. Those
    views share the same Layer objects; there is a single owning list.
    """

    def __init__(self, widths: Sequence[int], initial_weight: float = DEFAULT_INITIAL_WEIGHT):
        """
        Builds every layer of the network.

        Args:
            widths: Input width followed by the width of every layer, at least
                    two entries.
            initial_weight: Value every weight of every layer starts with.

        Raises:
            ValueError: If fewer than two widths are given or a width is not a
                        positive integer.
        """
        widths = list(widths)
        if len(widths) < 2:
            raise ValueError("LayerStack needs at least an input width and an output width.")
        for i, width in enumerate(widths):
            if isinstance(width, bool) or int(width) != width or width < 1:
                raise ValueError(f"Width at position {i} must be a positive integer, got {width!r}")

        self.layers: List[Layer] = [
            Layer(
                input_count    = int(widths[i]),
                width          = int(widths[i + 1]),
                initial_weight = initial_weight,
                id             = i,
            )
            for i in range(len(widths) - 1)
        ]
        self._check_chain()

        logging.info(f"Created layer stack with widths: {self.widths}")

    @classmethod
    def _from_layers(cls, layers: List[Layer]) -> 'LayerStack':
        # View over existing layers; no new storage.
        stack = cls.__new__(cls)
        stack.layers = layers
        stack._check_chain()
        return stack

    def _check_chain(self):
        for previous, following in zip(self.layers, self.layers[1:]):
            if previous.width != following.input_count:
                raise ValueError(
                    f"Layer {previous.id} has {previous.width} neurons but layer "
                    f"{following.id} expects {following.input_count} inputs"
                )

    @property
    def widths(self) -> List[int]:
        """Input width followed by the width of every layer."""
        return [self.layers[0].input_count] + [layer.width for layer in self.layers]

    @property
    def head(self) -> Layer:
        """The first layer, fed directly by the network inputs."""
        return self.layers[0]

    @property
    def tail(self) -> Union['LayerStack', Layer]:
        """
        Everything after the head.

        Returns:
            A LayerStack view over the remaining layers, or the terminal Layer
            when exactly one layer follows the head.

        Raises:
            ValueError: If the stack has a single layer (it has no tail).
        """
        if len(self.layers) == 1:
            raise ValueError("A single-layer stack has no tail; its head is the output layer.")
        if len(self.layers) == 2:
            return self.layers[1]
        return LayerStack._from_layers(self.layers[1:])

    def get_subnet(self) -> Union['LayerStack', Layer]:
        """Alias of `tail`."""
        return self.tail

    @property
    def output_layer(self) -> Layer:
        return self.layers[-1]

    def compute(self, inputs: VectorLike):
        """
        Forward pass through every layer, head first.

        Args:
            inputs: Vector of widths[0] values.

        Raises:
            ValueError: If the input vector has the wrong shape.
        """
        current = inputs
        for layer in self.layers:
            layer.compute(current)
            current = layer.neurons
        logging.debug(f"Forward pass - network output: {self.output_layer.neurons}")

    def backprop(self, expected: VectorLike):
        """
        Backward pass, output layer first.

        The output layer moves its weights towards `expected` directly; then
        each earlier layer derives its deltas from the layer after it (whose
        weights have already been updated) and updates its own weights.

        Args:
            expected: Target values, one per output neuron.

        Raises:
            ValueError: If `expected` does not match the output width.
        """
        # Validate before touching any layer.
        expected = as_vector(expected, self.output_layer.width, "expected values", self.output_layer.id)

        self.output_layer.backprop(expected)
        for index in range(len(self.layers) - 2, -1, -1):
            logging.debug(f"Backward pass - Layer {index} pulling deltas from layer {index + 1}")
            self.layers[index].propagate(self.layers[index + 1])

    def get_output(self) -> np.ndarray:
        """Returns a copy of the output layer's activations."""
        return self.output_layer.get_neurons()

    def get_neurons(self, index: int = 0) -> np.ndarray:
        """Returns a copy of layer `index`'s activations (head by default)."""
        return self.layers[index].get_neurons()

    def get_deltas(self, index: int = 0) -> np.ndarray:
        """Returns a copy of layer `index`'s deltas (head by default)."""
        return self.layers[index].get_deltas()

    def get_weights(self, index: int = 0) -> DenseMatrix:
        """Returns a copy of layer `index`'s weight matrix (head by default)."""
        return self.layers[index].get_weights()

    def copy(self) -> 'LayerStack':
        """Returns an independent network with the same weights and state."""
        return copy.deepcopy(self)

    def __copy__(self) -> 'LayerStack':
        return self.copy()

    def __len__(self) -> int:
        return len(self.layers)

    def summary(self) -> str:
        """
        Generates a text summary of the network architecture and parameters.

        Returns:
            A string containing the network summary.
        """
        summary_str = "\n" + "="*50 + "\n"
        summary_str += "Layer Stack Summary\n"
        summary_str += "="*50 + "\n"
        total_params = 0
        for i, layer in enumerate(self.layers):
            layer_params = len(layer.weights)
            total_params += layer_params
            role = "output" if i == len(self.layers) - 1 else "hidden"
            summary_str += f"Layer {i}: {layer.__class__.__name__} ({role})\n"
            summary_str += f"  Input Shape: ({layer.input_count},)\n"
            summary_str += f"  Output Shape: ({layer.width},)\n"
            summary_str += f"  Weight Shape: {layer.weights.shape}\n"
            summary_str += f"  Parameters: {layer_params}\n"
            summary_str += "-"*50 + "\n"

        summary_str += f"Total Parameters: {total_params}\n"
        summary_str += "="*50 + "\n"
        return summary_str

    def __repr__(self):
        return f"LayerStack(widths={self.widths})"
