import copy

import numpy as np
import pytest

from fixed_mlp import Layer, LayerStack


def test_two_two_one_forward_pass_with_constant_weights() -> None:
    network = LayerStack([2, 2, 1])
    network.compute([1.0, 1.0])
    np.testing.assert_array_equal(network.get_neurons(0), [1.0, 1.0])
    np.testing.assert_array_equal(network.get_output(), [1.0])


@pytest.mark.parametrize("widths", [[1, 1], [2, 3], [2, 2, 1], [4, 3, 5, 2], [3, 1, 1, 1, 6]])
def test_output_length_matches_last_width(widths) -> None:
    network = LayerStack(widths)
    network.compute(np.ones(widths[0]))
    assert network.get_output().shape == (widths[-1],)
    assert network.widths == widths
    assert len(network) == len(widths) - 1


def test_layers_are_chained_by_width() -> None:
    network = LayerStack([4, 3, 5, 2])
    shapes = [(layer.input_count, layer.width) for layer in network.layers]
    assert shapes == [(4, 3), (3, 5), (5, 2)]
    # weights are (neurons, inputs)
    assert network.get_weights(1).shape == (5, 3)


def test_head_and_tail_views_share_layers() -> None:
    network = LayerStack([4, 3, 5, 2])
    assert network.head is network.layers[0]

    tail = network.tail
    assert isinstance(tail, LayerStack)
    assert tail.widths == [3, 5, 2]
    assert tail.head is network.layers[1]

    terminal = tail.get_subnet()
    assert isinstance(terminal, Layer)
    assert terminal is network.layers[-1]


def test_single_layer_stack_has_no_tail() -> None:
    network = LayerStack([3, 2])
    with pytest.raises(ValueError):
        network.tail


def test_single_layer_stack_backprop_is_output_rule() -> None:
    network = LayerStack([2, 1])
    reference = Layer(2, 1)

    network.compute([1.0, 0.5])
    reference.compute([1.0, 0.5])
    network.backprop([2.0])
    reference.backprop([2.0])

    np.testing.assert_array_equal(network.get_deltas(), reference.get_deltas())
    assert network.get_weights() == reference.get_weights()


def test_backprop_on_two_two_one() -> None:
    network = LayerStack([2, 2, 1])

    # [0, 1] -> 0: output delta -0.5, output weights untouched (target is 0),
    # hidden delta -0.25, hidden weights 0.5 + 0.5 * -0.25
    network.compute([0.0, 1.0])
    np.testing.assert_array_equal(network.get_output(), [0.5])
    network.backprop([0.0])
    np.testing.assert_array_equal(network.get_deltas(-1), [-0.5])
    np.testing.assert_array_equal(network.get_weights(-1).to_array(), [[0.5], [0.5]])
    np.testing.assert_array_equal(network.get_deltas(0), [-0.25, -0.25])
    np.testing.assert_array_equal(network.get_weights(0).to_array(), np.full((2, 2), 0.375))

    # [1, 1] -> 1: output 0.75, delta 0.25, output weights 0.625,
    # hidden delta uses the updated output weights: 0.25 * 0.625
    network.compute([1.0, 1.0])
    np.testing.assert_array_equal(network.get_neurons(0), [0.75, 0.75])
    np.testing.assert_array_equal(network.get_output(), [0.75])
    network.backprop([1.0])
    np.testing.assert_array_equal(network.get_weights(-1).to_array(), [[0.625], [0.625]])
    np.testing.assert_array_equal(network.get_deltas(0), [0.15625, 0.15625])
    np.testing.assert_array_equal(network.get_weights(0).to_array(), np.full((2, 2), 0.453125))


def test_backprop_reaches_every_layer_of_a_deep_stack() -> None:
    network = LayerStack([2, 3, 3, 3, 1])
    before = [network.get_weights(i) for i in range(len(network))]

    network.compute([1.0, 1.0])
    network.backprop([5.0])

    for i in range(len(network)):
        assert network.get_weights(i) != before[i]
        assert np.all(network.get_deltas(i) > 0)


def test_compute_is_deterministic() -> None:
    first = LayerStack([3, 4, 2], initial_weight=0.2)
    second = LayerStack([3, 4, 2], initial_weight=0.2)
    first.compute([0.5, -1.0, 3.0])
    second.compute([0.5, -1.0, 3.0])
    np.testing.assert_array_equal(first.get_output(), second.get_output())


@pytest.mark.parametrize("copier", [copy.copy, copy.deepcopy, LayerStack.copy])
def test_copy_is_independent(copier) -> None:
    original = LayerStack([2, 2, 1])
    original.compute([1.0, 1.0])
    snapshot = [original.get_weights(i) for i in range(len(original))]

    clone = copier(original)
    clone.compute([0.0, 1.0])
    clone.backprop([0.0])

    for i in range(len(original)):
        assert original.get_weights(i) == snapshot[i]
    assert clone.get_weights(0) != snapshot[0]
    np.testing.assert_array_equal(original.get_output(), [1.0])


@pytest.mark.parametrize("widths", [[], [3], [2, 0, 1], [2, -1], [2, 1.5], [True, 2]])
def test_invalid_widths_raise(widths) -> None:
    with pytest.raises(ValueError):
        LayerStack(widths)


def test_wrong_input_length_raises() -> None:
    network = LayerStack([2, 2, 1])
    with pytest.raises(ValueError):
        network.compute([1.0, 1.0, 1.0])


def test_wrong_expected_length_raises_without_updating() -> None:
    network = LayerStack([2, 2, 1])
    network.compute([1.0, 1.0])
    with pytest.raises(ValueError):
        network.backprop([1.0, 0.0])
    assert network.get_weights(-1) == LayerStack([2, 2, 1]).get_weights(-1)


def test_summary_mentions_every_layer() -> None:
    text = LayerStack([2, 2, 1]).summary()
    assert "Layer 0" in text and "Layer 1" in text
    assert "Total Parameters: 6" in text
