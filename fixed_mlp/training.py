"""
Training and evaluation driver for the boolean AND task.

The network is shown random pairs of booleans and asked whether both are
set. Training stops once the network answers a given number of samples in a
row correctly (the answer is read before the weights are updated), after
which the trained network is evaluated on fresh random samples.

Only the public operations of LayerStack are used here.
"""

import numpy as np
from typing import Dict, List, Optional, Sequence, Tuple
import logging

from .network import LayerStack

DEFAULT_WIDTHS = (2, 2, 1)
DEFAULT_STREAK_THRESHOLD = 3
DEFAULT_MAX_STEPS = 10_000
DEFAULT_EVAL_SAMPLES = 100_000

# An output above this value counts as "true".
DECISION_THRESHOLD = 0.5


def boolean_and_sample(rng: np.random.Generator) -> Tuple[np.ndarray, np.ndarray]:
    """
    Draws one random AND case.

    Args:
        rng: Source of randomness.

    Returns:
        Tuple containing:
            - inputs (np.ndarray): [left, right] as 0.0/1.0.
            - expected (np.ndarray): [left AND right] as 0.0/1.0.
    """
    left, right = rng.integers(0, 2, size=2)
    inputs = np.array([left, right], dtype=float)
    expected = np.array([float(left and right)])
    return inputs, expected


def is_correct(output: np.ndarray, expected: np.ndarray) -> bool:
    """True when the thresholded first output matches the first expected value."""
    return bool((output[0] > DECISION_THRESHOLD) == (expected[0] > DECISION_THRESHOLD))


def train_network(
    network: LayerStack,
    rng: np.random.Generator,
    streak_threshold: int = DEFAULT_STREAK_THRESHOLD,
    max_steps: int = DEFAULT_MAX_STEPS,
) -> Dict[str, List]:
    """
    Trains `network` in place until it is right `streak_threshold` times in a row.

    Each step computes the output for a random sample, records whether it was
    correct, then runs `backprop` with the expected value.

    Args:
        network: A network with two inputs and one output.
        rng: Source of randomness for the samples.
        streak_threshold: Number of consecutive correct answers that ends training.
        max_steps: Upper bound on the number of samples shown.

    Returns:
        The training history: per step the sample inputs, output, expected value,
        correctness and current streak.

    Raises:
        ValueError: If `streak_threshold` or `max_steps` is not positive.
    """
    if streak_threshold <= 0:
        raise ValueError(f"streak_threshold must be positive, got {streak_threshold}")
    if max_steps <= 0:
        raise ValueError(f"max_steps must be positive, got {max_steps}")

    history: Dict[str, List] = {
        'step': [],
        'inputs': [],
        'output': [],
        'expected': [],
        'correct': [],
        'streak': [],
    }

    correct_in_a_row = 0
    for step in range(max_steps):
        inputs, expected = boolean_and_sample(rng)
        network.compute(inputs)
        output = network.get_output()
        network.backprop(expected)

        correct = is_correct(output, expected)
        correct_in_a_row = correct_in_a_row + 1 if correct else 0

        history['step'].append(step)
        history['inputs'].append(inputs)
        history['output'].append(float(output[0]))
        history['expected'].append(float(expected[0]))
        history['correct'].append(correct)
        history['streak'].append(correct_in_a_row)

        if correct_in_a_row >= streak_threshold:
            logging.info(f"Training finished after {step + 1} samples.")
            return history

    logging.warning(f"Stopped after {max_steps} samples without {streak_threshold} correct answers in a row.")
    return history


def evaluate_network(
    network: LayerStack,
    rng: np.random.Generator,
    samples: int = DEFAULT_EVAL_SAMPLES,
) -> Dict[str, float]:
    """
    Measures how often the network answers random AND cases correctly.

    The evaluation runs on a copy, so the caller's network keeps its state.

    Args:
        network: A trained network with two inputs and one output.
        rng: Source of randomness for the samples.
        samples: Number of samples to evaluate.

    Returns:
        A dictionary with 'correct', 'wrong', 'total' and 'accuracy'.

    Raises:
        ValueError: If `samples` is not positive.
    """
    if samples <= 0:
        raise ValueError(f"samples must be positive, got {samples}")

    network = network.copy()
    correct = 0
    for _ in range(samples):
        inputs, expected = boolean_and_sample(rng)
        network.compute(inputs)
        if is_correct(network.get_output(), expected):
            correct += 1

    metrics = {
        'correct': correct,
        'wrong': samples - correct,
        'total': samples,
        'accuracy': correct / samples,
    }
    logging.debug(f"Evaluation metrics: {metrics}")
    return metrics


def run_trial(
    seed: Optional[int],
    widths: Sequence[int] = DEFAULT_WIDTHS,
    streak_threshold: int = DEFAULT_STREAK_THRESHOLD,
    max_steps: int = DEFAULT_MAX_STEPS,
) -> Tuple[LayerStack, Dict[str, List]]:
    """
    Builds a fresh network and trains it with a generator seeded by `seed`.

    Returns:
        Tuple of the trained network and its training history.
    """
    rng = np.random.default_rng(seed)
    network = LayerStack(widths)
    history = train_network(network, rng, streak_threshold=streak_threshold, max_steps=max_steps)
    return network, history


def format_report(metrics: Dict[str, float]) -> str:
    """Formats evaluation metrics as 'Correct guesses: c/t --- p%'."""
    return (f"Correct guesses: {metrics['correct']}/{metrics['total']} --- "
            f"{metrics['accuracy'] * 100:.4g}%")
