import argparse
import logging
import time
import numpy as np
import matplotlib.pyplot as plt

from fixed_mlp import LayerStack
from fixed_mlp.training import (
    DEFAULT_EVAL_SAMPLES,
    DEFAULT_MAX_STEPS,
    DEFAULT_STREAK_THRESHOLD,
    evaluate_network,
    format_report,
    train_network,
)


# --- Plotting Function ---

def plot_training_history(history: dict):
    """Plots the network output for every training sample against its target.

    Args:
        history: Dictionary returned by `train_network`.
    """
    steps = history['step']
    correct_steps = [s for s, ok in zip(steps, history['correct']) if ok]
    correct_outputs = [o for o, ok in zip(history['output'], history['correct']) if ok]
    wrong_steps = [s for s, ok in zip(steps, history['correct']) if not ok]
    wrong_outputs = [o for o, ok in zip(history['output'], history['correct']) if not ok]

    plt.figure("Binary AND Training History", figsize=(10, 5))
    plt.plot(steps, history['output'], color='gray', alpha=0.4, label='Output')
    plt.scatter(correct_steps, correct_outputs, color='tab:green', s=20, label='Correct')
    plt.scatter(wrong_steps, wrong_outputs, color='tab:red', s=20, label='Wrong')
    plt.scatter(steps, history['expected'], marker='x', color='k', s=15, label='Expected')
    plt.axhline(0.5, linestyle='--', color='tab:blue', alpha=0.6, label='Decision threshold')
    plt.xlabel('Sample')
    plt.ylabel('Network output')
    plt.title('Binary AND Training')
    plt.legend()
    plt.grid(True, alpha=0.3)
    plt.tight_layout()


# --- Binary AND Example ---

def binary_and_example(seed, streak, max_steps, samples, plot):
    """Trains a [2, 2, 1] network on boolean AND and reports its accuracy."""
    logger = logging.getLogger("BinaryAndExample")

    train_rng, eval_rng = (np.random.default_rng(s) for s in np.random.SeedSequence(seed).spawn(2))

    network = LayerStack([2, 2, 1])
    logger.info(f"Network Summary:\n{network.summary()}")

    # --- Training ---
    logger.info("Starting training...")
    start_time = time.time()
    history = train_network(network, train_rng, streak_threshold=streak, max_steps=max_steps)
    logger.info(f"Training used {len(history['step'])} samples in {time.time() - start_time:.3f} seconds")

    for inputs in ([0, 0], [0, 1], [1, 0], [1, 1]):
        probe = network.copy()
        probe.compute(inputs)
        logger.info(f"Input: {inputs} -> Output: {probe.get_output()[0]:.4f}")

    # --- Evaluation ---
    logger.info(f"Evaluating on {samples} random samples...")
    metrics = evaluate_network(network, eval_rng, samples=samples)
    print(format_report(metrics))

    if plot:
        plot_training_history(history)
        plt.show()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Train a fixed-size network on boolean AND.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for sample generation (random if omitted).")
    parser.add_argument("--streak", type=int, default=DEFAULT_STREAK_THRESHOLD,
                        help="Consecutive correct answers that end training.")
    parser.add_argument("--max-steps", type=int, default=DEFAULT_MAX_STEPS, help="Upper bound on training samples.")
    parser.add_argument("--samples", type=int, default=DEFAULT_EVAL_SAMPLES, help="Number of evaluation samples.")
    parser.add_argument("--plot", action="store_true", help="Plot the training trajectory.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser


# --- Script Execution ---

if __name__ == "__main__":
    args = build_parser().parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    binary_and_example(args.seed, args.streak, args.max_steps, args.samples, args.plot)
