"""
TD(lambda) Entry Point.

train() runs TD(lambda) prediction on the random walk under the uniform
random policy; evaluate() scores a weight checkpoint against the closed-form
state values.
"""

import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

import torch

from algorithms.shared.linear import LinearFunctionApproximator
from algorithms.td_lambda.config import TDLambdaConfig, load_config
from algorithms.td_lambda.eligibility_traces import Trace
from algorithms.td_lambda.predictor import TDLambda
from domains.random_walk import RandomWalk
from params.dense import DenseBuffer
from projectors.tabular import TabularProjector


@dataclass
class TrainingResult:
    """Result of training run.

    Attributes:
        checkpoints: List of saved checkpoint paths
        metrics: Per-episode metrics (free-form)
    """
    checkpoints: List[str]
    metrics: Dict[str, Any]


@dataclass
class EvalResult:
    """Result of evaluation run.

    Attributes:
        values: Predicted value per non-terminal state
        rmse: Root-mean-square error against the true values
    """
    values: List[float]
    rmse: float


def build_predictor(projector: TabularProjector, config: TDLambdaConfig) -> TDLambda:
    """Wire trace, approximator and parameters into a fresh predictor."""
    return TDLambda(
        trace=Trace(config.lambda_, projector.dim),
        fa_theta=LinearFunctionApproximator(projector),
        alpha=config.alpha,
        gamma=config.gamma,
    )


def value_rmse(fa_theta: LinearFunctionApproximator, env: RandomWalk) -> float:
    """RMS error of the approximator over all non-terminal states."""
    predicted = torch.tensor(
        [fa_theta.evaluate(s) for s in range(env.n_states)], dtype=torch.float64
    )
    target = torch.tensor(env.true_values(), dtype=torch.float64)
    return math.sqrt(float(((predicted - target) ** 2).mean()))


def save_checkpoint(predictor: TDLambda, n_states: int, episode: int, path: str) -> None:
    """Save the weight buffer with enough metadata to rebuild the approximator."""
    torch.save({
        "weights": predictor.weights().array,
        "n_states": n_states,
        "episode": episode,
    }, path)


def train(
    env_factory: Callable[[], RandomWalk],
    config_path: str
) -> TrainingResult:
    """Train a TD(lambda) predictor.

    Args:
        env_factory: Callable that returns a new RandomWalk instance
        config_path: Path to the YAML run configuration

    Returns:
        TrainingResult with checkpoint paths and training metrics
    """
    config = load_config(config_path)

    env = env_factory()
    projector = TabularProjector(env.n_states)
    predictor = build_predictor(projector, config)

    checkpoint_dir = config.save_path
    checkpoint_dir.mkdir(parents=True, exist_ok=True)

    checkpoints = []
    metrics = {
        "episode_lengths": [],
        "episode_returns": [],
        "mean_abs_td_errors": [],
        "rmse": [],
        "alphas": [],
    }

    print(f"Starting training for {config.episodes} episodes "
          f"({env.n_states}-state random walk)...")

    total_steps = 0
    for episode in range(1, config.episodes + 1):
        env.reset()
        abs_td_errors = []
        episode_return = 0.0

        while True:
            t = env.step(env.sample_action())
            predictor.handle(t)

            abs_td_errors.append(abs(predictor.last_td_error))
            episode_return += t.reward

            if t.to.is_terminal():
                break

        total_steps += len(abs_td_errors)
        rmse = value_rmse(predictor.fa_theta, env)

        metrics["episode_lengths"].append(len(abs_td_errors))
        metrics["episode_returns"].append(episode_return)
        metrics["mean_abs_td_errors"].append(sum(abs_td_errors) / len(abs_td_errors))
        metrics["rmse"].append(rmse)
        metrics["alphas"].append(predictor.alpha.value())

        if episode % config.log_frequency == 0:
            window = metrics["mean_abs_td_errors"][-config.log_frequency:]
            print(f"Episode {episode}/{config.episodes} | "
                  f"TD error: {sum(window) / len(window):.4f} | "
                  f"RMSE: {rmse:.4f} | "
                  f"Alpha: {predictor.alpha.value():.4f} | "
                  f"Steps: {total_steps}")

        if episode % config.save_frequency == 0:
            checkpoint_path = str(checkpoint_dir / f"td_lambda_episode_{episode}.pt")
            save_checkpoint(predictor, env.n_states, episode, checkpoint_path)
            checkpoints.append(checkpoint_path)
            print(f"  Saved checkpoint: {checkpoint_path}")

    final_checkpoint = str(checkpoint_dir / "td_lambda_final.pt")
    save_checkpoint(predictor, env.n_states, config.episodes, final_checkpoint)
    checkpoints.append(final_checkpoint)

    metrics["final_rmse"] = metrics["rmse"][-1]
    metrics["total_episodes"] = config.episodes
    metrics["total_steps"] = total_steps

    print(f"\nTraining complete!")
    print(f"Total steps: {total_steps}")
    print(f"Final RMSE: {metrics['final_rmse']:.4f}")

    return TrainingResult(checkpoints=checkpoints, metrics=metrics)


def evaluate(
    env_factory: Callable[[], RandomWalk],
    checkpoint_path: Optional[str],
    predictor: Optional[TDLambda] = None
) -> EvalResult:
    """Evaluate learned state values against the closed-form values.

    Args:
        env_factory: Callable that returns a new RandomWalk instance
        checkpoint_path: Path to saved weights (None if predictor provided)
        predictor: Optional in-memory predictor

    Returns:
        EvalResult with predicted values and RMSE
    """
    env = env_factory()

    if predictor is None:
        checkpoint = torch.load(checkpoint_path, map_location="cpu")
        if checkpoint["n_states"] != env.n_states:
            raise ValueError(
                f"Checkpoint was trained on {checkpoint['n_states']} states, "
                f"environment has {env.n_states}"
            )
        fa_theta = LinearFunctionApproximator(
            TabularProjector(env.n_states), DenseBuffer(checkpoint["weights"])
        )
    else:
        fa_theta = predictor.fa_theta

    values = [fa_theta.evaluate(s) for s in range(env.n_states)]

    return EvalResult(values=values, rmse=value_rmse(fa_theta, env))


def _create_default_env_factory(n_states: int = 5, seed: Optional[int] = None) -> Callable[[], RandomWalk]:
    """Create a default environment factory.

    Args:
        n_states: Number of non-terminal states
        seed: Optional seed for the behaviour policy

    Returns:
        Factory callable
    """
    def factory() -> RandomWalk:
        return RandomWalk(n_states=n_states, seed=seed)
    return factory


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="TD(lambda) Training and Evaluation")
    parser.add_argument("mode", choices=["train", "evaluate"], help="Mode to run")
    parser.add_argument("--config", default="algorithms/td_lambda/config.yaml",
                        help="Path to config file")
    parser.add_argument("--checkpoint", help="Checkpoint path for evaluation")

    args = parser.parse_args()

    run_config = load_config(args.config)
    env_factory = _create_default_env_factory(run_config.n_states, run_config.seed)

    if args.mode == "train":
        result = train(env_factory, args.config)
        print(f"\nTraining completed. Checkpoints: {result.checkpoints}")
    else:
        if args.checkpoint is None:
            parser.error("--checkpoint required for evaluation")
        result = evaluate(env_factory, args.checkpoint)
        print(f"\nEvaluation Results:")
        print(f"  Values: {[round(v, 3) for v in result.values]}")
        print(f"  RMSE: {result.rmse:.4f}")
