"""
Evaluation script for trained RL agents and scripted baselines
"""

import argparse
import time
from typing import Callable, Optional

import numpy as np

from stable_baselines3 import PPO, DQN
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize

from game.roar import RoarEnv
from game.roar.config import ROAR_RADIUS
from game.roar.utils import clamp, distance
from rl.configs.roar_config import ENV_CONFIG, REWARD_CONFIG
from rl.train import MultiDiscreteToDiscreteWrapper


def heuristic_action(env: RoarEnv, roar_threshold: int = 3) -> np.ndarray:
    """
    Scripted player: roar when the meter is full and at least `roar_threshold`
    enemies are in range, otherwise tap the enemy closest to the lion.
    """
    state = env.session.state
    player = state.player

    def cell(x, y):
        col = int(clamp(x / env.width * env.grid_cols, 0, env.grid_cols - 1))
        row = int(clamp(y / env.height * env.grid_rows, 0, env.grid_rows - 1))
        return col, row

    in_range = [e for e in state.enemies if distance(e.x, e.y, player.x, player.y) < ROAR_RADIUS]
    if player.roar_ready and len(in_range) >= roar_threshold:
        return np.array([1, *cell(player.x, player.y)], dtype=np.int64)

    if not state.enemies:
        return np.array([0, 0, 0], dtype=np.int64)

    target = min(state.enemies, key=lambda e: distance(e.x, e.y, player.x, player.y))
    return np.array([1, *cell(target.x, target.y)], dtype=np.int64)


def run_policy(
    policy: Callable[[RoarEnv, np.ndarray], np.ndarray],
    label: str,
    n_episodes: int = 10,
    seed: Optional[int] = None,
):
    """Roll out `policy(env, obs) -> action` on a fresh env and print statistics"""
    print(f"Evaluating {label} policy...")

    env = RoarEnv(render_mode=None, reward_config=REWARD_CONFIG, **ENV_CONFIG)

    episode_rewards = []
    episode_scores = []
    episode_lengths = []

    for episode in range(n_episodes):
        obs, info = env.reset(seed=seed + episode if seed is not None else None)

        terminated = False
        truncated = False
        total_reward = 0.0
        steps = 0

        while not (terminated or truncated):
            action = policy(env, obs)
            obs, reward, terminated, truncated, info = env.step(action)
            total_reward += reward
            steps += 1

        episode_rewards.append(total_reward)
        episode_scores.append(info["score"])
        episode_lengths.append(steps)

    env.close()

    results = {
        "mean_reward": np.mean(episode_rewards),
        "std_reward": np.std(episode_rewards),
        "mean_score": np.mean(episode_scores),
        "mean_length": np.mean(episode_lengths),
    }

    print(f"\n{label.capitalize()} Policy Results ({n_episodes} episodes):")
    print(f"Mean Reward: {results['mean_reward']:.2f} ± {results['std_reward']:.2f}")
    print(f"Mean Score: {results['mean_score']:.1f}")
    print(f"Mean Episode Length: {results['mean_length']:.1f}")

    return results


def compare_with_random(n_episodes: int = 10, seed: Optional[int] = None):
    return run_policy(lambda env, obs: env.action_space.sample(), "random", n_episodes, seed)


def compare_with_heuristic(n_episodes: int = 10, seed: Optional[int] = None):
    return run_policy(lambda env, obs: heuristic_action(env), "heuristic", n_episodes, seed)


def evaluate_model(
    model_path: str,
    algo: str = "ppo",
    n_episodes: int = 10,
    render: bool = True,
    seed: Optional[int] = None,
    vec_normalize_path: Optional[str] = None,
):
    """
    Evaluate a trained model

    Args:
        model_path: Path to the saved model
        algo: Algorithm used ('ppo' or 'dqn')
        n_episodes: Number of episodes to evaluate
        render: Whether to render the environment
        seed: Random seed for evaluation
        vec_normalize_path: Path to VecNormalize stats (for PPO)
    """

    if algo == "ppo":
        model = PPO.load(model_path)
    elif algo == "dqn":
        model = DQN.load(model_path)
    else:
        raise ValueError(f"Unknown algorithm: {algo}")

    render_mode = "human" if render else None
    base_env = RoarEnv(render_mode=render_mode, reward_config=REWARD_CONFIG, **ENV_CONFIG)
    single_env = MultiDiscreteToDiscreteWrapper(base_env) if algo == "dqn" else base_env

    env = DummyVecEnv([lambda: single_env])

    if vec_normalize_path:
        env = VecNormalize.load(vec_normalize_path, env)
        env.training = False
        env.norm_reward = False

    if seed is not None:
        env.seed(seed)

    episode_rewards = []
    episode_scores = []
    episode_lengths = []

    for episode in range(n_episodes):
        obs = env.reset()

        total_reward = 0.0
        steps = 0

        while True:
            action, _ = model.predict(obs, deterministic=True)
            obs, reward, done, info = env.step(action)
            total_reward += reward[0]
            steps += 1

            if render:
                time.sleep(1 / 60)

            if done[0]:
                break

        episode_rewards.append(total_reward)
        episode_scores.append(info[0].get("score", 0))
        episode_lengths.append(steps)

        print(f"Episode {episode + 1}/{n_episodes}: "
              f"Reward = {total_reward:.2f}, Score = {episode_scores[-1]}, Length = {steps}")

    env.close()

    mean_reward = np.mean(episode_rewards)
    std_reward = np.std(episode_rewards)

    print("\n" + "="*50)
    print(f"Evaluation Results ({n_episodes} episodes):")
    print(f"Mean Reward: {mean_reward:.2f} ± {std_reward:.2f}")
    print(f"Mean Score: {np.mean(episode_scores):.1f}")
    print(f"Mean Episode Length: {np.mean(episode_lengths):.1f}")
    print("="*50)

    return {
        "mean_reward": mean_reward,
        "std_reward": std_reward,
        "mean_score": np.mean(episode_scores),
        "mean_length": np.mean(episode_lengths),
        "episode_rewards": episode_rewards,
    }


def main():
    parser = argparse.ArgumentParser(description="Evaluate trained RL agent")
    parser.add_argument(
        "model_path",
        type=str,
        nargs="?",
        default=None,
        help="Path to the trained model (omit to run baselines only)",
    )
    parser.add_argument(
        "--algo",
        type=str,
        default="ppo",
        choices=["ppo", "dqn"],
        help="Algorithm used to train the model (default: ppo)",
    )
    parser.add_argument("--n-episodes", type=int, default=10, help="Number of evaluation episodes (default: 10)")
    parser.add_argument("--no-render", action="store_true", help="Disable rendering")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--vec-normalize", type=str, default=None, help="Path to VecNormalize stats file (for PPO)")
    parser.add_argument("--baselines", action="store_true", help="Also evaluate random and heuristic policies")

    args = parser.parse_args()

    results = None
    if args.model_path:
        results = evaluate_model(
            model_path=args.model_path,
            algo=args.algo,
            n_episodes=args.n_episodes,
            render=not args.no_render,
            seed=args.seed,
            vec_normalize_path=args.vec_normalize,
        )

    if args.baselines or results is None:
        print("\n")
        random_results = compare_with_random(n_episodes=args.n_episodes, seed=args.seed)
        heuristic_results = compare_with_heuristic(n_episodes=args.n_episodes, seed=args.seed)
        if results is not None:
            print(f"\nImprovement over random: {results['mean_reward'] - random_results['mean_reward']:.2f}")
            print(f"Gap to heuristic: {results['mean_reward'] - heuristic_results['mean_reward']:.2f}")


if __name__ == "__main__":
    main()
