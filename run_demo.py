import random
import time

from console2048.environments.game_env import Game2048Env


def choose_action(env):
    """Picks a random direction among the ones that would move a tile."""
    valid_actions = env.game.valid_moves()
    return int(random.choice(valid_actions)) if valid_actions else None


if __name__ == "__main__":
    env = Game2048Env(render_mode="human")

    print("Environment created.")
    print(f"Action space: {env.action_space}")

    print("\n--- STARTING RANDOM AGENT DEMO ---\n")
    observation, info = env.reset()
    terminated = False
    truncated = False

    total_reward = 0
    step_count = 0

    while not (terminated or truncated):

        # Picks a random valid action
        action = choose_action(env)
        if action is None:
            break

        print(f"\n--- Step {step_count} ---")
        print(f"Action taken: {['Up', 'Down', 'Left', 'Right'][action]}")

        # performs the action in the environment
        observation, reward, terminated, truncated, info = env.step(action)

        print(f"Reward received: {reward}")
        total_reward += reward
        step_count += 1

        time.sleep(0.2)

    print("\n--- EPISODE/GAME FINISHED ---")
    print(f"Total steps: {step_count}")
    print(f"Total score: {total_reward}")
    print(f"Final status: {env.game.status.value}")
