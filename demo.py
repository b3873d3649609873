#!/usr/bin/env python3
"""Watch a random player work through PandaQuest levels."""
import time
import os

from src.pandaquest.environment import PandaQuestEnv


def clear_screen():
    os.system('cls' if os.name == 'nt' else 'clear')


def demo(delay: float = 0.3, episodes: int = 3, level: int = 1):
    """Run demo episodes with visualization."""
    env = PandaQuestEnv(level=level, render_mode="ansi")

    print(f"Level {level}: {env.rows}x{env.cols} board")
    print("Starting in 2 seconds...")
    time.sleep(2)

    cleared = 0

    for episode in range(episodes):
        obs, info = env.reset()

        clear_screen()
        print(f"=== Episode {episode + 1}/{episodes} ===")
        print(f"Levels cleared so far: {cleared}\n")
        print(env.render())
        time.sleep(delay)

        done = False
        step = 0

        while not done:
            action = env.action_space.sample(mask=env.get_action_mask().astype("int8"))
            row, col = action // env.cols, action % env.cols

            obs, reward, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1

            clear_screen()
            print(f"=== Episode {episode + 1}/{episodes} | Step {step} ===")
            print(f"Lives: {info['lives']}")
            print(f"Last move: ({row}, {col})\n")
            print(env.render())

            if done:
                if info["game_state"] == "LEVEL_COMPLETE":
                    cleared += 1
                    print(f"\n*** LEVEL CLEARED! ***")
                else:
                    print(f"\n*** OUT OF LIVES ***")

            time.sleep(delay)

        time.sleep(1.0)  # Pause between episodes

    print(f"\n=== Final: {cleared}/{episodes} levels cleared ===")


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser()
    parser.add_argument("--delay", type=float, default=0.3, help="Delay between moves")
    parser.add_argument("--episodes", type=int, default=3, help="Number of episodes")
    parser.add_argument("--level", type=int, default=1, help="Level to play")
    args = parser.parse_args()

    demo(delay=args.delay, episodes=args.episodes, level=args.level)
