"""CLI script to manually trigger badge evaluation."""
from __future__ import annotations

import argparse

from academy.tasks.badges import evaluate_all_badges, evaluate_user_badges


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Manually trigger badge evaluation",
    )
    parser.add_argument(
        "--user-id",
        type=str,
        help="Evaluate badges for a specific user only",
    )
    parser.add_argument(
        "--async",
        action="store_true",
        dest="use_async",
        help="Queue task asynchronously instead of running immediately",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Evaluate badges for all active users",
    )

    args = parser.parse_args()

    if args.all:
        print("Evaluating badges for all active users...")
        if args.use_async:
            task = evaluate_all_badges.apply_async()
            print(f"Task queued: {task.id}")
        else:
            result = evaluate_all_badges.run()
            print(f"Result: {result}")
    elif args.user_id:
        print(f"Evaluating badges for user {args.user_id}")
        if args.use_async:
            task = evaluate_user_badges.apply_async(args=(args.user_id,))
            print(f"Task queued: {task.id}")
        else:
            result = evaluate_user_badges.run(args.user_id)
            print(f"Result: {result}")
    else:
        parser.error("Specify --user-id or --all")


if __name__ == "__main__":
    main()
