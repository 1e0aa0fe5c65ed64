#!/usr/bin/env python3
"""Run a PR review locally: python -m scripts.run_review owner/repo#123"""
import asyncio
import sys

from dotenv import load_dotenv

load_dotenv()

from src.core.pr_parser import parse_pr_target
from src.services.github.service import resolve_pull_request
from src.services.reviewer.service import review_pull_request


async def main(argv: list[str]) -> int:
    target = parse_pr_target(" ".join(argv))
    if target is None:
        print("usage: python -m scripts.run_review <owner/repo#123 | PR URL>", file=sys.stderr)
        return 2

    pr = await asyncio.to_thread(resolve_pull_request, target)
    result = await review_pull_request(pr)
    print(f"Review result: {result.model_dump_json(indent=2)}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main(sys.argv[1:])))
