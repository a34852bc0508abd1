#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging

from hubkit.github import Context, GitHubAPI


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="List pull requests of a repository (cached)")
    p.add_argument("repo", nargs="?", default="python/cpython", help="owner/name")
    p.add_argument("branch", nargs="?", default="main")
    p.add_argument("--state", default="open", choices=["open", "closed", "all"])
    p.add_argument("--limit", type=int, default=20)
    p.add_argument("--timeout", type=float, default=30.0)
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    ctx = Context(timeout=args.timeout)
    async with GitHubAPI.from_env() as api:
        repo = api.repository_from_path(args.repo)
        pulls = repo.pulls(args.branch, state=args.state)

        print("=" * 65)
        print(f"Repository : {repo.path}")
        print(f"Base       : {args.branch}")
        print(f"State      : {args.state}")
        print("=" * 65)
        shown = 0
        while shown < args.limit and await pulls.has_next(ctx):
            print(pulls.item)
            shown += 1
        if pulls.error:
            raise pulls.error
        print("=" * 65)
        print(f"Pages      : {pulls.pages_loaded}")
        print(f"Cache      : {api.client.stats}")
        print(f"Rate limit : {await api.rate_limit(ctx)}")


if __name__ == "__main__":
    asyncio.run(main())
