#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio

from hubkit.github import CommitStatus, DuplicateStatusError, GitHubAPI


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Attach a status to a commit unless already set")
    p.add_argument("repo", help="owner/name")
    p.add_argument("sha")
    p.add_argument("--state", default="success", choices=["error", "failure", "pending", "success"])
    p.add_argument("--context", default="ci/example")
    p.add_argument("--description", default=None)
    p.add_argument("--target-url", default=None)
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    status = CommitStatus(
        state=args.state,
        context=args.context,
        description=args.description,
        target_url=args.target_url,
    )

    async with GitHubAPI.from_env() as api:
        repo = api.repository_from_path(args.repo)
        commit = await repo.commit(args.sha)
        try:
            code = await api.set_commit_status(commit, status)
        except DuplicateStatusError:
            print(f"{commit.sha}: status already set ({status})")
            return
        print(f"{commit.sha}: HTTP {code}")


if __name__ == "__main__":
    asyncio.run(main())
