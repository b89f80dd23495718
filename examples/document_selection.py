import asyncio
import sys

from localdoc_sdk import AsyncCompletionClient, CompletionError


async def main() -> int:
    selection = sys.stdin.read()
    client = AsyncCompletionClient()
    try:
        docs = await client.document(selection)
    except CompletionError as exc:
        print(f"Documentation request failed: {exc}", file=sys.stderr)
        return 1

    print(docs)
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
