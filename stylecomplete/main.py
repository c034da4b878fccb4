"""
StyleComplete Backend Entry Point

Starts the API server, or runs a one-off suggestion lookup from the
command line for checking keys and prompts without the editor.

Usage:
    python -m stylecomplete.main serve --port 10000
    python -m stylecomplete.main suggest "I love silk"
    python -m stylecomplete.main suggest "夏季 zhen" --season summer
"""

import asyncio
import json
import sys

import httpx

from configs import (
    GEMINI_API_KEYS,
    HOST,
    PORT,
    REDIS_URL,
    UPSTREAM_TIMEOUT_SECONDS,
)
from stylecomplete.orchestrator import GeminiCompletionClient, KeyRotator, SuggestionService
from stylecomplete.utils.cache import CacheManager


async def run_suggestion(text: str, cursor=None, season=None, use_cache: bool = True):
    """Run one lookup through the same service the API uses."""
    cache = CacheManager(redis_url=REDIS_URL if use_cache else None)
    async with httpx.AsyncClient(timeout=UPSTREAM_TIMEOUT_SECONDS) as http_client:
        llm_client = GeminiCompletionClient(KeyRotator(GEMINI_API_KEYS), http_client)
        service = SuggestionService(cache, llm_client)
        context = {"season": season} if season else None
        try:
            return await service.suggest(text, cursor, context)
        finally:
            await cache.close()


def main():
    """Main entry point for CLI usage."""
    import argparse

    parser = argparse.ArgumentParser(
        description="StyleComplete - fashion autocompletion proxy",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m stylecomplete.main serve
  python -m stylecomplete.main suggest "I love silk"
  python -m stylecomplete.main suggest "I love silk dress" --cursor 11 --no-cache
        """
    )
    subparsers = parser.add_subparsers(dest="command")

    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", default=HOST, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=PORT, help="Listening port")
    serve_parser.add_argument("--reload", action="store_true", help="Auto-reload on code changes")

    suggest_parser = subparsers.add_parser("suggest", help="Print suggestions for a text")
    suggest_parser.add_argument("text", help="Editor text")
    suggest_parser.add_argument("--cursor", type=int, default=None, help="Cursor offset (default: end)")
    suggest_parser.add_argument("--season", default=None, help="Season context, e.g. summer")
    suggest_parser.add_argument("--no-cache", action="store_true", help="Skip Redis even if configured")

    args = parser.parse_args()

    if args.command == "serve":
        import uvicorn
        uvicorn.run("stylecomplete.api.main:app", host=args.host, port=args.port, reload=args.reload)

    elif args.command == "suggest":
        result = asyncio.run(
            run_suggestion(args.text, args.cursor, args.season, use_cache=not args.no_cache)
        )
        print(f"Trigger: {result.last_word or '(empty)'}")
        print(f"Source:  {result.source.value}")
        print(json.dumps(result.suggestions, ensure_ascii=False, indent=2))

    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
