"""CLI entry point for the DeepSeek chat SDK."""

import argparse
import asyncio
import json
import logging
from typing import Optional

from .api.client import ChatClient
from .config.constants import DEFAULT_JSON_SYSTEM_PROMPT, JSON_OBJECT_FORMAT
from .config.settings import ClientConfig, load_config
from .errors import ConfigurationError, ProviderError
from .models.conversation_types import ConversationMessage
from .providers.deepseek import DeepSeekProvider

EXIT_COMMANDS = {"/exit", "/quit"}
RESET_COMMAND = "/reset"


def build_config(model: Optional[str] = None) -> ClientConfig:
    config = load_config()
    if model:
        config = config.model_copy(update={"model": model})
    return config


async def ask(prompt: str, model: Optional[str] = None, system: Optional[str] = None,
              as_json: bool = False, stream: bool = False) -> int:
    """Send one prompt and print the reply."""
    async with DeepSeekProvider(build_config(model)) as provider:
        messages = []
        if as_json:
            messages.append(ConversationMessage.system(system or DEFAULT_JSON_SYSTEM_PROMPT))
        elif system:
            messages.append(ConversationMessage.system(system))
        messages.append(ConversationMessage.user(prompt))

        if stream and not as_json:
            async with provider.stream(messages) as session:
                try:
                    async for fragment in session:
                        print(fragment, end='', flush=True)
                finally:
                    print()
            return 0

        result = await provider.send_once(
            messages, response_format=JSON_OBJECT_FORMAT if as_json else None
        )
        if not result.ok:
            print(f"Error: {result.error}")
            return 1
        if as_json:
            try:
                print(json.dumps(json.loads(result.text), indent=2, ensure_ascii=False))
                return 0
            except json.JSONDecodeError:
                pass
        print(result.text)
        return 0


async def chat(model: Optional[str] = None, system: Optional[str] = None) -> int:
    """Interactive streaming chat. /reset clears history, /exit quits."""
    async with ChatClient(config=build_config(model), system_prompt=system) as client:
        print(f"Chatting with {client.provider.model}. Type /exit to quit, /reset to start over.")
        while True:
            try:
                line = await asyncio.to_thread(input, "you> ")
            except EOFError:
                print()
                return 0

            text = line.strip()
            if not text:
                continue
            if text in EXIT_COMMANDS:
                return 0
            if text == RESET_COMMAND:
                client.conversation.clear()
                print("(history cleared)")
                continue

            print("assistant> ", end='', flush=True)
            try:
                async for fragment in client.send(text):
                    print(fragment, end='', flush=True)
                print()
            except ProviderError as e:
                print(f"\nError: {e}")


def main(argv: Optional[list] = None) -> int:
    """Main CLI function."""
    parser = argparse.ArgumentParser(description="DeepSeek chat CLI")
    parser.add_argument('--model', help='Model identifier (default: DEEPSEEK_MODEL or deepseek-chat)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    chat_parser = subparsers.add_parser('chat', help='Interactive streaming chat')
    chat_parser.add_argument('--system', help='System prompt')

    ask_parser = subparsers.add_parser('ask', help='Send a single prompt')
    ask_parser.add_argument('prompt', help='Text prompt')
    ask_parser.add_argument('--system', help='System prompt')
    ask_parser.add_argument('--json', action='store_true', dest='as_json',
                            help='Request a JSON object reply')
    ask_parser.add_argument('--stream', action='store_true', help='Stream the response')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == 'chat':
            return asyncio.run(chat(args.model, args.system))
        if args.command == 'ask':
            return asyncio.run(ask(args.prompt, args.model, args.system, args.as_json, args.stream))
    except ConfigurationError as e:
        print(f"Configuration error: {e}")
        return 2
    except ProviderError as e:
        print(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        return 130

    parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
