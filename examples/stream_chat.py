"""
Example: Streaming chat with session results

Streams a reply fragment by fragment, then inspects how the session ended
(completed, failed or cancelled) together with token usage. Requires
DEEPSEEK_API_KEY in the environment or a .env file.
"""

import asyncio

from deepseek_chat_sdk import ChatClient, ConversationMessage, DeepSeekProvider, TransportError


async def example_basic_streaming():
    """Stream one reply and print the session summary."""
    print("=== Basic Streaming ===\n")

    async with DeepSeekProvider() as provider:
        async with provider.stream("Write a haiku about Python programming") as session:
            async for fragment in session:
                print(fragment, end='', flush=True)
        print()

        result = session.result
        print(f"\nOutcome: {result.outcome.value} ({result.reason})")
        print(f"Fragments: {result.fragments}, dropped frames: {result.decode_errors}")
        if result.usage:
            print(f"Total tokens: {result.usage.get('total_tokens')}")


async def example_early_stop():
    """Stop reading after a few fragments; the response is released."""
    print("\n=== Stopping Early ===\n")

    async with DeepSeekProvider() as provider:
        async with provider.stream("Count slowly from 1 to 100") as session:
            count = 0
            async for fragment in session:
                print(fragment, end='', flush=True)
                count += 1
                if count == 5:
                    break
        print(f"\n\nSession state: {session.state.value}")


async def example_conversation():
    """Multi-turn chat; the history keeps each streamed reply."""
    print("\n=== Conversation ===\n")

    async with ChatClient(system_prompt="You are a concise assistant.") as client:
        for question in ["Name a prime number.", "Now double it."]:
            print(f"you> {question}")
            print("assistant> ", end='')
            try:
                async for fragment in client.send(question):
                    print(fragment, end='', flush=True)
            except TransportError as e:
                print(f"\nError: {e}")
                return
            print()

        print(f"\nHistory has {len(client.conversation)} messages")


async def example_structured():
    """Ask for a JSON object reply."""
    print("\n=== Structured Reply ===\n")

    async with DeepSeekProvider() as provider:
        data = await provider.generate_json(
            "List three fruits with their colors.",
        )
        print(data)

        result = await provider.send_once([
            ConversationMessage.system("Answer in one word."),
            ConversationMessage.user("What color is the sky?"),
        ])
        print(result.text if result.ok else f"Error: {result.error}")


async def main():
    await example_basic_streaming()
    await example_early_stop()
    await example_conversation()
    await example_structured()


if __name__ == "__main__":
    asyncio.run(main())
