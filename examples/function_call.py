import json

from openai_api import Client
from openai_api.resources.chat import (
    ChatCompletionMessage,
    ChatCompletionRequest,
    FinishReason,
    Function,
    Tool,
    ToolChoiceType,
)
from openai_api.resources.models import GPT3


def get_coin_price(coin: str) -> float:
    """Get the price of a cryptocurrency"""
    coin = coin.lower()
    if coin in ("btc", "bitcoin"):
        return 10000.0
    if coin in ("eth", "ethereum"):
        return 1000.0
    return 0.0


def main():
    with Client.from_env() as client:
        request = ChatCompletionRequest(
            GPT3.GPT35_TURBO,
            ChatCompletionMessage.user("What is the price of Ethereum?"),
            tools=[Tool(Function.from_callable(get_coin_price))],
            tool_choice=ToolChoiceType.AUTO,
        )
        choice = client.chat.completions.create(request).choices[0]

        if choice.finish_reason == FinishReason.TOOL_CALLS:
            for call in choice.message.tool_calls:
                if call.function.name == "get_coin_price":
                    coin = json.loads(call.function.arguments)["coin"]
                    print(f"{coin} price: {get_coin_price(coin)}")
        else:
            print(choice.finish_reason, choice.message.content)


if __name__ == "__main__":
    main()
