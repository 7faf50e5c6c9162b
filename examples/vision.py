from openai_api import Client
from openai_api.resources.chat import ChatCompletionMessage, ChatCompletionRequest
from openai_api.resources.models import GPT4


def main():
    with Client.from_env() as client:
        message = ChatCompletionMessage.vision(
            "What's in this image?",
            ["https://upload.wikimedia.org/wikipedia/commons/5/50/Bitcoin.png"],
        )
        response = client.chat.completions.create(ChatCompletionRequest(GPT4.GPT4O, message))
        print(response.get_choice())


if __name__ == "__main__":
    main()
