from openai_api import Client
from openai_api.resources.chat import ChatCompletionRequest
from openai_api.resources.models import GPT4


def main():
    with Client.from_env() as client:
        request = ChatCompletionRequest.from_prompt("What is bitcoin?", model=GPT4.GPT4)
        response = client.chat.completions.create(request)
        print(response.get_choice())
        print("request id:", response.headers.get("x-request-id"))


if __name__ == "__main__":
    main()
