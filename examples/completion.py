from openai_api import Client
from openai_api.resources.completions import CompletionRequest
from openai_api.resources.models import GPT3


def main():
    with Client.from_env() as client:
        request = CompletionRequest(GPT3.GPT35_TURBO_INSTRUCT, "What is Bitcoin?").set(
            max_tokens=3000,
            temperature=0.9,
            top_p=1.0,
            stop=[" Human:", " AI:"],
            presence_penalty=0.6,
            frequency_penalty=0.0,
        )
        result = client.completions.create(request)
        print(result.choices[0].text)


if __name__ == "__main__":
    main()
