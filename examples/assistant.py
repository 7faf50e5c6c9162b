"""Create a math-tutor assistant, ask it a question and print the thread.

    OPENAI_API_KEY=sk-... python examples/assistant.py
"""

import logging

from openai_api import Client
from openai_api.resources.assistants import AssistantRequest
from openai_api.resources.messages import CreateMessageRequest
from openai_api.resources.models import GPT4
from openai_api.resources.runs import CreateRunRequest, RunStatus
from openai_api.resources.threads import CreateThreadRequest


def main():
    logging.basicConfig(level=logging.INFO)

    with Client.from_env() as client:
        request = AssistantRequest(GPT4.GPT4_0125_PREVIEW).set(
            description="this is a test assistant",
            instructions="You are a personal math tutor. When asked a question, write and run Python code to answer the question.",
            tools=[{"type": "code_interpreter"}],
        )
        assistant = client.assistants.create(request)
        print(assistant.id)

        thread = client.threads.create(CreateThreadRequest())
        client.messages.create(thread.id, CreateMessageRequest("I need to solve the equation 3x + 11 = 14. Can you help me?"))

        run = client.runs.create_and_await(thread.id, CreateRunRequest(assistant.id), poll_interval=1, max_wait=300)
        if run.status != RunStatus.COMPLETED:
            print(f"run ended with status {run.status.value}")
            return

        for message in client.messages.list(thread.id, order="asc"):
            print(f"{message.role.value}: {message.text}")


if __name__ == "__main__":
    main()
