from __future__ import annotations

from ..config import ClientConfig
from ..resources.assistants import Assistants
from ..resources.audio import Audio
from ..resources.chat import Chat
from ..resources.completions import Completions, Edits
from ..resources.embeddings import Embeddings
from ..resources.files import Files
from ..resources.fine_tuning import FineTuning
from ..resources.images import Images
from ..resources.messages import Messages
from ..resources.models import Models
from ..resources.moderations import Moderations
from ..resources.runs import Runs
from ..resources.threads import Threads
from .transport import HTTPTransport


class Client:
    """
    Main API client.

    Usage:
        client = Client(api_key="sk-...")
        # or: client = Client.from_env()

        # Chat
        response = client.chat.completions.create(
            ChatCompletionRequest.from_prompt("Hello!")
        )
        print(response.get_choice())
        print(response.headers.get("x-request-id"))

        # Assistants
        thread = client.threads.create()
        run = client.runs.create(thread.id, CreateRunRequest("asst_..."))
        run = client.runs.await_terminal(thread.id, run.id, poll_interval=1, max_wait=120)
    """

    def __init__(
        self,
        config: ClientConfig = None,
        *,
        api_key: str = None,
        base_url: str = None,
        organization: str = None,
        timeout: float = None,
        transport: HTTPTransport = None,
    ):
        if config is None:
            options = {"api_key": api_key}
            if base_url is not None:
                options["base_url"] = base_url
            if organization is not None:
                options["organization"] = organization
            if timeout is not None:
                options["timeout"] = timeout
            config = ClientConfig(**options)
        self.config = config

        self._transport = transport or HTTPTransport(config)

        # Resource namespaces
        self.chat = Chat(self._transport)
        self.completions = Completions(self._transport)
        self.edits = Edits(self._transport)
        self.embeddings = Embeddings(self._transport)
        self.images = Images(self._transport)
        self.audio = Audio(self._transport)
        self.files = Files(self._transport)
        self.fine_tuning = FineTuning(self._transport)
        self.moderations = Moderations(self._transport)
        self.models = Models(self._transport)
        self.assistants = Assistants(self._transport)
        self.threads = Threads(self._transport)
        self.messages = Messages(self._transport)
        self.runs = Runs(self._transport)

    @classmethod
    def from_env(cls, dotenv_path: str = None, **overrides) -> "Client":
        """Build a client from ``OPENAI_*`` environment variables (and ``.env``)."""
        return cls(ClientConfig.from_env(dotenv_path=dotenv_path, **overrides))

    def close(self):
        self._transport.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def __repr__(self):
        return f"Client({self.config!r})"


# OpenAI-compatible alias
OpenAI = Client
