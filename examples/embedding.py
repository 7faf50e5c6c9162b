from openai_api import Client
from openai_api.resources.embeddings import EmbeddingRequest
from openai_api.resources.models import EmbeddingModel


def main():
    with Client.from_env() as client:
        response = client.embeddings.create(
            EmbeddingRequest(EmbeddingModel.TEXT_EMBEDDING_3_SMALL, "The food was delicious and the waiter...")
        )
        print(response.data[0].embedding[:8])


if __name__ == "__main__":
    main()
