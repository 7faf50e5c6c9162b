from openai_api import Client
from openai_api.resources.audio import AudioSpeechRequest
from openai_api.resources.models import AudioModel, Voice


def main():
    with Client.from_env() as client:
        request = AudioSpeechRequest(
            AudioModel.TTS_1,
            "Hello, this is a test.",
            Voice.ALLOY,
            output="output/problem.mp3",
        )
        result = client.audio.speech(request)
        print(f"wrote {result.path}")


if __name__ == "__main__":
    main()
