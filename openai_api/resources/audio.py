"""Audio transcription, translation and text-to-speech."""

from __future__ import annotations

import logging
from typing import Any

from ..core.models import BaseModel, decode, multipart_fields
from ..core.transport import HTTPTransport
from ..utils.output import write_bytes

logger = logging.getLogger(__name__)


class AudioTranscriptionRequest(BaseModel):
    """``file`` is an upload: a path, bytes, tuple or file object."""

    def __init__(
        self,
        file: Any,
        model,
        prompt: str = None,
        response_format: str = None,
        temperature: float = None,
        language: str = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.file = file
        self.model = model
        self.prompt = prompt
        self.response_format = response_format
        self.temperature = temperature
        self.language = language


class AudioTranslationRequest(BaseModel):
    def __init__(
        self,
        file: Any,
        model,
        prompt: str = None,
        response_format: str = None,
        temperature: float = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.file = file
        self.model = model
        self.prompt = prompt
        self.response_format = response_format
        self.temperature = temperature


class AudioTextResponse(BaseModel):
    """Transcribed or translated text."""
    def __init__(self, text: str, language: str = None, duration: float = None, segments: list = None, **kwargs):
        super().__init__(**kwargs)
        self.text = text
        self.language = language
        self.duration = duration
        self.segments = segments


AudioTranscriptionResponse = AudioTextResponse
AudioTranslationResponse = AudioTextResponse


class AudioSpeechRequest(BaseModel):
    """Text-to-speech request. ``output`` is a local path and is never sent."""

    def __init__(
        self,
        model,
        input: str,
        voice,
        output: str,
        response_format: str = None,
        speed: float = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.model = model
        self.input = input
        self.voice = voice
        self.output = output
        self.response_format = response_format
        self.speed = speed

    def to_dict(self) -> dict:
        body = super().to_dict()
        body.pop("output", None)
        return body


class AudioSpeechResponse(BaseModel):
    def __init__(self, result: bool, path: str = None, **kwargs):
        super().__init__(**kwargs)
        self.result = result
        self.path = path


class Audio:
    """Audio resource."""

    def __init__(self, transport: HTTPTransport):
        self._transport = transport

    def transcribe(self, request: AudioTranscriptionRequest) -> AudioTextResponse:
        fields, files = multipart_fields(request, ("file",))
        return decode(self._transport.post_multipart("/audio/transcriptions", fields, files), AudioTextResponse)

    def translate(self, request: AudioTranslationRequest) -> AudioTextResponse:
        fields, files = multipart_fields(request, ("file",))
        return decode(self._transport.post_multipart("/audio/translations", fields, files), AudioTextResponse)

    def speech(self, request: AudioSpeechRequest) -> AudioSpeechResponse:
        """Synthesize speech and write the audio bytes to ``request.output``."""
        response = self._transport.post("/audio/speech", body=request.to_dict())
        path = write_bytes(response.content, request.output)
        logger.debug("wrote %d bytes of speech to %s", len(response.content), path)
        result = AudioSpeechResponse(result=True, path=path)
        result.headers = dict(response.headers)
        return result
