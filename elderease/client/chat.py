"""
Chat Widget

A friendly helper with canned answers. Nothing leaves the client and the
transcript lives only as long as the widget.

Compose:  Idle -> Composing -> Sending -> Idle
Voice:    VoiceIdle <-> VoiceListening (only with a speech recognizer)

A reply is one canned acknowledgement plus, when the message mentions a
known topic, the tip for the first topic in TIPS that matches.
"""

import asyncio
import logging
import random
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

GREETING = "Hello! I'm your ElderEase assistant. How can I help you with social media today?"

ACKNOWLEDGEMENTS = [
    "I can help with that! Let me guide you step by step.",
    "That's a great question! Here's how you can do it:",
    "Many seniors find this helpful. Here's the process:",
    "I understand this can be confusing. Let me break it down for you:",
    "Perfect! I'll walk you through this in simple steps.",
]

# Checked in order; the first keyword found in the message wins
TIPS = [
    ("facebook", "On Facebook, you can: 1) Click 'What's on your mind?' to post, 2) Use the camera icon to share photos, 3) Click the heart icon to like posts"),
    ("whatsapp", "In WhatsApp: 1) Tap the chat to message, 2) Use the paperclip to send photos, 3) Tap the phone icon for calls"),
    ("instagram", "For Instagram: 1) Tap + to share photos, 2) Heart icons show likes, 3) Use the search magnifying glass to find people"),
    ("video call", "For video calls: 1) In Facebook Messenger, tap the video camera, 2) In WhatsApp, tap the video camera in a chat, 3) Make sure you allow camera access"),
    ("photo", "To share photos: 1) Tap the photo/gallery icon, 2) Select your photos, 3) Tap send/share button"),
]

QUICK_QUESTIONS = [
    "How to post on Facebook?",
    "Send photos on WhatsApp",
    "Video call my family",
    "What is Instagram?",
    "Make my account safe",
]

VOICE_UNSUPPORTED = "Voice input isn't available on this device. Please type your question instead."


def find_tip(message: str) -> Optional[str]:
    text = message.lower()
    for keyword, tip in TIPS:
        if keyword in text:
            return tip
    return None


def generate_response(message: str, rng: random.Random = None) -> str:
    rng = rng or random
    response = rng.choice(ACKNOWLEDGEMENTS)
    tip = find_tip(message)
    if tip:
        response += f"\n\n{tip}"
    return response


class Sender(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class ComposeState(str, Enum):
    IDLE = "idle"
    COMPOSING = "composing"
    SENDING = "sending"


class VoiceState(str, Enum):
    IDLE = "voice_idle"
    LISTENING = "voice_listening"


@dataclass
class ChatMessage:
    text: str
    sender: Sender
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class SpeechRecognizer(ABC):
    """Platform speech-to-text (a browser's recognizer, an OS service...)."""

    @abstractmethod
    def start(self, on_result: Callable[[str], None], on_end: Callable[[], None]) -> None:
        """Begin one utterance. Call on_result with the transcript, then on_end."""
        pass

    @abstractmethod
    def stop(self) -> None:
        pass


class ChatWidget:
    """Floating helper chat."""

    def __init__(
        self,
        recognizer: Optional[SpeechRecognizer] = None,
        rng: Optional[random.Random] = None,
        reply_delay: float = 1.5,
    ):
        self.recognizer = recognizer
        self.rng = rng or random.Random()
        self.reply_delay = reply_delay

        self.is_open = False
        self.input_text = ""
        self.state = ComposeState.IDLE
        self.voice_state = VoiceState.IDLE
        self.messages: List[ChatMessage] = [ChatMessage(text=GREETING, sender=Sender.ASSISTANT)]
        self.quick_questions = list(QUICK_QUESTIONS)

    def open(self) -> None:
        self.is_open = True

    def close(self) -> None:
        self.is_open = False
        self.stop_listening()

    # ------------------------------------------------------------
    # Compose
    # ------------------------------------------------------------
    def type_text(self, text: str) -> None:
        if self.state == ComposeState.SENDING:
            return
        self.input_text = text
        self.state = ComposeState.COMPOSING if text.strip() else ComposeState.IDLE

    async def send(self, text: Optional[str] = None) -> Optional[ChatMessage]:
        """
        Send the typed (or given) text and wait for the reply.

        Blank input and sending while a reply is pending do nothing.
        """
        if self.state == ComposeState.SENDING:
            return None
        text = self.input_text if text is None else text
        if not text.strip():
            return None

        self.state = ComposeState.SENDING
        self.messages.append(ChatMessage(text=text, sender=Sender.USER))
        self.input_text = ""

        try:
            if self.reply_delay:
                await asyncio.sleep(self.reply_delay)
            reply = ChatMessage(text=generate_response(text, self.rng), sender=Sender.ASSISTANT)
            self.messages.append(reply)
        finally:
            self.state = ComposeState.IDLE
        return reply

    async def ask(self, question: str) -> Optional[ChatMessage]:
        """Send one of the quick questions."""
        return await self.send(question)

    # ------------------------------------------------------------
    # Voice
    # ------------------------------------------------------------
    @property
    def voice_supported(self) -> bool:
        return self.recognizer is not None

    def start_listening(self) -> Optional[str]:
        """
        Start voice input.

        Returns a notice for the user when voice isn't available.
        """
        if not self.voice_supported:
            return VOICE_UNSUPPORTED
        if self.voice_state == VoiceState.LISTENING:
            return None

        self.voice_state = VoiceState.LISTENING
        try:
            self.recognizer.start(on_result=self._on_transcript, on_end=self._on_voice_end)
        except Exception as e:
            logger.warning(f"Speech recognizer failed to start: {e}")
            self.voice_state = VoiceState.IDLE
            return VOICE_UNSUPPORTED
        return None

    def stop_listening(self) -> None:
        if self.voice_state == VoiceState.LISTENING and self.recognizer is not None:
            self.recognizer.stop()
        self.voice_state = VoiceState.IDLE

    def _on_transcript(self, transcript: str) -> None:
        self.type_text(transcript)
        self.voice_state = VoiceState.IDLE

    def _on_voice_end(self) -> None:
        self.voice_state = VoiceState.IDLE
