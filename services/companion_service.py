"""
Companion reply generation for the chat screen.

The chat persistence layer only depends on ``ResponseGenerator``; swap the
canned implementation for a model-backed one without touching the routes.
"""

import random
from typing import List, Optional, Protocol, Sequence

from loguru import logger


SUPPORTIVE_REPLIES = [
    "I understand how you're feeling. It's completely normal to experience these emotions. "
    "Would you like to talk more about what's on your mind?",
    "Thank you for sharing that with me. Remember, taking care of your mental health is a journey, "
    "and every step counts. How can I support you today?",
    "That's a great insight! Recognizing your feelings is an important part of mindfulness. "
    "Have you tried any breathing exercises today?",
    "I'm here to listen and support you. Your feelings are valid, and it's okay to take things "
    "one day at a time. What would help you feel better right now?",
    "It sounds like you're making progress. Remember to be kind to yourself - healing isn't always "
    "linear. Would you like some suggestions for self-care activities?",
]


class ConversationTurn(Protocol):
    role: str
    message: str


class ResponseGenerator(Protocol):
    def generate(self, conversation: Sequence[ConversationTurn]) -> str:
        """Return the assistant's reply to the last turn of ``conversation``."""
        ...


class CannedResponseGenerator:
    """Picks one of a fixed list of supportive replies."""

    def __init__(self, replies: Optional[List[str]] = None, rng: Optional[random.Random] = None):
        self.replies = list(replies or SUPPORTIVE_REPLIES)
        if not self.replies:
            raise ValueError("CannedResponseGenerator needs at least one reply")
        self.rng = rng or random.Random()

    def generate(self, conversation: Sequence[ConversationTurn]) -> str:
        reply = self.rng.choice(self.replies)
        logger.debug(f"Canned reply chosen after {len(conversation)} turns")
        return reply


# Global service instance
companion_service: ResponseGenerator = CannedResponseGenerator()
logger.info("✅ Companion response generator initialized")


def get_response_generator() -> ResponseGenerator:
    """FastAPI dependency; override it to plug in another generator."""
    return companion_service
