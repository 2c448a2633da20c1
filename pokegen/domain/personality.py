"""Lazy personality generation and creature chat."""

from __future__ import annotations

import asyncio
import logging
from typing import Sequence

from .creatures import Creature, PersonalityState
from .exceptions import OperationInProgress
from .inventory import InventoryStore
from ..generators.base import ChatTurn, GeneratorFailure, TextGenerator

logger = logging.getLogger(__name__)

DEFAULT_PERSONALITY = "Friendly and loyal"


def personality_prompt(creature: Creature) -> str:
    stats = creature.stats
    return (
        f"Generate a short, quirky, and unique personality description (max 2 sentences) "
        f"for a {creature.name}. It has the following stats - HP: {stats.hp}, "
        f"Attack: {stats.attack}, Defense: {stats.defense}, Speed: {stats.speed}. "
        f"Based on these stats and its type ({', '.join(creature.element_types)}), give it a "
        f"distinct trait (e.g., lazy, hyperactive, grumpy, foodie, poetic). "
        f"Do not mention the stats numbers directly, just use them to infer the personality."
    )


def chat_instruction(creature: Creature) -> str:
    return (
        f"You are a {creature.name}.\n"
        f"Your personality is: {creature.personality or DEFAULT_PERSONALITY}.\n\n"
        "Rules:\n"
        '1. You mostly speak in "Pokemon speak" (variations of your name).\n'
        "2. HOWEVER, you MUST provide a translation in parentheses so the human understands you.\n"
        f'3. Example: "{creature.name[:4].capitalize()}! (I am so hungry right now!)"\n'
        "4. Keep responses relatively short (under 50 words).\n"
        "5. React to the user's input based on your personality and type "
        f"({', '.join(creature.element_types)})."
    )


class PersonalityService:
    """Fill each creature's personality at most once."""

    def __init__(self, store: InventoryStore, generator: TextGenerator) -> None:
        self._store = store
        self._generator = generator
        self._pending: dict[str, asyncio.Task[str]] = {}

    def state_for(self, creature_id: str) -> PersonalityState:
        creature = self._store.require(creature_id)
        if creature.personality:
            return PersonalityState.FILLED
        if creature_id in self._pending:
            return PersonalityState.PENDING
        return PersonalityState.UNREQUESTED

    async def ensure_personality(self, creature_id: str) -> str:
        creature = self._store.require(creature_id)
        if creature.personality:
            return creature.personality
        task = self._pending.get(creature_id)
        if task is None:
            task = asyncio.ensure_future(self._generate(creature))
            self._pending[creature_id] = task
            task.add_done_callback(lambda _: self._pending.pop(creature_id, None))
        return await asyncio.shield(task)

    async def _generate(self, creature: Creature) -> str:
        try:
            text = await self._generator.generate(personality_prompt(creature))
        except GeneratorFailure as exc:
            logger.warning("Personality generation failed for %s: %s", creature.name, exc)
            text = f"A standard {creature.name}. The AI scanner malfunctioned."
        except Exception:  # pragma: no cover - safeguard for third-party generators
            logger.exception("Unexpected personality generator error for %s.", creature.name)
            text = f"A standard {creature.name}. The AI scanner malfunctioned."
        text = text.strip() or f"A mysterious {creature.name} with an unknown past."
        current = self._store.get(creature.id)
        if current is None:
            # Released while the request was in flight.
            return text
        if current.personality:
            return current.personality
        if self._store.is_reserved(creature.id):
            # About to be consumed by a running fusion.
            return text
        await self._store.update_by_id(creature.id, {"personality": text})
        return text


class ChatSession:
    """Conversation with a single creature."""

    def __init__(self, creature: Creature, generator: TextGenerator) -> None:
        self._creature = creature
        self._generator = generator
        self._history: list[ChatTurn] = []
        self._typing = False

    @property
    def creature(self) -> Creature:
        return self._creature

    @property
    def history(self) -> Sequence[ChatTurn]:
        return tuple(self._history)

    @property
    def is_typing(self) -> bool:
        return self._typing

    def refresh(self, creature: Creature) -> None:
        """Pick up a newer record for the same creature, e.g. once its personality is set."""
        if creature.id != self._creature.id:
            raise ValueError("Chat sessions cannot switch creatures")
        self._creature = creature

    async def send(self, message: str) -> str:
        text = message.strip()
        if not text:
            raise ValueError("Message cannot be empty")
        if self._typing:
            raise OperationInProgress(f"{self._creature.name} is still replying")

        history = tuple(self._history)
        self._history.append(ChatTurn(role="user", text=text))
        self._typing = True
        try:
            reply = await self._generator.generate(
                text, system=chat_instruction(self._creature), history=history
            )
            reply = reply.strip() or "..."
        except GeneratorFailure as exc:
            logger.warning("Chat with %s failed: %s", self._creature.name, exc)
            reply = f"{self._creature.name}...? (The connection is weak...)"
        except Exception:  # pragma: no cover - safeguard for third-party generators
            logger.exception("Unexpected chat generator error for %s.", self._creature.name)
            reply = f"{self._creature.name}...? (The connection is weak...)"
        finally:
            self._typing = False

        self._history.append(ChatTurn(role="model", text=reply))
        return reply
