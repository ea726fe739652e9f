from __future__ import annotations

import logging
from typing import Literal, Optional

from classification.intent_classifiers import (
    COMMAND_RULES,
    EVENT_FALLBACK_RULE,
    IntentRule,
    ParseContext,
)
from study_assistant.models import AskCommand, ParsedCommand, UnrecognizedCommand

logger = logging.getLogger(__name__)

Mode = Literal["create", "ask"]

CREATE_PHRASES = ("create task", "add task", "make task")
MODE_ALIASES = {"create": "create", "agent": "create", "ask": "ask"}


def infer_mode(text: str) -> Mode:
    """Guess create vs ask when the caller did not pick one."""
    lowered = text.strip().lower()
    if lowered.startswith("create") or any(phrase in lowered for phrase in CREATE_PHRASES):
        return "create"
    return "ask"


def normalize_mode(mode: Optional[str], text: str) -> Mode:
    if mode is None or not mode.strip():
        return infer_mode(text)
    normalized = MODE_ALIASES.get(mode.strip().lower())
    if normalized is None:
        logger.warning("Unknown assistant mode %r, inferring from input", mode)
        return infer_mode(text)
    return normalized


class CommandRouter:
    """Turns raw input into exactly one ParsedCommand.

    The router never touches a store; applying the command is the caller's job.
    """

    def __init__(
        self,
        rules: tuple[IntentRule, ...] = COMMAND_RULES,
        fallback: Optional[IntentRule] = EVENT_FALLBACK_RULE,
    ):
        self.rules = rules
        self.fallback = fallback

    def route(
        self,
        raw_input: str,
        mode: Optional[str] = None,
        context: Optional[ParseContext] = None,
    ) -> ParsedCommand:
        text = raw_input.strip()
        if not text:
            return UnrecognizedCommand(text=raw_input)

        if normalize_mode(mode, text) == "ask":
            return AskCommand(prompt=text)

        context = context or ParseContext()
        for rule in self.rules:
            command = rule.apply(text, context)
            if command is not None:
                logger.debug("Rule %s matched %r", rule.name, text)
                return command

        if self.fallback is not None:
            command = self.fallback.apply(text, context)
            if command is not None:
                logger.debug("Fallback rule %s matched %r", self.fallback.name, text)
                return command

        logger.info("No rule matched input %r", text)
        return UnrecognizedCommand(text=text)


def route(
    raw_input: str,
    mode: Optional[str] = None,
    context: Optional[ParseContext] = None,
) -> ParsedCommand:
    return CommandRouter().route(raw_input, mode=mode, context=context)
