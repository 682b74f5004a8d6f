# leetdecode.py
# LeetDecode 1.x - Base Library
# Gibberish -> Human: remote decode with offline substitution fallback
#
# Pipeline:
#   1) POST {"text": ...} to the decode service, take "decoded" from the JSON reply
#   2) on any failure (transport, HTTP status, bad JSON) wait a short fixed delay
#      and run the offline substitution table over the input instead
#
# Extras:
#   generate_example() => 2..4 random words from the word bank
#   hackerify()        => randomly re-applies leet substitutions to plain text

from __future__ import annotations

import logging
import os
import random
import time
from dataclasses import dataclass, fields, replace
from types import MappingProxyType
from typing import Callable, Iterator, List, Mapping, Optional

import requests

_logger = logging.getLogger(__name__)


# ============================================================
# Settings (environment overrides: LEETDECODE_<FIELD>)
# ============================================================

ENV_PREFIX = "LEETDECODE_"

DEFAULT_ENDPOINT = (
    "https://00b7e511-6d2b-4efe-b3c1-ec16a6c35c48-00-1sq47ion88qnz.riker.replit.dev/api/decode"
)


@dataclass
class Settings:
    """Decoder configuration. Use from_env() to apply environment overrides."""

    ENDPOINT: str = DEFAULT_ENDPOINT
    TIMEOUT: float = 10.0  # seconds
    FALLBACK_DELAY_MS: int = 400
    LOG_LEVEL: str = "INFO"

    def __post_init__(self):
        if self.TIMEOUT <= 0:
            raise ValueError(f"TIMEOUT must be positive (got {self.TIMEOUT})")
        if self.FALLBACK_DELAY_MS < 0:
            raise ValueError(f"FALLBACK_DELAY_MS must be >= 0 (got {self.FALLBACK_DELAY_MS})")
        self.LOG_LEVEL = str(self.LOG_LEVEL).upper()
        if not isinstance(logging.getLevelName(self.LOG_LEVEL), int):
            raise ValueError(f"Unknown LOG_LEVEL {self.LOG_LEVEL!r}")

    @classmethod
    def from_env(cls, **overrides) -> "Settings":
        """
        Defaults < LEETDECODE_<FIELD> environment variables < explicit overrides.
        Unparseable values raise ValueError.
        """
        values = {}
        for f in fields(cls):
            env_value = os.getenv(ENV_PREFIX + f.name)
            if env_value is None:
                continue
            try:
                if f.type == "int":
                    values[f.name] = int(env_value)
                elif f.type == "float":
                    values[f.name] = float(env_value)
                else:
                    values[f.name] = env_value
            except ValueError:
                raise ValueError(f"Invalid value for {ENV_PREFIX}{f.name}: {env_value!r}") from None
        values.update(overrides)
        return cls(**values)


DEFAULT_SETTINGS = Settings.from_env()


# ============================================================
# Substitution tables + word bank
# ============================================================

DECODE_MAP: Mapping[str, str] = MappingProxyType({
    "0": "o",
    "1": "i",
    "3": "e",
    "4": "a",
    "6": "G",
})

HACK_MAP: Mapping[str, str] = MappingProxyType({
    "o": "0",
    "e": "3",
    "i": "1",
    "a": "4",
    "G": "6",
})

WORDS = (
    "c1b3r", "h4ck", "d4t4", "byt3", "crypt0",
    "z3r0", "m4tr1x", "n3t", "c0d3", "l0g1c",
    "f1r3", "n0d3", "l00p", "4lph4", "b3t4",
    "g4mm4", "d3lt4", "s1gm4", "pr0t0", "sh3ll",
)

EXAMPLE_MIN_WORDS = 2
EXAMPLE_MAX_WORDS = 4
HACK_PROBABILITY = 0.5

NO_RESPONSE = "No response"

SOURCE_REMOTE = "remote"
SOURCE_FALLBACK = "fallback"


def offline_decode(text: str) -> str:
    return "".join(DECODE_MAP.get(c, c) for c in text)


def generate_example(rng: Optional[random.Random] = None) -> str:
    """Returns 2..4 word-bank tokens joined by single spaces (repeats allowed)."""
    rng = rng or random
    count = rng.randint(EXAMPLE_MIN_WORDS, EXAMPLE_MAX_WORDS)
    return " ".join(rng.choice(WORDS) for _ in range(count))


def hackerify(text: str, rng: Optional[random.Random] = None) -> str:
    """
    Length-preserving: each char with a HACK_MAP entry is swapped
    with probability HACK_PROBABILITY, everything else is kept.
    """
    rng = rng or random
    out: List[str] = []
    for c in text:
        sub = HACK_MAP.get(c)
        if sub is not None and rng.random() < HACK_PROBABILITY:
            out.append(sub)
        else:
            out.append(c)
    return "".join(out)


# ============================================================
# Remote decode with offline fallback
# ============================================================

@dataclass(frozen=True)
class DecodeOutcome:
    value: str
    source: str  # SOURCE_REMOTE | SOURCE_FALLBACK

    @property
    def is_remote(self) -> bool:
        return self.source == SOURCE_REMOTE


def _request_decode(text: str, settings: Settings, http=None):
    """
    Single POST to the decode service.
    Returns the parsed JSON body on success, None on any failure (logged).
    A JSON null body counts as a failure.
    """
    poster = http.post if http is not None else requests.post
    headers = {
        "Content-Type": "application/json",
        "Accept": "*/*",
    }
    _logger.debug("POST %s (%d chars)", settings.ENDPOINT, len(text))
    try:
        r = poster(settings.ENDPOINT, headers=headers, json={"text": text}, timeout=settings.TIMEOUT)
        r.raise_for_status()
        # raise_for_status() lets unfollowed 1xx/3xx through
        if not 200 <= r.status_code < 300:
            raise requests.HTTPError(f"{r.status_code} is not a success status", response=r)
        data = r.json()
    except requests.JSONDecodeError as e:
        _logger.warning("Decode service sent malformed JSON, using offline table: %s", e)
        return None
    except requests.RequestException as e:
        _logger.warning("Decode service unavailable, using offline table: %s", e)
        return None
    except ValueError as e:
        _logger.warning("Decode service sent malformed JSON, using offline table: %s", e)
        return None

    if data is None:
        _logger.warning("Decode service sent a null body, using offline table")
    return data


def decode_outcome(text: str, settings: Optional[Settings] = None, http=None) -> Optional[DecodeOutcome]:
    """
    Decodes text remotely, falling back to offline_decode().
    Blank input is a no-op: returns None without touching the network.
    """
    if not text.strip():
        return None
    settings = settings or DEFAULT_SETTINGS

    data = _request_decode(text, settings, http)
    if data is not None:
        # non-object bodies have no "decoded" field
        decoded = data.get("decoded") if isinstance(data, dict) else None
        if not decoded:
            return DecodeOutcome(NO_RESPONSE, SOURCE_REMOTE)
        return DecodeOutcome(str(decoded), SOURCE_REMOTE)

    # fixed pause before showing the offline result
    if settings.FALLBACK_DELAY_MS:
        time.sleep(settings.FALLBACK_DELAY_MS / 1000.0)
    return DecodeOutcome(offline_decode(text), SOURCE_FALLBACK)


def decode(text: str, settings: Optional[Settings] = None, http=None) -> Optional[str]:
    outcome = decode_outcome(text, settings, http)
    return outcome.value if outcome is not None else None


# ============================================================
# Session state (input / output / loading) for the UI layer
# ============================================================

@dataclass(frozen=True)
class DecoderState:
    input: str = ""
    output: str = ""
    loading: bool = False


Listener = Callable[[DecoderState], None]


class DecoderSession:
    """
    The state a presentation layer renders: current input, current output
    and the loading flag. Every change is pushed to subscribed listeners.

    Overlapping decodes: only the most recently issued decode may write its
    result or clear the loading flag; results from older calls are dropped.
    """

    def __init__(self, settings: Optional[Settings] = None, http=None, rng: Optional[random.Random] = None):
        self.settings = settings or DEFAULT_SETTINGS
        self.http = http
        self.rng = rng
        self._state = DecoderState()
        self._listeners: List[Listener] = []
        self._issued = 0

    @property
    def state(self) -> DecoderState:
        return self._state

    @property
    def input(self) -> str:
        return self._state.input

    @property
    def output(self) -> str:
        return self._state.output

    @property
    def loading(self) -> bool:
        return self._state.loading

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set(self, **changes) -> DecoderState:
        self._state = replace(self._state, **changes)
        for listener in list(self._listeners):
            listener(self._state)
        return self._state

    def set_input(self, text: str) -> DecoderState:
        return self._set(input=text or "")

    def generate_example(self) -> DecoderState:
        return self.set_input(generate_example(self.rng))

    def hackerify(self) -> DecoderState:
        return self.set_input(hackerify(self.input, self.rng))

    def decode_steps(self, text: Optional[str] = None) -> Iterator[DecoderState]:
        """
        Yields the observable states of one decode:
        loading=True with cleared output, then loading=False with the result.
        Blank input yields nothing.
        """
        if text is not None:
            self.set_input(text)
        text = self.input
        if not text.strip():
            return

        self._issued += 1
        ticket = self._issued
        result = None
        try:
            yield self._set(loading=True, output="")
            result = decode(text, self.settings, self.http)
        finally:
            # also runs when the caller closes the generator mid-decode
            final = self._settle(ticket, result)
        yield final

    def _settle(self, ticket: int, result: Optional[str]) -> DecoderState:
        if ticket != self._issued:
            _logger.info("Dropping result of superseded decode #%d (latest is #%d)", ticket, self._issued)
            return self._state
        changes = {"loading": False}
        if result is not None:
            changes["output"] = result
        return self._set(**changes)

    def decode(self, text: Optional[str] = None) -> str:
        for _ in self.decode_steps(text):
            pass
        return self.output
